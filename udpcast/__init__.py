"""
udpcast - broadcast a payload to the local network over UDP/IPv4.

One call, one datagram::

    import udpcast

    udpcast.broadcast(b"ping", 4210)

The call validates the port, returns straight away, and does the network work
in the background: a fresh socket is bound to an ephemeral port, switched to
broadcast mode, used for a single ``sendto`` and closed. If you pass a
completion handler it is called once with ``(error, bytes_sent)``.

Call shapes:

- ``broadcast(payload, port)`` sends to ``255.255.255.255``.
- ``broadcast(payload, port, handler)`` - any non-string third argument is the
  handler.
- ``broadcast(payload, port, "192.168.1.255", handler)`` sends to an explicit
  address.

From a coroutine, ``await udpcast.broadcast_async(payload, port)`` returns the
byte count or raises.

There is no retry, framing, acknowledgement, multicast or IPv6 support.

Package-level exports: ``broadcast``, ``broadcast_async``, ``execute``,
``BroadcastRequest``, ``BroadcastResult``, ``BroadcastConfig``,
``load_config``, ``DEFAULT_ADDRESS`` and the error classes.
"""

import udpcast.broadcaster
import udpcast.config
import udpcast.constants
import udpcast.exceptions
import udpcast.request


broadcast = udpcast.broadcaster.broadcast
broadcast_async = udpcast.broadcaster.broadcast_async
execute = udpcast.broadcaster.execute

BroadcastRequest = udpcast.request.BroadcastRequest
BroadcastResult = udpcast.request.BroadcastResult

BroadcastConfig = udpcast.config.BroadcastConfig
load_config = udpcast.config.load_config

DEFAULT_ADDRESS = udpcast.constants.DEFAULT_ADDRESS

BroadcastError = udpcast.exceptions.BroadcastError
InvalidPortError = udpcast.exceptions.InvalidPortError
SocketError = udpcast.exceptions.SocketError
BindError = udpcast.exceptions.BindError
SendError = udpcast.exceptions.SendError
BroadcastTimeoutError = udpcast.exceptions.BroadcastTimeoutError
