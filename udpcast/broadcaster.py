"""Fire-and-forget UDP/IPv4 broadcast.

Each call gets its own socket, bound to an OS-assigned ephemeral port, with
``SO_BROADCAST`` enabled. The payload goes out as a single datagram, the socket
is closed, and then the optional completion handler is called once with
``(error, bytes_sent)``.

Usage::

    import udpcast

    udpcast.broadcast(b"hello", 4210)
    udpcast.broadcast(b"hello", 4210, lambda error, sent: print(error, sent))
    udpcast.broadcast(b"hello", 4210, "192.168.1.255", on_done)

    # Inside a coroutine
    sent = await udpcast.broadcast_async(b"hello", 4210)

Only the port (and the optional timeout) is checked up front. A bad address
or an oversized payload surfaces as a ``SendError`` from the operating system.
Hostnames are resolved in the event loop's executor, never on the loop thread.
"""

import asyncio
import concurrent.futures
import inspect
import logging
import socket
import threading
import typing

import udpcast.constants
import udpcast.exceptions
import udpcast.request


logger = logging.getLogger(__name__)

# Strong references to scheduled tasks; the event loop only keeps weak ones.
_pending_tasks: typing.Set["asyncio.Task[udpcast.request.BroadcastResult]"] = set()


async def _resolve_and_send (sock: socket.socket, request: udpcast.request.BroadcastRequest) -> int:

	"""
	Resolve the destination in the loop's executor, then send one datagram.

	``sock_sendto`` expects a resolved address; handing it a hostname would run a
	blocking lookup on the event loop thread.
	"""

	loop = asyncio.get_running_loop()

	infos = await loop.getaddrinfo(request.address, request.port, family=socket.AF_INET, type=socket.SOCK_DGRAM)

	return await loop.sock_sendto(sock, request.payload, infos[0][4])


async def _transmit (request: udpcast.request.BroadcastRequest, timeout: typing.Optional[float]) -> int:

	"""Run the socket lifecycle for one request and return the bytes sent."""

	try:
		sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
	except OSError as exc:
		raise udpcast.exceptions.SocketError(f"Could not create UDP socket: {exc}", exc.errno) from exc

	with sock:

		sock.setblocking(False)

		try:
			sock.bind((udpcast.constants.BIND_ADDRESS, 0))
		except OSError as exc:
			raise udpcast.exceptions.BindError(f"Could not bind broadcast socket: {exc}", exc.errno) from exc

		try:
			sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
		except OSError as exc:
			raise udpcast.exceptions.SocketError(f"Could not enable SO_BROADCAST: {exc}", exc.errno) from exc

		logger.debug(f"Broadcast socket bound to {sock.getsockname()}, sending {len(request.payload)} bytes to {request.address}:{request.port}")

		try:
			return await asyncio.wait_for(_resolve_and_send(sock, request), timeout)

		# TimeoutError is an OSError subclass, so it has to be caught first.
		except TimeoutError as exc:
			raise udpcast.exceptions.BroadcastTimeoutError(f"Send to {request.address}:{request.port} timed out after {timeout}s") from exc

		except (OSError, UnicodeError) as exc:
			raise udpcast.exceptions.SendError(f"Could not send to {request.address}:{request.port}: {exc}", getattr(exc, "errno", None)) from exc


async def _notify (request: udpcast.request.BroadcastRequest, result: udpcast.request.BroadcastResult) -> None:

	"""Call the completion handler, awaiting it if it returns an awaitable."""

	if request.callback is None:

		if result.error is not None:
			logger.debug(f"No completion handler, discarding: {result.error}")

		return

	try:
		outcome = request.callback(result.error, result.bytes_sent)

		if inspect.isawaitable(outcome):
			await outcome

	except Exception:
		logger.exception(f"Completion handler for {request.address}:{request.port} raised")


async def execute (
	request: udpcast.request.BroadcastRequest,
	timeout: typing.Optional[float] = None
) -> udpcast.request.BroadcastResult:

	"""
	Send one request and report the outcome.

	Socket errors are captured on the returned ``BroadcastResult`` and passed to
	the request's completion handler; they are never raised. The socket is
	always closed before the handler runs.
	"""

	try:
		bytes_sent = await _transmit(request, timeout)

	except udpcast.exceptions.SocketError as exc:
		logger.debug(f"Broadcast to {request.address}:{request.port} failed: {exc}")
		result = udpcast.request.BroadcastResult(error=exc)

	else:
		logger.debug(f"Sent {bytes_sent} bytes to {request.address}:{request.port}")
		result = udpcast.request.BroadcastResult(bytes_sent=bytes_sent)

	await _notify(request, result)

	return result


def _run_in_thread (
	request: udpcast.request.BroadcastRequest,
	timeout: typing.Optional[float]
) -> "concurrent.futures.Future[udpcast.request.BroadcastResult]":

	"""Run ``execute`` on a private event loop in a worker thread."""

	future: "concurrent.futures.Future[udpcast.request.BroadcastResult]" = concurrent.futures.Future()

	def run () -> None:

		if not future.set_running_or_notify_cancel():
			return

		try:
			future.set_result(asyncio.run(execute(request, timeout)))
		except Exception as exc:
			future.set_exception(exc)

	# Not a daemon: a broadcast issued just before exit still gets sent.
	thread = threading.Thread(target=run, name=f"udpcast-{request.address}:{request.port}")
	thread.start()

	return future


def broadcast (
	payload: udpcast.request.Payload,
	port: int,
	address: typing.Union[str, udpcast.request.CompletionHandler, None] = None,
	callback: typing.Optional[udpcast.request.CompletionHandler] = None,
	timeout: typing.Optional[float] = None
) -> typing.Union["asyncio.Task[udpcast.request.BroadcastResult]", "concurrent.futures.Future[udpcast.request.BroadcastResult]"]:

	"""
	Broadcast ``payload`` as one UDP datagram to ``address:port``.

	Parameters:
		payload: Bytes to send. ``str`` is encoded as UTF-8.
		port: Destination port, 1-65535.
		address: Destination IPv4 address (default ``255.255.255.255``). If this
			is not a ``str`` it is treated as the completion handler instead.
		callback: Called once with ``(error, bytes_sent)`` after the socket is
			closed. May be a coroutine function.
		timeout: Optional limit in seconds on the send. ``None`` waits forever.

	Returns:
		An ``asyncio.Task`` when called from a running event loop, otherwise a
		``concurrent.futures.Future``. Both resolve to a ``BroadcastResult`` and
		never to an exception, so the return value may be ignored.

	Raises:
		InvalidPortError: ``port`` is not an integer in [1-65535]. Nothing is
			opened or scheduled.
		TypeError: the completion handler is not callable, or was given twice,
			or ``timeout`` is not a number.
		ValueError: ``timeout`` is negative.
	"""

	request = udpcast.request.BroadcastRequest.from_arguments(payload, port, address, callback)
	udpcast.request.validate_timeout(timeout)

	try:
		loop = asyncio.get_running_loop()
	except RuntimeError:
		return _run_in_thread(request, timeout)

	task = loop.create_task(execute(request, timeout), name=f"udpcast-{request.address}:{request.port}")
	_pending_tasks.add(task)
	task.add_done_callback(_pending_tasks.discard)

	return task


async def broadcast_async (
	payload: udpcast.request.Payload,
	port: int,
	address: str = udpcast.constants.DEFAULT_ADDRESS,
	timeout: typing.Optional[float] = None
) -> int:

	"""
	Broadcast and wait, returning the number of bytes sent.

	Unlike ``broadcast()``, socket failures are raised as ``BindError``,
	``SendError`` or ``SocketError``.
	"""

	request = udpcast.request.BroadcastRequest(payload=payload, port=port, address=address)  # type: ignore[arg-type]
	udpcast.request.validate_timeout(timeout)
	result = await execute(request, timeout)

	if result.error is not None:
		raise result.error

	return result.bytes_sent
