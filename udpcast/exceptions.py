"""Errors raised or reported by a broadcast.

``InvalidPortError`` is raised synchronously before any socket exists. The
``SocketError`` family is never raised out of ``broadcast()``; it is handed to
the completion handler and stored on the ``BroadcastResult`` instead.
"""

import typing

import udpcast.constants


class BroadcastError (Exception):

	"""Base class for every udpcast error."""


class InvalidPortError (BroadcastError, ValueError):

	"""The destination port is not an integer in [1-65535]."""

	def __init__ (self, port: typing.Any) -> None:

		self.port = port

		if isinstance(port, int) and not isinstance(port, bool):
			message = f"Port value is out of range. Should be in range [{udpcast.constants.MIN_PORT}-{udpcast.constants.MAX_PORT}]."
		else:
			message = f"Port must be an integer, got {port!r}"

		super().__init__(message)


class SocketError (BroadcastError):

	"""
	The operating system rejected a socket operation.

	The originating ``OSError`` is chained as ``__cause__`` and its ``errno`` is
	copied here for convenience.
	"""

	def __init__ (self, message: str, errno: typing.Optional[int] = None) -> None:

		super().__init__(message)
		self.errno = errno


class BindError (SocketError):

	"""The ephemeral sending socket could not be bound."""


class SendError (SocketError):

	"""The datagram could not be transmitted."""


class BroadcastTimeoutError (SendError):

	"""The send did not complete within the requested timeout."""
