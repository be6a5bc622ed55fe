import dataclasses
import math
import typing

import udpcast.constants
import udpcast.exceptions


Payload = typing.Union[bytes, bytearray, memoryview, str]

CompletionHandler = typing.Callable[[typing.Optional[udpcast.exceptions.BroadcastError], int], typing.Any]


def validate_port (port: typing.Any) -> int:

	"""
	Return ``port`` unchanged if it is an integer in [1-65535].

	Raises ``InvalidPortError`` otherwise. ``bool`` is rejected even though it
	is an ``int`` subclass.
	"""

	if not isinstance(port, int) or isinstance(port, bool):
		raise udpcast.exceptions.InvalidPortError(port)

	if port < udpcast.constants.MIN_PORT or port > udpcast.constants.MAX_PORT:
		raise udpcast.exceptions.InvalidPortError(port)

	return port


def validate_timeout (timeout: typing.Any) -> typing.Optional[float]:

	"""
	Return ``timeout`` unchanged if it is ``None`` or a non-negative number of seconds.

	Raises ``TypeError`` for non-numbers (``bool`` included) and ``ValueError``
	for negative values.
	"""

	if timeout is None:
		return None

	if not isinstance(timeout, (int, float)) or isinstance(timeout, bool):
		raise TypeError(f"Timeout must be a number of seconds or None, got {timeout!r}")

	if math.isnan(timeout) or timeout < 0:
		raise ValueError(f"Timeout must be zero or more seconds, got {timeout!r}")

	return timeout


def encode_payload (payload: Payload) -> bytes:

	"""
	Convert a payload to the exact bytes that go on the wire.

	Text is encoded as UTF-8; any bytes-like object is copied as-is.
	"""

	if isinstance(payload, str):
		return payload.encode("utf-8")

	return bytes(payload)


@dataclasses.dataclass(frozen=True)
class BroadcastRequest:

	"""
	A single broadcast: what to send, where, and who to tell when it is done.

	Construction validates the port, so an invalid request can never reach the
	network.
	"""

	payload: bytes
	port: int
	address: str = udpcast.constants.DEFAULT_ADDRESS
	callback: typing.Optional[CompletionHandler] = None


	def __post_init__ (self) -> None:

		validate_port(self.port)

		# Frozen dataclass, so normalise through object.__setattr__.
		object.__setattr__(self, "payload", encode_payload(self.payload))


	@classmethod
	def from_arguments (
		cls,
		payload: Payload,
		port: int,
		address: typing.Union[str, CompletionHandler, None] = None,
		callback: typing.Optional[CompletionHandler] = None
	) -> "BroadcastRequest":

		"""
		Collapse the supported call shapes into one request.

		- ``(payload, port)``
		- ``(payload, port, callback)``
		- ``(payload, port, address, callback)``

		The third argument is the address only when it is a ``str``. Anything
		else is taken as the completion handler and the address falls back to
		the limited broadcast address.
		"""

		# The port is the first thing checked, whatever else is wrong with the call.
		validate_port(port)

		if isinstance(address, str):
			target = address

		else:
			target = udpcast.constants.DEFAULT_ADDRESS

			if address is not None:

				if callback is not None:
					raise TypeError("Completion handler given twice (as the third and fourth argument)")

				callback = address

		if callback is not None and not callable(callback):
			raise TypeError(f"Completion handler must be callable, got {type(callback).__name__}")

		return cls(payload=payload, port=port, address=target, callback=callback)  # type: ignore[arg-type]


	@property
	def destination (self) -> typing.Tuple[str, int]:

		"""The ``(address, port)`` pair passed to ``sendto``."""

		return (self.address, self.port)


@dataclasses.dataclass(frozen=True)
class BroadcastResult:

	"""
	Terminal outcome of one broadcast.

	``bytes_sent`` is only meaningful when ``error`` is ``None``.
	"""

	error: typing.Optional[udpcast.exceptions.BroadcastError] = None
	bytes_sent: int = 0


	@property
	def ok (self) -> bool:

		"""True if the datagram was handed to the OS without error."""

		return self.error is None
