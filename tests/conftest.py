import asyncio
import socket
import typing

import pytest


async def receive (sock: socket.socket, timeout: float = 2.0) -> bytes:

	"""Wait for one datagram on a non-blocking receiver socket."""

	loop = asyncio.get_running_loop()
	data, _ = await asyncio.wait_for(loop.sock_recvfrom(sock, 65535), timeout)

	return data


def receiver_port (sock: socket.socket) -> int:

	"""Return the port a receiver socket is bound to."""

	return sock.getsockname()[1]


@pytest.fixture
def receiver () -> typing.Iterator[socket.socket]:

	"""A non-blocking UDP socket bound to an ephemeral port on all interfaces."""

	sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
	sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
	sock.bind(("0.0.0.0", 0))
	sock.setblocking(False)

	yield sock

	sock.close()


@pytest.fixture
def created_sockets (monkeypatch: pytest.MonkeyPatch) -> typing.List[socket.socket]:

	"""
	Record every UDP socket opened after this fixture runs.

	Request it after ``receiver`` so the receiver is not recorded.
	"""

	created: typing.List[socket.socket] = []

	class _TrackingSocket (socket.socket):

		def __init__ (self, *args: typing.Any, **kwargs: typing.Any) -> None:
			super().__init__(*args, **kwargs)
			# socketpair() also goes through socket.socket, with extra arguments.
			if args == (socket.AF_INET, socket.SOCK_DGRAM) and not kwargs:
				created.append(self)

	monkeypatch.setattr("udpcast.broadcaster.socket.socket", _TrackingSocket)

	return created
