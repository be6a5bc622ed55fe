import asyncio
import logging

import udpcast

logging.basicConfig(level=logging.DEBUG)

# Directed broadcast to one /24 instead of 255.255.255.255.
SUBNET_BROADCAST = "192.168.1.255"
PORT = 9999


async def main ():

	try:
		sent = await udpcast.broadcast_async(b"HELLO", PORT, SUBNET_BROADCAST, timeout=2.0)
		logging.info(f"Sent {sent} bytes to {SUBNET_BROADCAST}:{PORT}")
	except udpcast.SocketError as exc:
		logging.error(f"Announcement failed (errno {exc.errno}): {exc}")


if __name__ == "__main__":
	asyncio.run(main())
