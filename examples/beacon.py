"""Announce this host on the LAN once a second until interrupted.

Run a listener in another terminal to watch the beacons arrive::

    python -c "import socket; s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM); s.bind(('', 4210)); print(s.recvfrom(1024))"
"""

import asyncio
import json
import logging
import socket
import time

import udpcast

logging.basicConfig(level=logging.INFO)

BEACON_PORT = 4210
INTERVAL = 1.0


def on_sent (error, bytes_sent):

	if error is not None:
		logging.warning(f"Beacon not sent: {error}")
	else:
		logging.info(f"Beacon sent ({bytes_sent} bytes)")


async def main ():

	sequence = 0

	while True:
		beacon = json.dumps({"host": socket.gethostname(), "seq": sequence, "time": time.time()})

		# Fire and forget; the handler reports the outcome.
		udpcast.broadcast(beacon, BEACON_PORT, on_sent)

		sequence += 1
		await asyncio.sleep(INTERVAL)


if __name__ == "__main__":
	try:
		asyncio.run(main())
	except KeyboardInterrupt:
		pass
