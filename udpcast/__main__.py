"""Command line broadcaster.

Usage::

    python -m udpcast "hello" --port 4210
    python -m udpcast "hello" --port 4210 --address 192.168.1.255
    python -m udpcast "hello" --config udpcast.yaml --verbose

Defaults for ``--port``, ``--address`` and ``--timeout`` come from the YAML
config file (``udpcast.yaml`` in the working directory, if present).
"""

import argparse
import logging
import os
import sys
import typing

import udpcast.broadcaster
import udpcast.config


logger = logging.getLogger(__name__)


def _build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="udpcast", description="Broadcast a message as a single UDP datagram")
	parser.add_argument("message", help="Text to send (UTF-8)")
	parser.add_argument("--port", type=int, help="Destination port (default: from config)")
	parser.add_argument("--address", help="Destination IPv4 address (default: from config, else 255.255.255.255)")
	parser.add_argument("--timeout", type=float, help="Give up on the send after this many seconds")
	parser.add_argument("--config", help=f"YAML config file (default: {udpcast.config.DEFAULT_CONFIG_PATH} if present)")
	parser.add_argument("--verbose", action="store_true", help="Log every step at DEBUG level")

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point. Returns the process exit status.
	"""

	parser = _build_parser()
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	if args.config is not None or os.path.exists(udpcast.config.DEFAULT_CONFIG_PATH):
		try:
			config = udpcast.config.load_config(args.config or udpcast.config.DEFAULT_CONFIG_PATH)
		except ValueError as exc:
			parser.error(str(exc))
	else:
		config = udpcast.config.BroadcastConfig()

	if not args.verbose:
		logging.getLogger().setLevel(config.log_level.upper())

	port = args.port if args.port is not None else config.port
	address = args.address if args.address is not None else config.address
	timeout = args.timeout if args.timeout is not None else config.timeout

	if port is None:
		parser.error("no port given (use --port or set 'port' in the config file)")

	try:
		future = udpcast.broadcaster.broadcast(args.message, port, address, timeout=timeout)
	# InvalidPortError is a ValueError, as is a negative timeout.
	except ValueError as exc:
		parser.error(str(exc))

	result = future.result()

	if result.error is not None:
		logger.error(f"Broadcast failed: {result.error}")
		return 1

	logger.info(f"Sent {result.bytes_sent} bytes to {address}:{port}")

	return 0


if __name__ == "__main__":
	sys.exit(main())
