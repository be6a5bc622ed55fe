"""Network constants for udpcast."""

DEFAULT_ADDRESS = "255.255.255.255"
"""Limited broadcast address: every host on the local segment."""

BIND_ADDRESS = "0.0.0.0"
"""Local address the sending socket binds to (paired with port 0)."""

MIN_PORT = 1
MAX_PORT = 65535
