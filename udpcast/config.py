import dataclasses
import logging
import os
import typing

import yaml

import udpcast.constants
import udpcast.request


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "udpcast.yaml"


@dataclasses.dataclass
class BroadcastConfig:

	"""
	Defaults for the command line, read from YAML.
	"""

	address: str = udpcast.constants.DEFAULT_ADDRESS
	port: typing.Optional[int] = None
	timeout: typing.Optional[float] = None
	log_level: str = "INFO"


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> BroadcastConfig:

	"""
	Load configuration from a YAML file.

	A missing file is not an error: defaults are returned and a warning is
	logged. An empty file also yields defaults.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return BroadcastConfig()

	with open(config_path, 'r') as f:
		data = yaml.safe_load(f)

	if data is None:
		return BroadcastConfig()

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping, got {type(data).__name__}")

	known = {field.name for field in dataclasses.fields(BroadcastConfig)}
	unknown = sorted(set(data) - known)

	if unknown:
		raise ValueError(f"Unknown config keys in {config_path}: {', '.join(map(str, unknown))}")

	_check_values(data, config_path)

	config = BroadcastConfig(**data)
	config.log_level = config.log_level.upper()

	return config


def _check_values (data: typing.Dict[str, typing.Any], config_path: str) -> None:

	"""Raise ``ValueError`` for any value the command line could not use."""

	address = data.get("address", udpcast.constants.DEFAULT_ADDRESS)

	if not isinstance(address, str):
		raise ValueError(f"Config file {config_path}: address must be a string, got {address!r}")

	port = data.get("port")

	if port is not None and (not isinstance(port, int) or isinstance(port, bool)):
		raise ValueError(f"Config file {config_path}: port must be an integer, got {port!r}")

	try:
		udpcast.request.validate_timeout(data.get("timeout"))
	except (TypeError, ValueError) as exc:
		raise ValueError(f"Config file {config_path}: {exc}") from exc

	log_level = data.get("log_level", "INFO")

	if not isinstance(log_level, str) or log_level.upper() not in logging.getLevelNamesMapping():
		raise ValueError(f"Config file {config_path}: log_level must be a logging level name such as INFO or DEBUG, got {log_level!r}")
