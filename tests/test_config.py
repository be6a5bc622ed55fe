import logging
import pathlib

import pytest

import udpcast.config


def test_missing_file_returns_defaults (tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:

	"""A missing config file logs a warning and falls back to defaults."""

	with caplog.at_level(logging.WARNING, logger="udpcast.config"):
		config = udpcast.config.load_config(str(tmp_path / "absent.yaml"))

	assert config == udpcast.config.BroadcastConfig()
	assert config.address == "255.255.255.255"
	assert config.port is None
	assert "not found" in caplog.text


def test_values_loaded_from_yaml (tmp_path: pathlib.Path) -> None:

	path = tmp_path / "udpcast.yaml"
	path.write_text("address: 192.168.1.255\nport: 4210\ntimeout: 2.5\nlog_level: DEBUG\n")

	config = udpcast.config.load_config(str(path))

	assert config.address == "192.168.1.255"
	assert config.port == 4210
	assert config.timeout == 2.5
	assert config.log_level == "DEBUG"


def test_partial_file_keeps_other_defaults (tmp_path: pathlib.Path) -> None:

	path = tmp_path / "udpcast.yaml"
	path.write_text("port: 9999\n")

	config = udpcast.config.load_config(str(path))

	assert config.port == 9999
	assert config.address == "255.255.255.255"
	assert config.timeout is None


def test_empty_file_returns_defaults (tmp_path: pathlib.Path) -> None:

	path = tmp_path / "udpcast.yaml"
	path.write_text("")

	assert udpcast.config.load_config(str(path)) == udpcast.config.BroadcastConfig()


def test_unknown_keys_rejected (tmp_path: pathlib.Path) -> None:

	path = tmp_path / "udpcast.yaml"
	path.write_text("port: 9999\nretries: 3\n")

	with pytest.raises(ValueError, match="retries"):
		udpcast.config.load_config(str(path))


def test_non_mapping_rejected (tmp_path: pathlib.Path) -> None:

	path = tmp_path / "udpcast.yaml"
	path.write_text("- 1\n- 2\n")

	with pytest.raises(ValueError, match="mapping"):
		udpcast.config.load_config(str(path))


def test_log_level_is_upper_cased (tmp_path: pathlib.Path) -> None:

	path = tmp_path / "udpcast.yaml"
	path.write_text("log_level: debug\n")

	assert udpcast.config.load_config(str(path)).log_level == "DEBUG"


@pytest.mark.parametrize("content, key", [
	("log_level: 10\n", "log_level"),
	("log_level: LOUD\n", "log_level"),
	("timeout: fast\n", "number of seconds"),
	("timeout: -1\n", "zero or more"),
	("port: \"80\"\n", "port"),
	("port: true\n", "port"),
	("address: 5\n", "address"),
])
def test_wrongly_typed_values_rejected (tmp_path: pathlib.Path, content: str, key: str) -> None:

	"""Values the command line could not use are a ValueError naming the problem."""

	path = tmp_path / "udpcast.yaml"
	path.write_text(content)

	with pytest.raises(ValueError, match=key):
		udpcast.config.load_config(str(path))
