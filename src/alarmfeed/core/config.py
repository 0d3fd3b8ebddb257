"""Configuration management for alarmfeed.

Handles TOML configuration loading from local and global paths,
with environment variable precedence over file values.
"""

from __future__ import annotations

import copy
import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from alarmfeed.core.errors import ConfigError

# Configuration file paths
LOCAL_CONFIG_PATH = Path(".alarmfeed/config")
GLOBAL_CONFIG_PATH = Path.home() / ".alarmfeed" / "config"

DEFAULT_FEED_URL = "http://podcast.daskoimladja.com/feed.xml"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "feed": {
        "url": DEFAULT_FEED_URL,
        "timeout": 30.0,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8080,
    },
    "logging": {
        "level": "INFO",
    },
}

# Environment variables and the (section, key) they override
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "ALARMFEED_FEED_URL": ("feed", "url"),
    "ALARMFEED_HOST": ("server", "host"),
    "ALARMFEED_PORT": ("server", "port"),
    "ALARMFEED_LOG_LEVEL": ("logging", "level"),
}

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class FeedConfig:
    """Feed source settings."""

    url: str = DEFAULT_FEED_URL
    timeout: float = 30.0


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"

    def get_level(self) -> int:
        """Return the numeric logging level."""
        return logging.getLevelName(self.level.upper())


@dataclass
class Config:
    """Main configuration container.

    Holds all configuration settings for alarmfeed, loaded from
    local and global config files with environment variable overrides.
    """

    feed: FeedConfig = field(default_factory=FeedConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load and parse a TOML configuration file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed configuration dictionary, empty if the file does not exist.

    Raises:
        ConfigError: If the file exists but cannot be parsed.
    """
    if not path.exists():
        return {}

    try:
        content = path.read_text()
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary.
        override: Dictionary with values that override base.

    Returns:
        Merged dictionary with override values taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(
    config_dict: dict[str, Any],
    environ: Mapping[str, str],
) -> dict[str, Any]:
    """Overlay environment variable values onto the configuration."""
    result = copy.deepcopy(config_dict)
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name, "")
        if not value:
            continue
        if env_name == "ALARMFEED_PORT":
            try:
                result[section][key] = int(value)
            except ValueError as e:
                raise ConfigError(f"{env_name} must be an integer, got {value!r}") from e
        else:
            result[section][key] = value
    return result


def _validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Args:
        config_dict: Configuration dictionary to validate.

    Raises:
        ConfigError: If configuration values are invalid.
    """
    for section in DEFAULT_CONFIG:
        if not isinstance(config_dict.get(section), dict):
            raise ConfigError(f"[{section}] must be a table")

    feed_config = config_dict.get("feed", {})
    url = feed_config.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ConfigError("feed.url must be a non-empty string")

    timeout = feed_config.get("timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"feed.timeout must be a positive number, got {timeout!r}")

    server_config = config_dict.get("server", {})
    if not isinstance(server_config.get("host"), str):
        raise ConfigError("server.host must be a string")

    port = server_config.get("port")
    if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
        raise ConfigError(f"server.port must be an integer between 0 and 65535, got {port!r}")

    level = config_dict.get("logging", {}).get("level")
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid logging level {level!r}. "
            f"Valid options: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )


def _dict_to_config(config_dict: dict[str, Any]) -> Config:
    """Convert configuration dictionary to Config dataclass.

    Args:
        config_dict: Configuration dictionary.

    Returns:
        Config object with values from dictionary.
    """
    feed_dict = config_dict.get("feed", {})
    server_dict = config_dict.get("server", {})
    logging_dict = config_dict.get("logging", {})

    return Config(
        feed=FeedConfig(
            url=feed_dict["url"].strip(),
            timeout=float(feed_dict["timeout"]),
        ),
        server=ServerConfig(
            host=server_dict["host"],
            port=server_dict["port"],
        ),
        logging=LoggingConfig(
            level=logging_dict["level"].upper(),
        ),
    )


def load_config(
    local_path: Path | None = None,
    global_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration from local and global config files.

    Configuration priority (highest to lowest):
    1. Environment variables (ALARMFEED_FEED_URL, ALARMFEED_HOST, ...)
    2. Local config file (.alarmfeed/config in current directory)
    3. Global config file ($HOME/.alarmfeed/config)
    4. Default values

    Args:
        local_path: Override path for local config file.
        global_path: Override path for global config file.
        environ: Override for the process environment.

    Returns:
        Config object with merged configuration values.

    Raises:
        ConfigError: If configuration files or values are invalid.
    """
    local_path = local_path or LOCAL_CONFIG_PATH
    global_path = global_path or GLOBAL_CONFIG_PATH
    environ = os.environ if environ is None else environ

    merged_config = copy.deepcopy(DEFAULT_CONFIG)

    global_config = _load_toml_file(global_path)
    if global_config:
        merged_config = _deep_merge(merged_config, global_config)

    local_config = _load_toml_file(local_path)
    if local_config:
        merged_config = _deep_merge(merged_config, local_config)

    merged_config = _apply_env_overrides(merged_config, environ)

    _validate_config(merged_config)

    return _dict_to_config(merged_config)

