"""Configuration loading for text-to-svg-path.

Settings come from a YAML file and can be overridden through environment
variables:

    T2SP_CONFIG     path of the YAML file
    T2SP_TIMEOUT    fetch timeout in seconds (0 or "none" disables it)
    T2SP_MAX_SIZE   maximum font download size in bytes
    T2SP_JOBS       font groups resolved in parallel in batch mode
    T2SP_LOG_LEVEL  log level used by the CLI
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from text_to_svg_path.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path("~/.config/text-to-svg-path/config.yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FetchSettings:
    """Font download settings."""

    # None blocks until the transport gives up
    timeout: float | None = None
    max_size: int = 50 * 1024 * 1024
    user_agent: str = "text-to-svg-path/0.1.0"


@dataclass
class Config:
    """Library and CLI configuration."""

    fetch: FetchSettings = field(default_factory=FetchSettings)
    jobs: int = 4
    log_level: str = "WARNING"

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Load configuration from YAML and the environment.

        Args:
            path: Explicit config file. When omitted, ``$T2SP_CONFIG`` and
                then the default location are tried; a missing default file
                is not an error.

        Returns:
            The resolved configuration.

        Raises:
            ConfigError: If the file or an override holds invalid values.
        """
        data: dict[str, Any] = {}
        config_path = path
        if config_path is None and os.environ.get("T2SP_CONFIG"):
            config_path = Path(os.environ["T2SP_CONFIG"])
        if config_path is not None:
            if not config_path.exists():
                raise ConfigError(f"Config file not found: {config_path}")
            data = _read_yaml(config_path)
        else:
            default_path = DEFAULT_CONFIG_PATH.expanduser()
            if default_path.exists():
                data = _read_yaml(default_path)

        config = cls.from_dict(data)
        config._apply_env(os.environ)
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        known = {"fetch", "jobs", "log_level"}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

        fetch_data = data.get("fetch") or {}
        if not isinstance(fetch_data, dict):
            raise ConfigError("fetch: expected a mapping")
        unknown = set(fetch_data) - {"timeout", "max_size", "user_agent"}
        if unknown:
            raise ConfigError(
                f"unknown fetch keys: {', '.join(sorted(unknown))}"
            )

        fetch = FetchSettings()
        if "timeout" in fetch_data:
            fetch.timeout = _timeout(fetch_data["timeout"], "fetch.timeout")
        if "max_size" in fetch_data:
            fetch.max_size = _positive_int(fetch_data["max_size"], "fetch.max_size")
        if "user_agent" in fetch_data:
            if not isinstance(fetch_data["user_agent"], str):
                raise ConfigError("fetch.user_agent: expected string")
            fetch.user_agent = fetch_data["user_agent"]

        config = cls(fetch=fetch)
        if "jobs" in data:
            config.jobs = _positive_int(data["jobs"], "jobs")
        if "log_level" in data:
            config.log_level = _log_level(data["log_level"], "log_level")
        return config

    def _apply_env(self, environ: Any) -> None:
        if "T2SP_TIMEOUT" in environ:
            self.fetch.timeout = _timeout(environ["T2SP_TIMEOUT"], "T2SP_TIMEOUT")
        if "T2SP_MAX_SIZE" in environ:
            self.fetch.max_size = _positive_int(
                environ["T2SP_MAX_SIZE"], "T2SP_MAX_SIZE"
            )
        if "T2SP_JOBS" in environ:
            self.jobs = _positive_int(environ["T2SP_JOBS"], "T2SP_JOBS")
        if "T2SP_LOG_LEVEL" in environ:
            self.log_level = _log_level(environ["T2SP_LOG_LEVEL"], "T2SP_LOG_LEVEL")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    return data


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name}: expected integer, got bool")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name}: expected integer, got {value!r}") from e
    if number < 1:
        raise ConfigError(f"{name}: must be at least 1")
    return number


def _timeout(value: Any, name: str) -> float | None:
    if value is None or (isinstance(value, str) and value.lower() == "none"):
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{name}: expected number, got bool")
    try:
        seconds = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name}: expected number, got {value!r}") from e
    if seconds < 0:
        raise ConfigError(f"{name}: must not be negative")
    return seconds or None


def _log_level(value: Any, name: str) -> str:
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"{name}: must be one of {', '.join(LOG_LEVELS)}")
    return level
