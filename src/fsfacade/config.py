"""Configuration loading utilities for the file operations facade."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import yaml  # type: ignore


logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


@dataclass
class WatchConfig:
    """Options describing how the change watcher polls."""

    poll_interval: float = 0.5
    recursive: bool = True
    include_patterns: List[str] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging defaults applied by the command-line entry point."""

    level: str = "INFO"


@dataclass
class AppConfig:
    """Top-level configuration structure."""

    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: Optional[Path]) -> AppConfig:
    """Load and validate the YAML configuration file.

    ``None`` yields the defaults; an explicit path that does not exist is an
    error.
    """

    if path is None:
        return AppConfig()

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML configuration: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    watch_cfg = _parse_watch_config(data.get("watch"))
    logging_cfg = _parse_logging_config(data.get("logging"))
    logger.debug("Loaded configuration from %s", path)

    return AppConfig(watch=watch_cfg, logging=logging_cfg)


def _parse_watch_config(raw: Any) -> WatchConfig:
    if raw is None:
        return WatchConfig()
    if not isinstance(raw, dict):
        raise ConfigError("'watch' section must be a mapping")

    poll_interval = raw.get("poll_interval", 0.5)
    if isinstance(poll_interval, bool):
        raise ConfigError("watch.poll_interval must be numeric")
    try:
        poll_interval_val = float(poll_interval)
    except (TypeError, ValueError) as exc:
        raise ConfigError("watch.poll_interval must be numeric") from exc
    if poll_interval_val <= 0:
        raise ConfigError("watch.poll_interval must be positive")

    recursive_flag = raw.get("recursive", True)
    if not isinstance(recursive_flag, bool):
        raise ConfigError("watch.recursive must be a boolean")

    include_patterns = _ensure_str_list(raw.get("include_patterns", []), "watch.include_patterns")
    exclude_patterns = _ensure_str_list(raw.get("exclude_patterns", []), "watch.exclude_patterns")

    return WatchConfig(
        poll_interval=poll_interval_val,
        recursive=recursive_flag,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
    )


def _parse_logging_config(raw: Any) -> LoggingConfig:
    if raw is None:
        return LoggingConfig()
    if not isinstance(raw, dict):
        raise ConfigError("'logging' section must be a mapping")

    level = raw.get("level", "INFO")
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        allowed = ", ".join(_LOG_LEVELS)
        raise ConfigError(f"logging.level must be one of: {allowed}")
    return LoggingConfig(level=level.upper())


def _ensure_str_list(value: Any, field_name: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"{field_name} must be a list of strings")
    items: List[str] = []
    for elem in value:
        if not isinstance(elem, str):
            raise ConfigError(f"{field_name} must contain only strings")
        items.append(elem)
    return items
