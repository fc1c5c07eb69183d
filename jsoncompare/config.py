"""Configuration loading for jsoncompare."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

from .exceptions import ConfigError
from .models import LogLevel

DEFAULT_TEMPLATES_PATH = "~/.jsoncompare/templates.yaml"


@dataclass
class CompareConfig:
    """Settings shared by the command line and the compare session."""
    excluded_fields: list[str] = field(default_factory=list)
    indent: int = 2
    templates_path: str = DEFAULT_TEMPLATES_PATH
    log_level: LogLevel = LogLevel.WARN

    @property
    def logging_level(self) -> int:
        if self.log_level == LogLevel.WARN:
            return logging.WARNING
        return getattr(logging, self.log_level.value)

    @classmethod
    def from_dict(cls, data: dict) -> 'CompareConfig':
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError("Unknown configuration keys", {"keys": unknown})

        config = cls()

        if "excluded_fields" in data:
            excluded = data["excluded_fields"] or []
            if not isinstance(excluded, list) or not all(isinstance(f, str) for f in excluded):
                raise ConfigError(
                    "excluded_fields must be a list of strings",
                    {"value": excluded}
                )
            config.excluded_fields = list(excluded)

        if "indent" in data:
            indent = data["indent"]
            if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
                raise ConfigError("indent must be a non-negative integer", {"value": indent})
            config.indent = indent

        if "templates_path" in data:
            if not isinstance(data["templates_path"], str):
                raise ConfigError(
                    "templates_path must be a string",
                    {"value": data["templates_path"]}
                )
            config.templates_path = data["templates_path"]

        if "log_level" in data:
            try:
                config.log_level = LogLevel(str(data["log_level"]).upper())
            except ValueError as e:
                raise ConfigError(
                    f"Invalid log_level: {data['log_level']}",
                    {"allowed": [level.value for level in LogLevel]}
                ) from e

        return config


def load_config(path: Optional[str | Path] = None) -> CompareConfig:
    """
    Load configuration from a YAML (or JSON) file.

    Args:
        path: Config file location; None or a missing file gives defaults

    Returns:
        CompareConfig

    Raises:
        ConfigError: if the file cannot be parsed or holds invalid settings
    """
    if path is None:
        return CompareConfig()

    config_path = Path(path).expanduser()
    if not config_path.exists():
        return CompareConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config file: {e}", {"path": str(config_path)}) from e

    if data is None:
        return CompareConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping", {"path": str(config_path)})

    return CompareConfig.from_dict(data)
