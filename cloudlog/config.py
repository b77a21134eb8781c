"""Formatter configuration from environment variables and an optional YAML file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_YAML_KEYS = frozenset({"project_id", "include_source_location", "local_time"})
_TRUTHY = frozenset({"true", "1", "yes", "on"})


class ConfigError(Exception):
    """Raised when a configuration file cannot be parsed."""


def _parse_bool(value: Any) -> bool:
    """YAML already yields bools; env vars arrive as text."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class FormatterConfig:
    project_id: str | None = None          # qualifies bare trace ids
    include_source_location: bool = True
    local_time: bool = False               # stamp entries in the local zone instead of UTC


def load_yaml_config(path: str | None) -> dict:
    """Read the YAML overlay for :func:`load_config`.

    No path, or a path that does not exist, gives an empty overlay.

    Raises:
        ConfigError: If the file is not valid YAML or is not a mapping.
    """
    if not path:
        return {}
    config_file = Path(path)
    if not config_file.is_file():
        logger.warning("Config file %s not found, using defaults", path)
        return {}

    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a mapping at the top of {path}, got {type(data).__name__}"
        )

    unknown = sorted(set(data) - _YAML_KEYS)
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(unknown))
    logger.debug("Read %d formatter setting(s) from %s", len(data), path)
    return data


def load_config(yaml_data: dict | None = None) -> FormatterConfig:
    """Build FormatterConfig from env vars, overridden by parsed YAML data."""
    overlay = yaml_data or {}

    def setting(key: str, env_name: str, default: str | None) -> Any:
        if key in overlay:
            return overlay[key]
        return os.environ.get(env_name, default)

    project_id = setting("project_id", "GOOGLE_CLOUD_PROJECT", None)
    return FormatterConfig(
        project_id=str(project_id) if project_id else None,
        include_source_location=_parse_bool(
            setting("include_source_location", "CLOUDLOG_SOURCE_LOCATION", "true")
        ),
        local_time=_parse_bool(setting("local_time", "CLOUDLOG_LOCAL_TIME", "false")),
    )
