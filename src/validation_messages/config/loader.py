"""
Configuration loading: defaults, YAML file, environment, explicit overrides.

Each layer is merged recursively over the previous one, so a later layer
only replaces the leaves it sets. Pydantic supplies the defaults and
validates the result.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from .schema import AppConfig

ENV_PREFIX = "VALIDATION_MESSAGES_"

# Environment variable suffix → (section, field)
_ENV_FIELDS: dict[str, tuple[str, str]] = {
    "LOCALE": ("localization", "locale"),
    "FALLBACK_LOCALE": ("localization", "fallback_locale"),
    "PRELOAD": ("localization", "preload"),
    "LOG_LEVEL": ("logging", "level"),
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value in ``override``
    replaces the one in ``base``. Neither argument is modified.

    Example:
        >>> deep_merge({"localization": {"locale": "en", "preload": ["en"]}},
        ...            {"localization": {"locale": "es"}})
        {'localization': {'locale': 'es', 'preload': ['en']}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml_config(config_path: Path | None) -> dict[str, Any]:
    """Read the YAML configuration file.

    An empty file yields an empty dict.

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    if config_path is None:
        return {}
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def load_env_overrides() -> dict[str, Any]:
    """Collect ``VALIDATION_MESSAGES_*`` variables as a nested dict.

    Recognized: LOCALE, FALLBACK_LOCALE, PRELOAD (comma-separated) and
    LOG_LEVEL. Unset or empty variables are skipped.
    """
    overrides: dict[str, Any] = {}
    for suffix, (section, field) in _ENV_FIELDS.items():
        value = os.environ.get(ENV_PREFIX + suffix)
        if value:
            overrides.setdefault(section, {})[field] = value
    return overrides


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Build the validated configuration.

    Args:
        config_path: Optional YAML file
        overrides: Nested dict applied last, e.g. from the host's own settings

    Raises:
        FileNotFoundError: If config_path does not exist
        pydantic.ValidationError: If the merged configuration is invalid
    """
    merged: dict[str, Any] = {}
    for layer in (load_yaml_config(config_path), load_env_overrides(), overrides or {}):
        merged = deep_merge(merged, layer)
    return AppConfig.model_validate(merged)
