"""
Supported locales and their default catalog loaders.

Each supported locale maps to an async loader that reads the shipped YAML
catalog from package data. The loader table is the single source of the
supported set: a locale is supported iff it has a loader.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from importlib import resources
from typing import Any

import yaml

LocaleLoader = Callable[[], Awaitable[Mapping[str, Any]]]

DEFAULT_LOCALE = "en"

# Native display names, in loader-table order.
LOCALE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "it": "Italiano",
    "pt": "Português",
    "ru": "Русский",
    "zh": "中文",
    "ja": "日本語",
    "ko": "한국어",
}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(LOCALE_NAMES)

_CATALOG_PACKAGE = "validation_messages.localization.catalogs"


def read_catalog(locale: str) -> Any:
    """Read and decode the shipped catalog for ``locale``.

    Args:
        locale: Locale code (e.g. "es")

    Returns:
        Decoded YAML document (unvalidated)

    Raises:
        FileNotFoundError: If no catalog file ships for the locale
        yaml.YAMLError: If the file is not valid YAML
    """
    resource = resources.files(_CATALOG_PACKAGE).joinpath(f"{locale}.yaml")
    if not resource.is_file():
        raise FileNotFoundError(f"Catalog file not found: {locale}.yaml")
    with resource.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def package_loader(locale: str) -> LocaleLoader:
    """Build an async loader that reads ``locale`` off the event loop."""

    async def load() -> Any:
        return await asyncio.to_thread(read_catalog, locale)

    load.__qualname__ = f"package_loader.<{locale}>"
    return load


def default_loaders() -> dict[str, LocaleLoader]:
    """Return a fresh loader table for every shipped locale."""
    return {code: package_loader(code) for code in SUPPORTED_LOCALES}
