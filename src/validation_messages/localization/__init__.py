"""
Localization: catalogs, locale selection and message resolution.

Usage:
    from validation_messages.localization import create_localization_manager

    manager = create_localization_manager()
    await manager.load_locales(["en", "es"])
    manager.set_locale("es")
    manager.get_message("string.tooShort", {"min": 5})
"""

from .catalog import REQUIRED_GROUPS, ValidationResult, validate_catalog
from .errors import (
    InvalidCatalogError,
    InvalidLocaleCodeError,
    LocaleLoadError,
    LocalizationError,
    UnsupportedLocaleError,
)
from .locales import DEFAULT_LOCALE, LOCALE_NAMES, SUPPORTED_LOCALES, LocaleLoader
from .manager import (
    LocalizationManager,
    create_localization_manager,
    get_default_manager,
    reset_default_manager,
)
from .registry import CatalogRegistry
from .resolver import DEFAULT_ERROR_FORMAT, MessageResolver, interpolate
from .settings import LocaleSettings

__all__ = [
    "CatalogRegistry",
    "DEFAULT_ERROR_FORMAT",
    "DEFAULT_LOCALE",
    "InvalidCatalogError",
    "InvalidLocaleCodeError",
    "LOCALE_NAMES",
    "LocaleLoadError",
    "LocaleLoader",
    "LocaleSettings",
    "LocalizationError",
    "LocalizationManager",
    "MessageResolver",
    "REQUIRED_GROUPS",
    "SUPPORTED_LOCALES",
    "UnsupportedLocaleError",
    "ValidationResult",
    "create_localization_manager",
    "get_default_manager",
    "interpolate",
    "reset_default_manager",
    "validate_catalog",
]
