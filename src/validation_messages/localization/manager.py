"""
LocalizationManager: one independent localization context.

Bundles a catalog registry, locale settings and a resolver behind a single
object. Create as many as needed with ``create_localization_manager()``;
a lazily built default instance backs the module-level convenience API.
"""

import threading
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from .locales import DEFAULT_LOCALE, LocaleLoader, read_catalog
from .registry import CatalogRegistry
from .resolver import DEFAULT_ERROR_FORMAT, MessageResolver
from .settings import LocaleSettings

logger = structlog.get_logger()


class LocalizationManager:
    """Loads catalogs, tracks the active locales and resolves messages.

    Usage:
        manager = create_localization_manager()
        await manager.load_locales(["en", "es"])
        manager.set_locale("es")
        manager.get_message("string.tooShort", {"min": 5})
    """

    def __init__(
        self,
        loaders: Mapping[str, LocaleLoader] | None = None,
        default_locale: str = DEFAULT_LOCALE,
        error_format: str = DEFAULT_ERROR_FORMAT,
    ) -> None:
        self.registry = CatalogRegistry(loaders)
        self.settings = LocaleSettings(self.registry.supported, default_locale)
        self.resolver = MessageResolver(self.registry, self.settings, error_format)

    # -- Loading --------------------------------------------------------------

    async def load_locale(self, locale: str) -> None:
        await self.registry.load_locale(locale)

    async def load_locales(self, locales: Iterable[str]) -> None:
        await self.registry.load_locales(locales)

    async def ensure_locale_loaded(self, locale: str) -> None:
        await self.registry.ensure_locale_loaded(locale)

    def register_messages(self, catalog: Mapping[str, Any]) -> None:
        self.registry.register_messages(catalog)

    # -- Locale configuration -------------------------------------------------

    def set_locale(self, locale: str) -> None:
        self.settings.set_locale(locale)

    def get_locale(self) -> str:
        return self.settings.locale

    def set_fallback_locale(self, locale: str) -> None:
        self.settings.set_fallback_locale(locale)

    def get_fallback_locale(self) -> str:
        return self.settings.fallback_locale

    def get_supported_locales(self) -> list[str]:
        return self.registry.supported()

    def get_available_locales(self) -> list[str]:
        return self.registry.available()

    def has_locale(self, locale: str) -> bool:
        return self.registry.has(locale)

    # -- Resolution -----------------------------------------------------------

    def get_message(
        self,
        key: str,
        params: Mapping[str, Any] | None = None,
        locale: str | None = None,
    ) -> str:
        return self.resolver.get_message(key, params, locale)

    def get_error_message(
        self,
        field_name: str,
        key: str,
        params: Mapping[str, Any] | None = None,
        locale: str | None = None,
    ) -> str:
        return self.resolver.get_error_message(field_name, key, params, locale)

    def get_message_keys(self, locale: str | None = None) -> list[str]:
        return self.resolver.get_message_keys(locale)

    def is_message_defined(self, key: str, locale: str | None = None) -> bool:
        return self.resolver.is_message_defined(key, locale)

    def reset(self) -> None:
        """Drop all catalogs and restore default locales.

        For test harnesses only.
        """
        self.registry.clear()
        self.settings.reset()

    def __repr__(self) -> str:
        return (
            f"<LocalizationManager(locale='{self.get_locale()}', "
            f"fallback='{self.get_fallback_locale()}', "
            f"available={self.get_available_locales()})>"
        )


def create_localization_manager(
    loaders: Mapping[str, LocaleLoader] | None = None,
    default_locale: str = DEFAULT_LOCALE,
    error_format: str = DEFAULT_ERROR_FORMAT,
) -> LocalizationManager:
    """Create an independent manager with no catalogs registered."""
    return LocalizationManager(loaders, default_locale, error_format)


_default_manager: LocalizationManager | None = None
_default_lock = threading.Lock()


def get_default_manager() -> LocalizationManager:
    """Get or create the default manager.

    The default manager starts with the shipped English catalog registered,
    so formatting works before any explicit loading.
    """
    global _default_manager
    if _default_manager is None:
        with _default_lock:
            if _default_manager is None:
                manager = create_localization_manager()
                manager.register_messages(read_catalog(DEFAULT_LOCALE))
                logger.debug("localization.default_manager_created")
                _default_manager = manager
    return _default_manager


def reset_default_manager() -> None:
    """Discard the default manager (for testing)."""
    global _default_manager
    with _default_lock:
        _default_manager = None
