"""
Catalog Registry: owns every loaded catalog for one manager.

Catalogs are fetched lazily through per-locale async loaders, validated,
frozen and cached for the lifetime of the registry. Registration is
append/replace-only: re-registering a locale replaces its entry wholesale.
"""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from .catalog import freeze_catalog, validate_catalog
from .errors import (
    InvalidCatalogError,
    LocaleLoadError,
    LocalizationError,
    UnsupportedLocaleError,
)
from .locales import LocaleLoader, default_loaders

logger = structlog.get_logger()


class CatalogRegistry:
    """Locale → catalog map plus the loader table that fills it.

    Usage:
        registry = CatalogRegistry()
        await registry.load_locales(["en", "es"])
        catalog = registry.get("es")
    """

    def __init__(self, loaders: Mapping[str, LocaleLoader] | None = None) -> None:
        """Initialize an empty registry.

        Args:
            loaders: Locale code → async loader. Defaults to the shipped
                catalogs. Its keys define the supported locale set.
        """
        self._loaders: dict[str, LocaleLoader] = (
            dict(loaders) if loaders is not None else default_loaders()
        )
        self._catalogs: dict[str, Mapping[str, Any]] = {}
        self._log = logger.bind(component="catalog_registry")

    # -- Supported / available ------------------------------------------------

    def supported(self) -> list[str]:
        """All locale codes with a loader, loaded or not."""
        return list(self._loaders)

    def is_supported(self, locale: str) -> bool:
        return locale in self._loaders

    def available(self) -> list[str]:
        """Locale codes currently registered."""
        return list(self._catalogs)

    def has(self, locale: str) -> bool:
        return locale in self._catalogs

    def get(self, locale: str) -> Mapping[str, Any] | None:
        """Return the registered catalog for ``locale``, or None."""
        return self._catalogs.get(locale)

    # -- Registration ---------------------------------------------------------

    def register_messages(self, catalog: Mapping[str, Any]) -> None:
        """Register a catalog obtained outside the loader path.

        The entry is keyed by the catalog's own ``locale`` field.

        Raises:
            InvalidCatalogError: If the catalog fails shape validation
        """
        result = validate_catalog(catalog)
        if not result:
            locale = catalog.get("locale") if isinstance(catalog, Mapping) else None
            raise InvalidCatalogError(
                locale if isinstance(locale, str) else None, result.reason or ""
            )
        self._store(catalog)

    def _store(self, catalog: Mapping[str, Any]) -> None:
        locale = catalog["locale"]
        replaced = locale in self._catalogs
        self._catalogs[locale] = freeze_catalog(catalog)
        self._log.info("catalog.registered", locale=locale, replaced=replaced)

    # -- Loading --------------------------------------------------------------

    async def load_locale(self, locale: str) -> None:
        """Fetch, validate and register the catalog for ``locale``.

        Returns immediately if the locale is already registered.

        Raises:
            UnsupportedLocaleError: If no loader exists for the locale
            InvalidCatalogError: If the fetched catalog fails validation
            LocaleLoadError: If the loader fails for any other reason
        """
        if locale in self._catalogs:
            return

        loader = self._loaders.get(locale)
        if loader is None:
            raise UnsupportedLocaleError(locale, self.supported())

        try:
            data = await loader()
        except LocalizationError:
            raise
        except Exception as e:
            self._log.warning("catalog.load_failed", locale=locale, error=str(e))
            raise LocaleLoadError(locale, e) from e

        result = validate_catalog(data, expected_locale=locale)
        if not result:
            self._log.warning(
                "catalog.invalid", locale=locale, reason=result.reason
            )
            raise InvalidCatalogError(locale, result.reason or "")

        self._store(data)

    async def load_locales(self, locales: Iterable[str]) -> None:
        """Load several locales concurrently.

        Waits for every load to settle. If any failed, the first failure
        (in argument order) is raised; successful loads stay registered.
        Repeated codes are loaded once.
        """
        codes = list(dict.fromkeys(locales))
        results = await asyncio.gather(
            *(self.load_locale(code) for code in codes),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            self._log.warning(
                "catalog.batch_failed",
                requested=codes,
                failed=len(failures),
                loaded=[c for c in codes if self.has(c)],
            )
            raise failures[0]

    async def ensure_locale_loaded(self, locale: str) -> None:
        """Load ``locale`` only if it is not available yet."""
        if not self.has(locale):
            await self.load_locale(locale)

    def clear(self) -> None:
        """Drop every registered catalog.

        Primarily useful for testing.
        """
        self._catalogs.clear()

    def __repr__(self) -> str:
        return (
            f"<CatalogRegistry({len(self._catalogs)}/{len(self._loaders)} locales loaded)>"
        )

    def __len__(self) -> int:
        return len(self._catalogs)
