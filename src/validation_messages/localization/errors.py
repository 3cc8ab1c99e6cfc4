"""
Errors raised by the localization configuration and loading surface.

Message formatting never raises; only misconfiguration (unknown locale
codes, broken catalogs, failed loads) reaches the caller.
"""

from collections.abc import Iterable


class LocalizationError(Exception):
    """Base class for localization errors."""

    pass


class UnsupportedLocaleError(LocalizationError):
    """Error raised when no loader is registered for a locale."""

    def __init__(self, locale: str, supported: Iterable[str]) -> None:
        self.locale = locale
        self.supported = list(supported)
        super().__init__(
            f"Unsupported locale '{locale}'. "
            f"Available locales: {', '.join(self.supported)}"
        )


class InvalidCatalogError(LocalizationError):
    """Error raised when a catalog fails shape validation."""

    def __init__(self, locale: str | None, reason: str) -> None:
        self.locale = locale
        self.reason = reason
        where = f" for locale '{locale}'" if locale else ""
        super().__init__(f"Invalid localization messages format{where}: {reason}")


class LocaleLoadError(LocalizationError):
    """Error raised when fetching a catalog fails for any other reason."""

    def __init__(self, locale: str, cause: BaseException) -> None:
        self.locale = locale
        self.cause = cause
        super().__init__(f"Failed to load locale '{locale}': {cause}")


class InvalidLocaleCodeError(LocalizationError, ValueError):
    """Error raised when setting a locale outside the supported set."""

    def __init__(self, locale: str, supported: Iterable[str]) -> None:
        self.locale = locale
        self.supported = list(supported)
        super().__init__(
            f"Invalid locale code '{locale}'. "
            f"Must be one of: {', '.join(self.supported)}"
        )
