"""
Locale selection: the current and fallback locale of a manager.

Setting a locale only checks it against the supported set; whether its
catalog is loaded is the registry's concern.
"""

from collections.abc import Callable, Iterable

from .errors import InvalidLocaleCodeError
from .locales import DEFAULT_LOCALE


class LocaleSettings:
    """Current/fallback locale pair, validated against the supported set.

    No locking: concurrent writers race, last write wins.
    """

    def __init__(
        self,
        supported: Callable[[], Iterable[str]],
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        self._supported = supported
        self._default = default_locale
        self._current = default_locale
        self._fallback = default_locale

    @property
    def locale(self) -> str:
        """Current locale code."""
        return self._current

    @property
    def fallback_locale(self) -> str:
        """Locale consulted when a key is missing from the target locale."""
        return self._fallback

    def _check(self, locale: str) -> str:
        supported = list(self._supported())
        if locale not in supported:
            raise InvalidLocaleCodeError(locale, supported)
        return locale

    def set_locale(self, locale: str) -> None:
        """Set the current locale.

        Raises:
            InvalidLocaleCodeError: If the code is not supported
        """
        self._current = self._check(locale)

    def set_fallback_locale(self, locale: str) -> None:
        """Set the fallback locale.

        Raises:
            InvalidLocaleCodeError: If the code is not supported
        """
        self._fallback = self._check(locale)

    def reset(self) -> None:
        self._current = self._default
        self._fallback = self._default

    def __repr__(self) -> str:
        return f"<LocaleSettings(locale='{self._current}', fallback='{self._fallback}')>"
