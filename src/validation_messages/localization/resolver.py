"""
Message Key Resolver: dot-path lookup, locale fallback, interpolation.

Resolution chain for ``get_message``:
    target locale (explicit or current) → fallback locale → raw key

A lookup miss is a normal outcome, never an error: an unresolved key comes
back verbatim so it stays visible in output.
"""

import re
from collections.abc import Mapping
from typing import Any

from .catalog import flatten_keys, lookup_path
from .registry import CatalogRegistry
from .settings import LocaleSettings

DEFAULT_ERROR_FORMAT = "{fieldName} {message}"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

# Where a catalog may override the error format, most specific first.
_ERROR_FORMAT_KEYS = ("common.errorFormat", "errorFormat")


def _stringify(value: Any) -> str:
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(str(item) for item in value)
    return str(value)


def interpolate(template: str, params: Mapping[str, Any] | None = None) -> str:
    """Replace ``{name}`` placeholders with values from ``params``.

    Placeholders without a matching (non-None) parameter are left as-is.
    Substituted text is not rescanned.

    Example:
        >>> interpolate("Max {max} items", {"max": 3})
        'Max 3 items'
        >>> interpolate("Max {max} items", {})
        'Max {max} items'
    """
    if not params:
        return template

    def _sub(match: re.Match[str]) -> str:
        value = params.get(match.group(1))
        return match.group(0) if value is None else _stringify(value)

    return _PLACEHOLDER.sub(_sub, template)


class MessageResolver:
    """Resolves message keys against the registry using the locale settings."""

    def __init__(
        self,
        registry: CatalogRegistry,
        settings: LocaleSettings,
        error_format: str = DEFAULT_ERROR_FORMAT,
    ) -> None:
        self._registry = registry
        self._settings = settings
        self.error_format = error_format

    def lookup(self, key: str, locale: str) -> str | None:
        """Dot-path lookup in a single locale. None on any miss."""
        catalog = self._registry.get(locale)
        if catalog is None:
            return None
        return lookup_path(catalog, key)

    def _lookup_with_fallback(self, key: str, locale: str) -> str | None:
        found = self.lookup(key, locale)
        if found is None:
            found = self.lookup(key, self._settings.fallback_locale)
        return found

    def get_message(
        self,
        key: str,
        params: Mapping[str, Any] | None = None,
        locale: str | None = None,
    ) -> str:
        """Resolve and interpolate ``key``. Always returns a string."""
        target = locale or self._settings.locale
        template = self._lookup_with_fallback(key, target)
        if template is None:
            template = key
        return interpolate(template, params)

    def get_error_message(
        self,
        field_name: str,
        key: str,
        params: Mapping[str, Any] | None = None,
        locale: str | None = None,
    ) -> str:
        """Resolve ``key`` and place it into the locale's error format.

        The format comes from ``common.errorFormat``, then a top-level
        ``errorFormat``, then ``self.error_format``. Locales use it to put
        the field name after the message where that reads naturally.
        """
        target = locale or self._settings.locale
        message = self.get_message(key, params, target)

        template = None
        for format_key in _ERROR_FORMAT_KEYS:
            template = self._lookup_with_fallback(format_key, target)
            if template is not None:
                break
        if template is None:
            template = self.error_format

        return interpolate(template, {"fieldName": field_name, "message": message})

    def get_message_keys(self, locale: str | None = None) -> list[str]:
        """All dot-paths with a string leaf in the locale's catalog."""
        catalog = self._registry.get(locale or self._settings.locale)
        if catalog is None:
            return []
        return flatten_keys(catalog)

    def is_message_defined(self, key: str, locale: str | None = None) -> bool:
        """True iff ``key`` resolves to a string in the locale, no fallback."""
        return self.lookup(key, locale or self._settings.locale) is not None
