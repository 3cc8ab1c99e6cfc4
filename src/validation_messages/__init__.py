"""
Localized validation error messages.

Public API (bound to the default manager):
    format_error_message(msg, msg_type, ...)  - Never-raising error text.
    get_message(key, params, locale)          - Resolve and interpolate a key.
    load_locale(code) / load_locales(codes)   - Load shipped catalogs (async).
    set_locale(code) / set_fallback_locale()  - Select locales.

Usage:
    import asyncio
    from validation_messages import MsgType, format_error_message, load_locale, set_locale

    asyncio.run(load_locale("es"))
    set_locale("es")
    format_error_message("Email", MsgType.FIELD_NAME, message_key="email.mustBeValidEmail")

For independent contexts (tests, per-request locales) build explicit
instances with ``create_localization_manager()`` and
``create_message_handler()`` instead.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from .localization import (
    InvalidCatalogError,
    InvalidLocaleCodeError,
    LocaleLoadError,
    LocalizationError,
    LocalizationManager,
    UnsupportedLocaleError,
    create_localization_manager,
    get_default_manager,
    reset_default_manager,
)
from .messages import MessageHandler, MsgType, create_message_handler

__all__ = [
    "InvalidCatalogError",
    "InvalidLocaleCodeError",
    "LocaleLoadError",
    "LocalizationError",
    "LocalizationManager",
    "MessageHandler",
    "MsgType",
    "UnsupportedLocaleError",
    "create_localization_manager",
    "create_message_handler",
    "format_error_message",
    "get_default_manager",
    "get_locale",
    "get_message",
    "load_locale",
    "load_locales",
    "reset_default_manager",
    "set_fallback_locale",
    "set_locale",
]

_handler: MessageHandler | None = None


def _default_handler() -> MessageHandler:
    global _handler
    if _handler is None:
        _handler = create_message_handler()
    return _handler


def format_error_message(
    msg: Any,
    msg_type: MsgType | str = MsgType.FIELD_NAME,
    *,
    group: str | None = None,
    message_key: str | None = None,
    params: Mapping[str, Any] | None = None,
    fallback: str | None = None,
    locale: str | None = None,
) -> str:
    """Format an error message with the default manager. Never raises."""
    return _default_handler().format_error_message(
        msg,
        msg_type,
        group=group,
        message_key=message_key,
        params=params,
        fallback=fallback,
        locale=locale,
    )


def get_message(
    key: str,
    params: Mapping[str, Any] | None = None,
    locale: str | None = None,
) -> str:
    """Resolve ``key`` in the default manager."""
    return get_default_manager().get_message(key, params, locale)


async def load_locale(locale: str) -> None:
    """Load a shipped catalog into the default manager."""
    await get_default_manager().load_locale(locale)


async def load_locales(locales: Iterable[str]) -> None:
    """Load several shipped catalogs into the default manager concurrently."""
    await get_default_manager().load_locales(locales)


def set_locale(locale: str) -> None:
    """Set the default manager's current locale.

    Raises:
        InvalidLocaleCodeError: If the locale is not supported.
    """
    get_default_manager().set_locale(locale)


def set_fallback_locale(locale: str) -> None:
    """Set the default manager's fallback locale.

    Raises:
        InvalidLocaleCodeError: If the locale is not supported.
    """
    get_default_manager().set_fallback_locale(locale)


def get_locale() -> str:
    """Current locale of the default manager."""
    return get_default_manager().get_locale()
