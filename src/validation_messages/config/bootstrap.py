"""
Build a ready-to-use localization context from configuration.
"""

from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from ..localization.locales import LocaleLoader
from ..localization.manager import LocalizationManager, create_localization_manager
from ..messages.handler import MessageHandler, create_message_handler
from .schema import AppConfig

logger = structlog.get_logger()


@dataclass
class LocalizationContext:
    """A manager and the formatter bound to it."""

    manager: LocalizationManager
    handler: MessageHandler


async def setup_localization(
    config: AppConfig,
    loaders: Mapping[str, LocaleLoader] | None = None,
    manager: LocalizationManager | None = None,
) -> LocalizationContext:
    """Create (or configure) a manager, preload catalogs and select locales.

    Locale codes are validated before anything is loaded, so a typo in the
    configuration fails fast.

    Args:
        config: Validated application configuration
        loaders: Loader table for a new manager (ignored if manager is given)
        manager: Existing manager to configure, e.g. the default one

    Returns:
        LocalizationContext with the configured manager and formatter

    Raises:
        InvalidLocaleCodeError: If locale or fallback_locale is unsupported
        LocalizationError: If any preload fails
    """
    loc = config.localization
    if manager is None:
        manager = create_localization_manager(loaders, error_format=loc.error_format)
    else:
        manager.resolver.error_format = loc.error_format

    manager.set_fallback_locale(loc.fallback_locale)
    manager.set_locale(loc.locale)

    to_load = loc.locales_to_load()
    await manager.load_locales(to_load)
    logger.info(
        "localization.ready",
        locale=loc.locale,
        fallback=loc.fallback_locale,
        loaded=manager.get_available_locales(),
    )

    handler = create_message_handler(
        manager=manager, default_message_key=loc.default_message_key
    )
    return LocalizationContext(manager=manager, handler=handler)
