"""
Error Message Formatter: the single entry point validation rules call.

``format_error_message`` combines a field label with localized content
picked from a fixed ladder:

    1. the requested message key (a result equal to the key counts as "none")
    2. the caller's static fallback text
    3. the default key ("string.invalid")
    4. nothing: the label is returned alone

It never raises. Lookup failures, contract mismatches and unexpected
errors are logged as warnings and degrade to the next rung.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol

import structlog

from ..localization.manager import LocalizationManager, get_default_manager
from .contract import contract_for, split_key, validate_params

logger = structlog.get_logger()

DEFAULT_MESSAGE_KEY = "string.invalid"


class MsgType(str, Enum):
    """Whether ``msg`` is a field label or a complete custom message."""

    FIELD_NAME = "fieldName"
    MESSAGE = "message"


class Logger(Protocol):
    """What the formatter needs from an injected logger.

    structlog bound loggers satisfy it; ``debug`` is optional.
    """

    def warning(self, event: str, **kw: Any) -> Any: ...


class MessageSource(Protocol):
    def get_message(
        self,
        key: str,
        params: Mapping[str, Any] | None = None,
        locale: str | None = None,
    ) -> str: ...


class MessageHandler:
    """Formats validation error messages without ever raising.

    Usage:
        handler = MessageHandler(manager=manager)
        handler.format_error_message("Email", message_key="string.invalid")
        # "Email is invalid"
    """

    def __init__(
        self,
        logger: Logger | None = None,
        manager: MessageSource | None = None,
        default_message_key: str = DEFAULT_MESSAGE_KEY,
    ) -> None:
        self._log = logger if logger is not None else _default_logger()
        self._manager = manager
        self.default_message_key = default_message_key

    @property
    def manager(self) -> MessageSource:
        """The message source; the default manager unless one was injected."""
        if self._manager is None:
            return get_default_manager()
        return self._manager

    def format_error_message(
        self,
        msg: Any,
        msg_type: MsgType | str = MsgType.FIELD_NAME,
        *,
        group: str | None = None,
        message_key: str | None = None,
        params: Mapping[str, Any] | None = None,
        fallback: str | None = None,
        locale: str | None = None,
    ) -> str:
        """Build the user-facing error text for a failed validation.

        Args:
            msg: Field label, or the full message when msg_type is MESSAGE
            msg_type: How to treat ``msg``
            group: Message group; without one, a dotted key's group is checked
            message_key: Key to resolve, bare (with group) or dotted
            params: Placeholder values for the template
            fallback: Static text used when the key yields nothing
            locale: Locale override for this call

        Returns:
            The formatted message. Never raises.
        """
        try:
            if msg_type == MsgType.MESSAGE:
                return str(msg)
            return self._format_field_message(
                str(msg), group, message_key, params, fallback, locale
            )
        except Exception as e:
            self._warn("message_handler.format_failed", error=str(e))
            return _safe_str(msg)

    def _format_field_message(
        self,
        msg: str,
        group: str | None,
        message_key: str | None,
        params: Mapping[str, Any] | None,
        fallback: str | None,
        locale: str | None,
    ) -> str:
        content = None

        params_ok = True
        if params is not None and not isinstance(params, Mapping):
            self._warn(
                "message_handler.params_mismatch",
                group=group,
                message_key=message_key,
                reason=f"params must be a mapping, got {type(params).__name__}",
            )
            params = None
            params_ok = False

        if message_key and params_ok:
            full_key = self._qualify(group, message_key)
            if self._params_match(group, message_key, params):
                content = self._resolve(full_key, params, locale)

        if not content and fallback:
            content = fallback

        if not content:
            content = self._resolve(self.default_message_key, None, locale)

        if not content:
            self._warn(
                "message_handler.no_content",
                message_key=message_key,
                component="format_error_message",
            )
            content = ""

        self._debug(
            "message_handler.formatted",
            group=group,
            message_key=message_key,
            params=dict(params) if params else None,
            fallback=fallback,
            component="format_error_message",
        )
        return f"{msg} {content}" if content else msg

    @staticmethod
    def _qualify(group: str | None, message_key: str) -> str:
        if group is None:
            return message_key
        group_name, key = split_key(group, message_key)
        return f"{group_name}.{key}"

    def _params_match(
        self, group: str | None, message_key: str, params: Mapping[str, Any] | None
    ) -> bool:
        """Contract check for an explicit group, or a dotted key's contract group.

        Keys outside every contract group (e.g. ``common.*``) pass unchecked.
        """
        if group is None:
            group, message_key = split_key(None, message_key)
            if group is None or contract_for(group) is None:
                return True
        result = validate_params(group, message_key, params)
        if not result:
            self._warn(
                "message_handler.params_mismatch",
                group=group,
                message_key=message_key,
                reason=result.reason,
            )
        return result.ok

    def _resolve(
        self, key: str, params: Mapping[str, Any] | None, locale: str | None
    ) -> str | None:
        """Resolve ``key``; None when it is unresolved or the lookup failed."""
        try:
            if locale is None:
                resolved = self.manager.get_message(key, params)
            else:
                resolved = self.manager.get_message(key, params, locale)
        except Exception as e:
            self._warn("message_handler.lookup_failed", message_key=key, error=str(e))
            return None
        if not resolved or resolved == key:
            return None
        return resolved

    def _warn(self, event: str, **kw: Any) -> None:
        try:
            self._log.warning(event, **kw)
        except Exception:
            pass

    def _debug(self, event: str, **kw: Any) -> None:
        debug = getattr(self._log, "debug", None)
        if debug is None:
            return
        try:
            debug(event, **kw)
        except Exception:
            pass


def _safe_str(msg: Any) -> str:
    try:
        return str(msg)
    except Exception:
        return object.__repr__(msg)


def _default_logger() -> Logger:
    return logger.bind(component="message_handler")


def create_message_handler(
    logger: Logger | None = None,
    manager: LocalizationManager | None = None,
    default_message_key: str = DEFAULT_MESSAGE_KEY,
) -> MessageHandler:
    """Create a formatter bound to ``manager`` (or the default manager)."""
    return MessageHandler(logger, manager, default_message_key)
