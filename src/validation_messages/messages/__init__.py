"""
Error message formatting and the grouped parameter contract.
"""

from .contract import (
    MESSAGE_CONTRACT,
    ParamSpec,
    contract_for,
    message_groups,
    validate_params,
)
from .handler import (
    DEFAULT_MESSAGE_KEY,
    MessageHandler,
    MsgType,
    create_message_handler,
)

__all__ = [
    "DEFAULT_MESSAGE_KEY",
    "MESSAGE_CONTRACT",
    "MessageHandler",
    "MsgType",
    "ParamSpec",
    "contract_for",
    "create_message_handler",
    "message_groups",
    "validate_params",
]
