"""
Configuration module for validation-messages.

Exports the main components for convenient imports.
"""

from .bootstrap import setup_localization
from .loader import deep_merge, load_config
from .schema import AppConfig, LocalizationConfig, LoggingConfig

__all__ = [
    "load_config",
    "deep_merge",
    "setup_localization",
    "AppConfig",
    "LocalizationConfig",
    "LoggingConfig",
]
