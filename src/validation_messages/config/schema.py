"""
Pydantic models for validation-messages configuration.

Defines the configuration schemas using Pydantic v2 for validation,
defaults, and serialization.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ..localization.locales import DEFAULT_LOCALE
from ..localization.resolver import DEFAULT_ERROR_FORMAT
from ..messages.handler import DEFAULT_MESSAGE_KEY


class LocalizationConfig(BaseModel):
    """Locale selection and catalog preloading."""

    locale: str = DEFAULT_LOCALE
    fallback_locale: str = DEFAULT_LOCALE
    preload: list[str] = Field(
        default_factory=lambda: [DEFAULT_LOCALE],
        description=(
            "Locales loaded at startup. The current and fallback locales are "
            "added automatically."
        ),
    )
    error_format: str = Field(
        default=DEFAULT_ERROR_FORMAT,
        description="Template used when a catalog defines no errorFormat.",
    )
    default_message_key: str = Field(
        default=DEFAULT_MESSAGE_KEY,
        description="Key the formatter falls back to when nothing else resolves.",
    )

    @field_validator("locale", "fallback_locale", mode="before")
    @classmethod
    def _normalize_code(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("preload", mode="before")
    @classmethod
    def _normalize_preload(cls, v: object) -> object:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            return [c.strip().lower() for c in v if isinstance(c, str) and c.strip()]
        return v

    def locales_to_load(self) -> list[str]:
        """Preload list plus current and fallback locale, without duplicates."""
        ordered = [*self.preload, self.fallback_locale, self.locale]
        return list(dict.fromkeys(ordered))

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "warning", "error"] = "warning"
    file: Path | None = None
    verbose: int = 0

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_warn(cls, v: object) -> object:
        """Accept "warn" as an alias for "warning"."""
        if isinstance(v, str) and v.lower() == "warn":
            return "warning"
        return v.lower() if isinstance(v, str) else v

    model_config = {"extra": "forbid"}


class AppConfig(BaseModel):
    """Complete configuration.

    Root of the configuration tree and entry point for validation.
    """

    localization: LocalizationConfig = Field(default_factory=LocalizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}
