"""Shared fixtures: minimal catalogs and in-memory loaders."""

import asyncio
import copy
from collections.abc import Callable
from typing import Any

import pytest

from validation_messages.localization import reset_default_manager

_MINIMAL: dict[str, Any] = {
    "common": {"required": "is required", "invalid": "is invalid"},
    "string": {
        "required": "is required",
        "invalid": "is invalid",
        "tooShort": "is too short (minimum: {min} characters)",
    },
    "email": {"invalid": "is not a valid email"},
    "number": {"tooSmall": "must be at least {min}"},
    "network": {"examples": {"ipv4": "192.168.1.1"}},
}


def build_catalog(locale: str = "en", **groups: dict[str, Any]) -> dict[str, Any]:
    """Minimal valid catalog; keyword groups replace or add whole groups."""
    catalog = copy.deepcopy(_MINIMAL)
    catalog.update(copy.deepcopy(groups))
    return {"locale": locale, **catalog}


def static_loader(data: Any, delay: float = 0.0, calls: list[str] | None = None):
    """Async loader returning ``data``; records each call in ``calls``."""

    async def load() -> Any:
        if calls is not None:
            calls.append("load")
        if delay:
            await asyncio.sleep(delay)
        return copy.deepcopy(data)

    return load


def failing_loader(exc: BaseException, delay: float = 0.0):
    async def load() -> Any:
        if delay:
            await asyncio.sleep(delay)
        raise exc

    return load


@pytest.fixture
def make_catalog() -> Callable[..., dict[str, Any]]:
    return build_catalog


@pytest.fixture
def loaders() -> dict[str, Any]:
    """Loader table for en/es/fr backed by minimal in-memory catalogs."""
    return {
        "en": static_loader(build_catalog("en")),
        "es": static_loader(
            build_catalog(
                "es",
                string={
                    "required": "es obligatorio",
                    "tooShort": "es demasiado corto (mínimo: {min} caracteres)",
                },
            )
        ),
        "fr": static_loader(build_catalog("fr", string={"required": "est obligatoire"})),
    }


@pytest.fixture(autouse=True)
def _reset_default_manager():
    """Every test starts and ends without a default manager."""
    reset_default_manager()
    yield
    reset_default_manager()


@pytest.fixture
def make_loader() -> Callable[..., Any]:
    return static_loader


@pytest.fixture
def make_failing_loader() -> Callable[..., Any]:
    return failing_loader
