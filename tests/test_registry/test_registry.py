"""Tests for CatalogRegistry: loading, validation, concurrency, registration."""

import asyncio

import pytest
from structlog.testing import capture_logs

from validation_messages.localization import (
    InvalidCatalogError,
    LocaleLoadError,
    LocalizationError,
    SUPPORTED_LOCALES,
    UnsupportedLocaleError,
)
from validation_messages.localization.registry import CatalogRegistry


@pytest.fixture
def registry(loaders) -> CatalogRegistry:
    return CatalogRegistry(loaders)


# ── Supported / available ───────────────────────────────────────────────


class TestSupportedSet:
    def test_supported_is_loader_table(self, registry):
        assert registry.supported() == ["en", "es", "fr"]

    def test_default_loaders_cover_shipped_locales(self):
        assert CatalogRegistry().supported() == list(SUPPORTED_LOCALES)

    def test_starts_empty(self, registry):
        assert registry.available() == []
        assert len(registry) == 0
        assert registry.get("en") is None
        assert not registry.has("en")

    def test_is_supported(self, registry):
        assert registry.is_supported("es")
        assert not registry.is_supported("xx")

    def test_repr(self, registry):
        assert "0/3" in repr(registry)


# ── load_locale ─────────────────────────────────────────────────────────


class TestLoadLocale:
    @pytest.mark.asyncio
    async def test_load_registers_catalog(self, registry):
        await registry.load_locale("es")
        assert registry.has("es")
        assert registry.available() == ["es"]
        assert registry.get("es")["string"]["required"] == "es obligatorio"

    @pytest.mark.asyncio
    async def test_load_is_idempotent(self, make_catalog, make_loader):
        calls: list[str] = []
        registry = CatalogRegistry({"en": make_loader(make_catalog("en"), calls=calls)})
        await registry.load_locale("en")
        await registry.load_locale("en")
        assert calls == ["load"]

    @pytest.mark.asyncio
    async def test_unsupported_locale(self, registry):
        with pytest.raises(UnsupportedLocaleError) as exc_info:
            await registry.load_locale("xx")
        message = str(exc_info.value)
        assert "'xx'" in message
        assert "en, es, fr" in message
        assert exc_info.value.supported == ["en", "es", "fr"]

    @pytest.mark.asyncio
    async def test_invalid_catalog(self, make_catalog, make_loader):
        broken = make_catalog("en")
        del broken["email"]
        registry = CatalogRegistry({"en": make_loader(broken)})
        with pytest.raises(InvalidCatalogError) as exc_info:
            await registry.load_locale("en")
        assert "email" in exc_info.value.reason
        assert exc_info.value.locale == "en"
        assert not registry.has("en")

    @pytest.mark.asyncio
    async def test_non_mapping_payload(self, make_loader):
        registry = CatalogRegistry({"en": make_loader("not a catalog")})
        with pytest.raises(InvalidCatalogError):
            await registry.load_locale("en")

    @pytest.mark.asyncio
    async def test_locale_field_mismatch_rejected(self, make_catalog, make_loader):
        registry = CatalogRegistry({"es": make_loader(make_catalog("fr"))})
        with pytest.raises(InvalidCatalogError, match="does not match"):
            await registry.load_locale("es")
        assert registry.available() == []

    @pytest.mark.asyncio
    async def test_loader_failure_is_wrapped(self, make_failing_loader):
        cause = FileNotFoundError("es.yaml")
        registry = CatalogRegistry({"es": make_failing_loader(cause)})
        with pytest.raises(LocaleLoadError) as exc_info:
            await registry.load_locale("es")
        assert str(exc_info.value) == "Failed to load locale 'es': es.yaml"
        assert exc_info.value.locale == "es"
        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_localization_errors_pass_through(self, make_failing_loader):
        original = InvalidCatalogError("es", "bad")
        registry = CatalogRegistry({"es": make_failing_loader(original)})
        with pytest.raises(InvalidCatalogError) as exc_info:
            await registry.load_locale("es")
        assert exc_info.value is original

    @pytest.mark.asyncio
    async def test_all_errors_share_base(self, registry):
        with pytest.raises(LocalizationError):
            await registry.load_locale("xx")

    @pytest.mark.asyncio
    async def test_logs_registration(self, loaders):
        with capture_logs() as logs:
            registry = CatalogRegistry(loaders)
            await registry.load_locale("en")
        events = [entry["event"] for entry in logs]
        assert "catalog.registered" in events

    @pytest.mark.asyncio
    async def test_logs_load_failure(self, make_failing_loader):
        with capture_logs() as logs:
            registry = CatalogRegistry({"es": make_failing_loader(OSError("disk"))})
            with pytest.raises(LocaleLoadError):
                await registry.load_locale("es")
        failed = [entry for entry in logs if entry["event"] == "catalog.load_failed"]
        assert failed
        assert failed[0]["locale"] == "es"
        assert failed[0]["log_level"] == "warning"

    @pytest.mark.asyncio
    async def test_ensure_locale_loaded(self, make_catalog, make_loader):
        calls: list[str] = []
        registry = CatalogRegistry({"en": make_loader(make_catalog("en"), calls=calls)})
        await registry.ensure_locale_loaded("en")
        await registry.ensure_locale_loaded("en")
        assert registry.has("en")
        assert calls == ["load"]


# ── load_locales ────────────────────────────────────────────────────────


class TestLoadLocales:
    @pytest.mark.asyncio
    async def test_loads_all(self, registry):
        await registry.load_locales(["en", "es", "fr"])
        assert sorted(registry.available()) == ["en", "es", "fr"]

    @pytest.mark.asyncio
    async def test_runs_concurrently(self, make_catalog, make_loader):
        registry = CatalogRegistry(
            {code: make_loader(make_catalog(code), delay=0.2) for code in ("en", "es", "fr")}
        )
        loop = asyncio.get_running_loop()
        start = loop.time()
        await registry.load_locales(["en", "es", "fr"])
        assert loop.time() - start < 0.5

    @pytest.mark.asyncio
    async def test_partial_success_is_kept(self, make_catalog, make_loader, make_failing_loader):
        registry = CatalogRegistry(
            {
                "en": make_loader(make_catalog("en")),
                "es": make_failing_loader(OSError("network down")),
                "fr": make_loader(make_catalog("fr"), delay=0.05),
            }
        )
        with pytest.raises(LocaleLoadError, match="'es'"):
            await registry.load_locales(["en", "es", "fr"])
        # fr finished after es failed and is still registered
        assert sorted(registry.available()) == ["en", "fr"]

    @pytest.mark.asyncio
    async def test_first_failure_in_argument_order(self, make_catalog, make_loader, make_failing_loader):
        registry = CatalogRegistry(
            {
                "en": make_loader(make_catalog("en")),
                "es": make_failing_loader(OSError("slow failure"), delay=0.05),
            }
        )
        with pytest.raises(UnsupportedLocaleError):
            await registry.load_locales(["xx", "es", "en"])
        assert registry.available() == ["en"]

    @pytest.mark.asyncio
    async def test_repeated_code_loaded_once(self, make_catalog, make_loader):
        calls: list[str] = []
        loaders = {
            "en": make_loader(make_catalog("en")),
            "es": make_loader(make_catalog("es"), delay=0.05, calls=calls),
        }
        with capture_logs() as logs:
            registry = CatalogRegistry(loaders)
            await registry.load_locales(["es", "en", "es"])
        assert calls == ["load"]
        registered = [e for e in logs if e["event"] == "catalog.registered" and e.get("locale") == "es"]
        assert len(registered) == 1

    @pytest.mark.asyncio
    async def test_empty_batch(self, registry):
        await registry.load_locales([])
        assert registry.available() == []


# ── register_messages ───────────────────────────────────────────────────


class TestRegisterMessages:
    def test_registers_under_own_locale(self, registry, make_catalog):
        registry.register_messages(make_catalog("fr"))
        assert registry.has("fr")

    def test_rejects_invalid(self, registry, make_catalog):
        catalog = make_catalog("fr", number={"tooSmall": 3})
        with pytest.raises(InvalidCatalogError) as exc_info:
            registry.register_messages(catalog)
        assert exc_info.value.locale == "fr"
        assert not registry.has("fr")

    def test_replaces_wholesale(self, registry, make_catalog):
        registry.register_messages(make_catalog("en", email={"invalid": "first"}))
        registry.register_messages(make_catalog("en", email={"mustBeValidEmail": "second"}))
        catalog = registry.get("en")
        assert catalog["email"].get("invalid") is None
        assert catalog["email"]["mustBeValidEmail"] == "second"

    def test_later_mutation_does_not_leak(self, registry, make_catalog):
        catalog = make_catalog("en")
        registry.register_messages(catalog)
        catalog["string"]["required"] = "mutated"
        assert registry.get("en")["string"]["required"] == "is required"

    def test_does_not_need_a_loader(self, make_catalog):
        registry = CatalogRegistry({})
        registry.register_messages(make_catalog("en"))
        assert registry.available() == ["en"]
        assert registry.supported() == []

    def test_clear(self, registry, make_catalog):
        registry.register_messages(make_catalog("en"))
        registry.clear()
        assert registry.available() == []
