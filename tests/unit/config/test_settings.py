"""Unit tests for config settings: env loading, factory merge, hot-reload provider."""

import threading
from dataclasses import dataclass, field
from typing import ClassVar

import pytest

from mp_facets.config.settings import (
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsProvider,
)
from mp_facets.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from mp_facets.search.errors import UnsupportedSearchModeError
from mp_facets.search.query import SearchMode
from mp_facets.search.settings import SearchSettings


# ---------------------------------------------------------------------------
# Concrete settings class used across tests
# ---------------------------------------------------------------------------


@dataclass
class AppSettings(Settings):
    _prefix: ClassVar[str] = "APP"

    host: str = "localhost"
    port: int = 8080
    debug: bool = False
    ratio: float = 0.5
    allowed_origins: list[str] = field(default_factory=list)


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"

    dsn: str


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_scalars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_HOST", "example.com")
        monkeypatch.setenv("APP_PORT", "9000")
        monkeypatch.setenv("APP_RATIO", "0.25")
        settings = EnvSettingsLoader().load(AppSettings)
        assert (settings.host, settings.port, settings.ratio) == ("example.com", 9000, 0.25)

    def test_loads_bool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for raw, expected in (("true", True), ("on", True), ("1", True), ("no", False), ("0", False)):
            monkeypatch.setenv("APP_DEBUG", raw)
            assert EnvSettingsLoader().load(AppSettings).debug is expected

    def test_loads_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ALLOWED_ORIGINS", "http://a.com, http://b.com,")
        settings = EnvSettingsLoader().load(AppSettings)
        assert settings.allowed_origins == ["http://a.com", "http://b.com"]

    def test_explicit_environ(self) -> None:
        settings = EnvSettingsLoader({"APP_PORT": "1"}).load(AppSettings)
        assert settings.port == 1
        assert settings.host == "localhost"

    def test_invalid_int(self) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader({"APP_PORT": "eighty"}).load(AppSettings)
        assert info.value.setting_name == "APP_PORT"

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as info:
            EnvSettingsLoader({}).load(RequiredSettings)
        assert info.value.setting_name == "REQ_DSN"


class TestSearchSettingsFromEnv:
    def test_full_configuration(self) -> None:
        environ = {
            "SEARCH_SEARCH_MODE": "startswith",
            "SEARCH_SEARCH_FIELDS": "name,sku",
            "SEARCH_DEFAULT_SORT": "price_asc",
            "SEARCH_DEFAULT_PAGE_SIZE": "48",
            "SEARCH_PAGE_SIZES": "catalog/category=12, search/search=24",
            "SEARCH_ALLOW_PAGE_SIZE_SELECTION": "yes",
            "SEARCH_ENFORCE_RESTRICTIONS": "false",
            "SEARCH_ENABLED_FACETS": "category,manufacturer",
            "SEARCH_FACET_DISPLAY_ORDERS": "manufacturer=1,category=2",
            "SEARCH_FILTER_MIN_HIT_COUNT": "0",
        }
        settings = EnvSettingsLoader(environ).load(SearchSettings)
        assert settings.search_mode is SearchMode.STARTS_WITH
        assert settings.search_fields == ["name", "sku"]
        assert settings.default_sort == "price_asc"
        assert settings.default_page_size == 48
        assert settings.page_sizes == {"catalog/category": 12, "search/search": 24}
        assert settings.allow_page_size_selection is True
        assert settings.enforce_restrictions is False
        assert settings.enabled_facets == ["category", "manufacturer"]
        assert settings.facet_display_orders == {"manufacturer": 1, "category": 2}
        assert settings.filter_min_hit_count == 0

    def test_defaults(self) -> None:
        settings = EnvSettingsLoader({}).load(SearchSettings)
        assert settings.search_mode is SearchMode.CONTAINS
        assert settings.enabled_facets is None
        assert settings.enforce_restrictions is True

    def test_exact_mode_rejected(self) -> None:
        with pytest.raises(UnsupportedSearchModeError):
            EnvSettingsLoader({"SEARCH_SEARCH_MODE": "exact"}).load(SearchSettings)

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"SEARCH_SEARCH_MODE": "fuzzy"}).load(SearchSettings)

    def test_malformed_mapping(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"SEARCH_PAGE_SIZES": "catalog"}).load(SearchSettings)

    def test_non_positive_page_size(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"SEARCH_DEFAULT_PAGE_SIZE": "0"}).load(SearchSettings)
        with pytest.raises(InvalidSettingValueError):
            SearchSettings(page_sizes={"x": -1})


# ---------------------------------------------------------------------------
# SettingsFactory
# ---------------------------------------------------------------------------


class TestSettingsFactory:
    def test_later_loader_wins(self) -> None:
        settings = SettingsFactory.create(
            AppSettings,
            [EnvSettingsLoader({"APP_PORT": "1", "APP_HOST": "a"}), EnvSettingsLoader({"APP_PORT": "2"})],
        )
        assert settings.port == 2
        assert settings.host == "a"

    def test_overrides_win(self) -> None:
        settings = SettingsFactory.create(AppSettings, [EnvSettingsLoader({"APP_PORT": "1"})], {"port": 3})
        assert settings.port == 3

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError):
            SettingsFactory.create(RequiredSettings)

    def test_config_errors_propagate(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(SearchSettings, overrides={"search_mode": SearchMode.EXACT})

    def test_bad_override_wrapped(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(AppSettings, overrides={"nope": 1})


# ---------------------------------------------------------------------------
# SettingsProvider
# ---------------------------------------------------------------------------


class TestSettingsProvider:
    def test_snapshot_is_stable_reference(self) -> None:
        provider = SettingsProvider(SearchSettings())
        assert provider.snapshot() is provider.snapshot()

    def test_replace_returns_previous(self) -> None:
        first = SearchSettings()
        provider = SettingsProvider(first)
        second = SearchSettings(default_page_size=10)
        assert provider.replace(second) is first
        assert provider.snapshot() is second

    def test_reload_uses_loader(self) -> None:
        environ = {"SEARCH_DEFAULT_PAGE_SIZE": "12"}
        provider = SettingsProvider(SearchSettings(), loader=lambda: EnvSettingsLoader(environ).load(SearchSettings))
        held = provider.snapshot()
        environ["SEARCH_DEFAULT_PAGE_SIZE"] = "36"
        assert provider.reload().default_page_size == 36
        assert held.default_page_size == 24

    def test_reload_without_loader_is_noop(self) -> None:
        settings = SearchSettings()
        assert SettingsProvider(settings).reload() is settings

    def test_failed_reload_keeps_current(self) -> None:
        provider = SettingsProvider(
            SearchSettings(), loader=lambda: EnvSettingsLoader({"SEARCH_SEARCH_MODE": "exact"}).load(SearchSettings)
        )
        current = provider.snapshot()
        with pytest.raises(ConfigError):
            provider.reload()
        assert provider.snapshot() is current

    def test_concurrent_replace(self) -> None:
        provider = SettingsProvider(SearchSettings())
        candidates = [SearchSettings(default_page_size=n) for n in range(1, 21)]
        threads = [threading.Thread(target=provider.replace, args=(s,)) for s in candidates]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert provider.snapshot() in candidates
