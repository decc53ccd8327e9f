"""
Unit tests for dependency injection providers.

Tests cover:
- get_settings() and get_locator() caching behavior
- SettingsDep and LocatorDep type aliases with FastAPI dependency injection
- Dependency override pattern for testing
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from infrastructure.configuration import Settings
from infrastructure.services.dependencies import LocatorDep, SettingsDep
from infrastructure.services.providers import get_locator, get_settings
from packages.geolocate.locator import Locator


@pytest.fixture
def clean_provider_env(monkeypatch, tmp_path):
    monkeypatch.delenv("GEOLOCATION_PROVIDER", raising=False)
    monkeypatch.setenv("MAXMIND_DB_PATH", str(tmp_path / "missing.mmdb"))


@pytest.mark.unit
class TestGetSettings:
    """Tests for get_settings() provider function."""

    def test_get_settings_returns_settings_instance(self):
        assert isinstance(get_settings(), Settings)

    def test_get_settings_returns_cached_instance(self):
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        instance1 = get_settings()
        get_settings.cache_clear()
        instance2 = get_settings()
        assert instance1 is not instance2


@pytest.mark.unit
class TestGetLocator:
    """Tests for get_locator() provider function."""

    def test_get_locator_uses_application_settings(self, clean_provider_env):
        locator = get_locator()

        assert isinstance(locator, Locator)
        assert locator.settings is get_settings()
        assert locator.provider_name == "auto"

    def test_get_locator_returns_cached_instance(self, clean_provider_env):
        assert get_locator() is get_locator()

    def test_get_locator_follows_configured_provider(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GEOLOCATION_PROVIDER", "cloudflare")
        monkeypatch.setenv("MAXMIND_DB_PATH", str(tmp_path / "missing.mmdb"))

        assert get_locator().provider_name == "cloudflare"


@pytest.mark.unit
class TestDependencyOverridePattern:
    """Tests for FastAPI dependency override pattern."""

    def test_settings_dep_with_dependency_override(self):
        app = FastAPI()

        @app.get("/config")
        def get_config(settings: SettingsDep) -> dict:
            return {"is_settings_instance": isinstance(settings, Settings)}

        app.dependency_overrides[get_settings] = lambda: MagicMock(spec=Settings)

        with TestClient(app) as client:
            response = client.get("/config")

        assert response.status_code == 200
        assert response.json()["is_settings_instance"] is True
        app.dependency_overrides.clear()

    def test_locator_dep_with_dependency_override(self):
        app = FastAPI()

        @app.get("/provider")
        def provider(locator: LocatorDep) -> dict:
            return {"provider": locator.provider_name}

        mock_locator = MagicMock(spec=Locator)
        mock_locator.provider_name = "maxmind"
        app.dependency_overrides[get_locator] = lambda: mock_locator

        with TestClient(app) as client:
            response = client.get("/provider")

        assert response.status_code == 200
        assert response.json() == {"provider": "maxmind"}
        app.dependency_overrides.clear()
