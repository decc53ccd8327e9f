import sys
from pathlib import Path
from types import SimpleNamespace

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.configuration`) works during pytest collection
# regardless of the directory pytest is invoked from.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest
import structlog

from infrastructure.configuration import (
    GeolocationSettings,
    MaxMindSettings,
    Settings,
)
from infrastructure.services import get_locator, get_settings


@pytest.fixture
def make_settings(tmp_path):
    """Factory building real Settings with explicit section overrides.

    The database path defaults to a file under tmp_path that does not exist,
    so tests never pick up a database from the working directory.
    """

    def _make_settings(**overrides):
        maxmind_values = {
            "MAXMIND_DB_PATH": str(tmp_path / "GeoLite2-City.mmdb"),
        }
        geolocation_values = {}
        for key, value in overrides.items():
            if key.startswith("MAXMIND_"):
                maxmind_values[key] = value
            elif key.startswith("GEOLOCATION_"):
                geolocation_values[key] = value
        return Settings(
            maxmind=MaxMindSettings(**maxmind_values),
            geolocation=GeolocationSettings(**geolocation_values),
        )

    return _make_settings


@pytest.fixture
def cloudflare_request():
    """Factory building a request context carrying Cloudflare headers."""

    def _cloudflare_request(country="FR", connecting_ip=None, **headers):
        values = {}
        if country is not None:
            values["cf-ipcountry"] = country
        if connecting_ip is not None:
            values["cf-connecting-ip"] = connecting_ip
        for name, value in headers.items():
            values["cf-" + name.replace("_", "-")] = value
        return SimpleNamespace(headers=values)

    return _cloudflare_request


@pytest.fixture
def maxmind_city_record():
    """Raw GeoLite2 City record for an address in Paris."""
    return {
        "city": {"geoname_id": 2988507, "names": {"en": "Paris", "fr": "Paris"}},
        "continent": {"code": "EU", "geoname_id": 6255148, "names": {"en": "Europe"}},
        "country": {
            "geoname_id": 3017382,
            "iso_code": "FR",
            "names": {"en": "France", "de": "Frankreich"},
        },
        "location": {
            "accuracy_radius": 20,
            "latitude": 48.8566,
            "longitude": 2.3522,
            "time_zone": "Europe/Paris",
        },
        "postal": {"code": "75001"},
        "subdivisions": [
            {"geoname_id": 3012874, "iso_code": "IDF", "names": {"en": "Île-de-France"}},
            {"geoname_id": 2968815, "iso_code": "75", "names": {"en": "Paris"}},
        ],
    }


@pytest.fixture(autouse=True)
def clear_cached_providers():
    """Reset the application-scoped singletons around each test."""
    get_settings.cache_clear()
    get_locator.cache_clear()
    yield
    get_settings.cache_clear()
    get_locator.cache_clear()


@pytest.fixture(autouse=True)
def clear_log_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
