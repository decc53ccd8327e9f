"""Process-wide singletons for settings and the Locator."""

from functools import lru_cache

from infrastructure.configuration import Settings
from packages.geolocate.locator import Locator


@lru_cache
def get_settings() -> Settings:
    """Settings loaded from the environment, built once per process.

    Invalid values raise here, so a misconfigured service fails at startup.
    Tests reset the instance with ``get_settings.cache_clear()``.
    """
    return Settings()


@lru_cache
def get_locator() -> Locator:
    """Locator built from the application settings, once per process.

    The Locator owns the MaxMind reader pool; sharing one instance keeps the
    number of open readers bounded by MAXMIND_POOL_SIZE across all requests.
    """
    return Locator(settings=get_settings())
