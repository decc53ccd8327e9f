"""Process-wide services and their FastAPI dependency aliases."""

from infrastructure.services.dependencies import LocatorDep, SettingsDep
from infrastructure.services.providers import get_locator, get_settings

__all__ = [
    "SettingsDep",
    "LocatorDep",
    "get_settings",
    "get_locator",
]
