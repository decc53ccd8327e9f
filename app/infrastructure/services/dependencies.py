"""FastAPI dependency aliases.

Route handlers declare ``locator: LocatorDep`` and receive the process-wide
Locator; tests swap it through ``app.dependency_overrides[get_locator]``.
"""

from typing import Annotated

from fastapi import Depends

from infrastructure.configuration import Settings
from infrastructure.services.providers import get_locator, get_settings
from packages.geolocate.locator import Locator

SettingsDep = Annotated[Settings, Depends(get_settings)]

# One Locator, and so one reader pool, per process
LocatorDep = Annotated[Locator, Depends(get_locator)]

__all__ = [
    "SettingsDep",
    "LocatorDep",
]
