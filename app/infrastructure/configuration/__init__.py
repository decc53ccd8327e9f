"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the
geolocation service using Pydantic BaseSettings with domain-based
organization.

Exports:
    Settings: Main settings class (aggregator)
    MaxMindSettings: MaxMind database and reader pool settings
    GeolocationSettings: Provider selection and lookup policy

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    timeout = settings.maxmind.MAXMIND_TIMEOUT_SECONDS
    reject_private = settings.geolocation.GEOLOCATION_REJECT_PRIVATE_IPS
    ```
"""

from infrastructure.configuration.features import GeolocationSettings
from infrastructure.configuration.integrations import MaxMindSettings
from infrastructure.configuration.settings import Settings

__all__ = ["Settings", "MaxMindSettings", "GeolocationSettings"]
