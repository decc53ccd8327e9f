"""Settings for external geolocation data sources."""

from infrastructure.configuration.integrations.maxmind import MaxMindSettings

__all__ = [
    "MaxMindSettings",
]
