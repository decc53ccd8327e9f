"""Settings for geolocation lookup behaviour."""

from infrastructure.configuration.features.geolocation import GeolocationSettings

__all__ = [
    "GeolocationSettings",
]
