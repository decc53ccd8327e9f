"""Geolocation providers.

- CloudflareProvider: location from Cloudflare request headers
- MaxMindProvider: location from a local MaxMind City database
- AutoProvider: Cloudflare when trustworthy, MaxMind otherwise
"""

from packages.geolocate.providers.auto import AutoProvider
from packages.geolocate.providers.base import GeolocationProvider
from packages.geolocate.providers.cloudflare import CloudflareProvider
from packages.geolocate.providers.maxmind import MaxMindProvider

__all__ = [
    "GeolocationProvider",
    "CloudflareProvider",
    "MaxMindProvider",
    "AutoProvider",
]
