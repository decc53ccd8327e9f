"""Geolocation feature settings."""

from typing import Literal

from infrastructure.configuration.base import FeatureSettings

ProviderName = Literal["auto", "cloudflare", "maxmind"]


class GeolocationSettings(FeatureSettings):
    """Provider selection and lookup policy for IP geolocation.

    Environment Variables:
        GEOLOCATION_PROVIDER: 'auto' (Cloudflare headers first, MaxMind
            fallback), 'cloudflare' or 'maxmind' (default: auto)
        GEOLOCATION_REJECT_PRIVATE_IPS: Refuse private and loopback
            addresses before any lookup (default: True)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.geolocation.GEOLOCATION_PROVIDER == "maxmind":
            # Database-only lookups...
        ```
    """

    GEOLOCATION_PROVIDER: ProviderName = "auto"
    GEOLOCATION_REJECT_PRIVATE_IPS: bool = True
