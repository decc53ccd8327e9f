"""Locator facade: validation, private-IP policy and provider dispatch.

The provider is resolved once, when the Locator is built, from
``settings.geolocation.GEOLOCATION_PROVIDER``.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from infrastructure.clients.maxmind import MaxMindClient
from infrastructure.logging import get_module_logger
from packages.geolocate.exceptions import ConfigurationError, PrivateIpRejectedError
from packages.geolocate.providers import (
    AutoProvider,
    CloudflareProvider,
    GeolocationProvider,
    MaxMindProvider,
)
from packages.geolocate.schemas import LocationResult
from packages.geolocate.validators import is_private_ip, validate_ip

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


def build_providers(
    settings: "Settings", client: Optional[MaxMindClient] = None
) -> Dict[str, GeolocationProvider]:
    """Build every known provider, keyed by its configuration name."""
    cloudflare = CloudflareProvider()
    maxmind = MaxMindProvider(client or MaxMindClient(settings=settings))
    auto = AutoProvider(cloudflare=cloudflare, maxmind=maxmind)
    return {provider.name: provider for provider in (auto, cloudflare, maxmind)}


class Locator:
    """Entry point for IP geolocation.

    Args:
        settings: Settings instance (geolocation and maxmind sections)
        providers: Optional provider mapping; built from settings when omitted

    Raises:
        ConfigurationError: If the configured provider name is not known

    Example:
        locator = Locator(settings=get_settings())
        result = locator.locate("8.8.8.8", request=request)
        print(result.country_name, result.flag_emoji)
    """

    def __init__(
        self,
        settings: "Settings",
        providers: Optional[Dict[str, GeolocationProvider]] = None,
    ):
        self.settings = settings
        self.providers = providers if providers is not None else build_providers(settings)
        self.reject_private_ips = settings.geolocation.GEOLOCATION_REJECT_PRIVATE_IPS

        provider_name = settings.geolocation.GEOLOCATION_PROVIDER
        if provider_name not in self.providers:
            raise ConfigurationError(
                f"Invalid provider: {provider_name}. "
                f"Must be one of: {', '.join(sorted(self.providers))}"
            )
        self.provider = self.providers[provider_name]
        logger.debug(
            "locator_initialized",
            provider=provider_name,
            reject_private_ips=self.reject_private_ips,
        )

    @property
    def provider_name(self) -> str:
        return self.provider.name

    def is_available(self, request: Any = None) -> bool:
        return self.provider.is_available(request)

    def locate(self, ip: Optional[str], request: Any = None) -> LocationResult:
        """Geolocate an IP address with the configured provider.

        Args:
            ip: IPv4 or IPv6 address to geolocate
            request: Optional inbound request whose headers may carry
                edge-network geolocation

        Returns:
            LocationResult from the selected provider

        Raises:
            InvalidIpFormatError: If the address is malformed
            PrivateIpRejectedError: If the address is private or loopback and
                the private-IP policy is enabled
            GeolocationError: Any provider failure (explicit providers only)
        """
        validate_ip(ip)

        if self.reject_private_ips and ip and is_private_ip(ip):
            logger.info("private_ip_rejected", ip_address=ip)
            raise PrivateIpRejectedError(f"Private IP addresses are not allowed: {ip}")

        return self.provider.locate(ip, request)

    def reload_database(self) -> None:
        """Reopen the MaxMind database on the next lookup.

        Call after the database file has been atomically replaced.
        """
        maxmind = self._maxmind_provider()
        if maxmind is not None:
            maxmind.client.reset()

    def close(self) -> None:
        """Release pooled database readers and lookup threads."""
        maxmind = self._maxmind_provider()
        if maxmind is not None:
            maxmind.client.close()

    def _maxmind_provider(self) -> Optional[MaxMindProvider]:
        maxmind = self.providers.get(MaxMindProvider.name)
        return maxmind if isinstance(maxmind, MaxMindProvider) else None
