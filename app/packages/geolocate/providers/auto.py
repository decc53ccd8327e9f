"""Automatic provider selection.

Priority order:
1. Cloudflare headers (no lookup cost) when they describe the real client
2. MaxMind database
3. The canonical unknown result

When another proxy sits in front of Cloudflare, Cloudflare geolocates that
proxy rather than the client. The address Cloudflare saw is forwarded in
``cf-connecting-ip``; if it differs from the address being looked up the
Cloudflare headers are skipped.
"""

import ipaddress
import threading
from typing import Any, Optional

from infrastructure.logging import get_module_logger
from packages.geolocate.providers.base import GeolocationProvider, header_value
from packages.geolocate.providers.cloudflare import (
    CONNECTING_IP_HEADER,
    CloudflareProvider,
)
from packages.geolocate.providers.maxmind import MaxMindProvider
from packages.geolocate.schemas import LocationResult

logger = get_module_logger()


class OneTimeNotice:
    """Flag that fires once; later calls to ``fire`` return False."""

    def __init__(self):
        self._fired = False
        self._lock = threading.Lock()

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self) -> bool:
        if self._fired:
            return False
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            return True


def normalize_ip(ip: Optional[str]) -> Optional[str]:
    """Canonical lowercase form of an address for equality checks.

    IPv4-mapped IPv6 addresses collapse to plain IPv4. Unparsable values
    fall back to their lowercased text.
    """
    if ip is None:
        return None

    value = str(ip).strip()
    if not value:
        return None

    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return value.lower()

    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        address = address.ipv4_mapped
    return str(address).lower()


class AutoProvider(GeolocationProvider):
    """Provider choosing between Cloudflare headers and the MaxMind database.

    Never raises for a missing backend: with neither provider usable it
    returns the canonical unknown result.

    Args:
        cloudflare: Header-based provider
        maxmind: Database-based provider
    """

    name = "auto"

    def __init__(self, cloudflare: CloudflareProvider, maxmind: MaxMindProvider):
        self.cloudflare = cloudflare
        self.maxmind = maxmind
        self.ip_mismatch_notice = OneTimeNotice()
        self.no_provider_notice = OneTimeNotice()

    def is_available(self, request: Any = None) -> bool:
        return self.cloudflare.is_available(request) or self.maxmind.is_available(
            request
        )

    def locate(self, ip: Optional[str], request: Any = None) -> LocationResult:
        if self.cloudflare.is_available(request):
            if self._connecting_ip_matches(ip, request):
                return self.cloudflare.locate(ip, request)
            self._warn_ip_mismatch(ip, request)

        if self.maxmind.is_available(request):
            return self.maxmind.locate(ip, request)

        self._warn_no_providers()
        return LocationResult.unknown()

    def _connecting_ip_matches(self, ip: Optional[str], request: Any) -> bool:
        if request is None:
            return True

        connecting_ip = header_value(request, CONNECTING_IP_HEADER)
        if connecting_ip is None:
            return True

        return normalize_ip(ip) == normalize_ip(connecting_ip)

    def _warn_ip_mismatch(self, ip: Optional[str], request: Any) -> None:
        if not self.ip_mismatch_notice.fire():
            return
        logger.info(
            "connecting_ip_mismatch",
            ip_address=ip,
            connecting_ip=header_value(request, CONNECTING_IP_HEADER),
            detail=(
                "Request IP differs from CF-Connecting-IP, so a proxy likely sits "
                "in front of Cloudflare. Falling back to MaxMind."
            ),
        )

    def _warn_no_providers(self) -> None:
        if not self.no_provider_notice.fire():
            return
        logger.warning(
            "no_geolocation_provider_available",
            detail=(
                "Returning 'Unknown' for all lookups. Enable Cloudflare visitor "
                "location headers or install a MaxMind database at MAXMIND_DB_PATH."
            ),
        )
