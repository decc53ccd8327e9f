"""Geolocation provider abstract class and request helpers."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from packages.geolocate.schemas import LocationResult


def request_headers(request: Any) -> Mapping[str, str]:
    """Header mapping of a request context.

    Accepts anything exposing ``headers`` (a Starlette/FastAPI ``Request``,
    for instance) or a plain header mapping.
    """
    if request is None:
        return {}
    return getattr(request, "headers", request)


def header_value(request: Any, name: str) -> Optional[str]:
    """Header value, with missing and empty values both reported as None."""
    value = request_headers(request).get(name)
    if value is None or value == "":
        return None
    return value


class GeolocationProvider(ABC):
    """Abstract Base Class for geolocation providers.

    A provider answers two questions for a request context: can it
    geolocate at all (``is_available``), and what location does it find
    (``locate``).
    """

    name: str = ""

    @abstractmethod
    def is_available(self, request: Any = None) -> bool:
        """Return True if this provider can handle the given request."""

    @abstractmethod
    def locate(self, ip: Optional[str], request: Any = None) -> LocationResult:
        """Locate an IP address.

        Args:
            ip: The IP address to locate
            request: Optional inbound request used for header access

        Returns:
            LocationResult with the location information
        """
