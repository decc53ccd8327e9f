"""Geolocate package - IP geolocation via Cloudflare headers or MaxMind."""

from packages.geolocate.exceptions import (
    BackendError,
    BackendUnavailableError,
    ConfigurationError,
    DatabaseNotFoundError,
    GeolocationError,
    InvalidIpFormatError,
    LookupTimeoutError,
    MissingRequestContextError,
    PoolExhaustedError,
    PrivateIpRejectedError,
)
from packages.geolocate.locator import Locator
from packages.geolocate.schemas import LocationResult
from packages.geolocate.validators import is_private_ip, validate_ip

__all__ = [
    "Locator",
    "LocationResult",
    "validate_ip",
    "is_private_ip",
    "GeolocationError",
    "InvalidIpFormatError",
    "PrivateIpRejectedError",
    "MissingRequestContextError",
    "ConfigurationError",
    "DatabaseNotFoundError",
    "BackendUnavailableError",
    "PoolExhaustedError",
    "LookupTimeoutError",
    "BackendError",
]
