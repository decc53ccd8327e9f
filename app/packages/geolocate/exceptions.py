"""Exceptions for IP geolocation lookups.

All geolocation failures derive from GeolocationError so application code
can handle the whole family in one place:

    try:
        result = locator.locate(ip, request=request)
    except GeolocationError as e:
        logger.error("geolocation_failed", error=str(e))
"""


class GeolocationError(Exception):
    """Base exception for all geolocation errors."""

    pass


class InvalidIpFormatError(GeolocationError, ValueError):
    """Raised when a non-empty IP address is not valid IPv4 or IPv6."""

    pass


class PrivateIpRejectedError(GeolocationError):
    """Raised when a private or loopback address is looked up while the
    private-IP policy is enabled."""

    pass


class MissingRequestContextError(GeolocationError):
    """Raised when a header-based provider is called without a request."""

    pass


class ConfigurationError(GeolocationError):
    """Raised when the configured provider cannot be resolved."""

    pass


class DatabaseNotFoundError(GeolocationError):
    """Raised when the MaxMind database file does not exist."""

    pass


class BackendUnavailableError(GeolocationError):
    """Raised when the database reader package is not installed."""

    pass


class PoolExhaustedError(GeolocationError):
    """Raised when no database reader became free within the pool wait timeout."""

    pass


class LookupTimeoutError(GeolocationError):
    """Raised when a database lookup exceeds its timeout. Safe to retry."""

    pass


class BackendError(GeolocationError):
    """Raised for unexpected failures reading or decoding database records."""

    pass
