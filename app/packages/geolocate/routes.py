"""FastAPI routes for geolocate package."""

import structlog
from fastapi import APIRouter, HTTPException, Request

from infrastructure.logging import bind_request_context
from infrastructure.services import LocatorDep
from packages.geolocate.exceptions import (
    BackendError,
    BackendUnavailableError,
    DatabaseNotFoundError,
    GeolocationError,
    InvalidIpFormatError,
    LookupTimeoutError,
    MissingRequestContextError,
    PoolExhaustedError,
    PrivateIpRejectedError,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/geolocate", tags=["geolocate"])

STATUS_CODES = (
    (InvalidIpFormatError, 400),
    (MissingRequestContextError, 400),
    (PrivateIpRejectedError, 403),
    (LookupTimeoutError, 504),
    (DatabaseNotFoundError, 503),
    (BackendUnavailableError, 503),
    (PoolExhaustedError, 503),
    (BackendError, 500),
)


def status_code_for(error: GeolocationError) -> int:
    for error_class, status_code in STATUS_CODES:
        if isinstance(error, error_class):
            return status_code
    return 500


@router.get(
    "/{ip}",
    summary="Geolocate IP Address",
    description="Resolve an IP address with the configured geolocation provider",
)
def get_geolocate(ip: str, request: Request, locator: LocatorDep) -> dict:
    """Geolocate an IP address via HTTP GET.

    The inbound request is passed along as the request context, so Cloudflare
    headers on the call are used when the auto or cloudflare provider is
    configured.

    Raises:
        HTTPException: 400 invalid IP, 403 private IP, 503 database unavailable,
            504 lookup timeout, 500 other errors
    """
    with bind_request_context(
        correlation_id=request.headers.get("x-correlation-id"),
        request_path=request.url.path,
        request_method=request.method,
        ip_address=ip,
    ):
        log = logger.bind(endpoint="/geolocate", provider=locator.provider_name)
        log.info("geolocate_request")

        try:
            result = locator.locate(ip, request=request)
        except GeolocationError as e:
            status_code = status_code_for(e)
            log.warning("geolocate_failed", status_code=status_code, error=str(e))
            raise HTTPException(status_code=status_code, detail=str(e))

        log.info("geolocate_success", country_code=result.country_code)
        return result.to_dict()
