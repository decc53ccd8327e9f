"""Cloudflare header geolocation provider.

Cloudflare resolves the visitor location at its edge and forwards it in
request headers. Country requires "IP Geolocation" to be enabled; the city,
region, coordinate and postal headers require the "Add visitor location
headers" managed transform.
"""

import math
from typing import Any, Optional

from packages.geolocate.countries import UNKNOWN, country_name, flag_emoji
from packages.geolocate.exceptions import MissingRequestContextError
from packages.geolocate.providers.base import GeolocationProvider, header_value
from packages.geolocate.schemas import LocationResult

COUNTRY_HEADER = "cf-ipcountry"
CITY_HEADER = "cf-ipcity"
REGION_HEADER = "cf-region"
REGION_CODE_HEADER = "cf-region-code"
CONTINENT_HEADER = "cf-ipcontinent"
TIMEZONE_HEADER = "cf-timezone"
LATITUDE_HEADER = "cf-iplatitude"
LONGITUDE_HEADER = "cf-iplongitude"
POSTAL_CODE_HEADER = "cf-postal-code"
METRO_CODE_HEADER = "cf-metro-code"
CONNECTING_IP_HEADER = "cf-connecting-ip"

# Sent when Cloudflare could not resolve the country; the Tor
# pseudo-code T1 is passed through like any other code
UNKNOWN_CODE = "XX"


def _parse_coordinate(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        coordinate = float(value)
    except ValueError:
        return None
    # float() accepts "nan" and "inf"
    return coordinate if math.isfinite(coordinate) else None


class CloudflareProvider(GeolocationProvider):
    """Provider reading the location Cloudflare attached to the request.

    No database or network access: the IP argument is accepted for symmetry
    with other providers but the edge has already resolved the location.
    """

    name = "cloudflare"

    def is_available(self, request: Any = None) -> bool:
        if request is None:
            return False
        country_code = header_value(request, COUNTRY_HEADER)
        return country_code is not None and country_code != UNKNOWN_CODE

    def locate(self, ip: Optional[str], request: Any = None) -> LocationResult:
        if request is None:
            raise MissingRequestContextError(
                "CloudflareProvider requires a request with Cloudflare headers "
                f"({COUNTRY_HEADER}); none was given"
            )

        country_code = header_value(request, COUNTRY_HEADER)
        if country_code is None or country_code == UNKNOWN_CODE:
            return LocationResult.unknown()

        country_code = country_code.upper()
        return LocationResult(
            country_code=country_code,
            country_name=country_name(country_code),
            city=header_value(request, CITY_HEADER) or UNKNOWN,
            flag_emoji=flag_emoji(country_code),
            region=header_value(request, REGION_HEADER),
            region_code=header_value(request, REGION_CODE_HEADER),
            continent=header_value(request, CONTINENT_HEADER),
            timezone=header_value(request, TIMEZONE_HEADER),
            latitude=_parse_coordinate(header_value(request, LATITUDE_HEADER)),
            longitude=_parse_coordinate(header_value(request, LONGITUDE_HEADER)),
            postal_code=header_value(request, POSTAL_CODE_HEADER),
            metro_code=header_value(request, METRO_CODE_HEADER),
        )
