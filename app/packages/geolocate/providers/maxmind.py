"""MaxMind database geolocation provider."""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from infrastructure.clients.maxmind import (
    MaxMindClient,
    ReaderError,
    ReaderPoolTimeout,
    ReaderTimeout,
)
from infrastructure.clients.maxmind.client import READER_PACKAGE
from infrastructure.logging import get_module_logger
from packages.geolocate.countries import UNKNOWN, flag_emoji
from packages.geolocate.exceptions import (
    BackendError,
    BackendUnavailableError,
    DatabaseNotFoundError,
    LookupTimeoutError,
    PoolExhaustedError,
)
from packages.geolocate.providers.base import GeolocationProvider
from packages.geolocate.schemas import CityRecord, LocationResult, NamedRecord

logger = get_module_logger()


def _name(section: Optional[NamedRecord]) -> Optional[str]:
    return section.preferred_name() if section is not None else None


def normalize_record(raw: Dict[str, Any]) -> LocationResult:
    """Turn a raw GeoLite2/GeoIP2 City record into a LocationResult.

    Raises:
        pydantic.ValidationError: If the record does not match the City layout
    """
    record = CityRecord.model_validate(raw)

    country_code = record.country.iso_code if record.country else None
    if not country_code:
        return LocationResult.unknown()

    subdivision = record.first_subdivision
    location = record.location
    metro_code = location.metro_code if location else None

    return LocationResult(
        country_code=country_code,
        country_name=_name(record.country) or UNKNOWN,
        city=_name(record.city) or UNKNOWN,
        flag_emoji=flag_emoji(country_code),
        region=_name(subdivision),
        region_code=subdivision.iso_code if subdivision else None,
        continent=record.continent.code if record.continent else None,
        timezone=location.time_zone if location else None,
        latitude=location.latitude if location else None,
        longitude=location.longitude if location else None,
        postal_code=record.postal.code if record.postal else None,
        metro_code=str(metro_code) if metro_code is not None else None,
    )


class MaxMindProvider(GeolocationProvider):
    """Provider looking addresses up in a local MaxMind City database.

    Args:
        client: MaxMindClient owning the reader pool
    """

    name = "maxmind"

    def __init__(self, client: MaxMindClient):
        self.client = client

    def is_available(self, request: Any = None) -> bool:
        return self.client.reader_available() and self.client.database_exists()

    def locate(self, ip: Optional[str], request: Any = None) -> LocationResult:
        if not self.client.database_exists():
            raise DatabaseNotFoundError(
                f"MaxMind database not found at {self.client.db_path}. "
                "Set MAXMIND_DB_PATH or download the GeoLite2-City database "
                "before using the maxmind provider."
            )
        if not self.client.reader_available():
            raise BackendUnavailableError(
                f"The '{READER_PACKAGE}' package is not installed; "
                f"install it to use the maxmind provider."
            )

        try:
            raw = self.client.get_record(ip)
        except ReaderPoolTimeout as e:
            raise PoolExhaustedError(str(e)) from e
        except ReaderTimeout as e:
            raise LookupTimeoutError(str(e)) from e
        except ReaderError as e:
            raise BackendError(str(e)) from e

        if raw is None:
            logger.debug("ip_not_found", ip_address=ip)
            return LocationResult.unknown()

        try:
            return normalize_record(raw)
        except ValidationError as e:
            logger.error("malformed_record", ip_address=ip, error=str(e))
            raise BackendError(f"Malformed database record for {ip}: {e}") from e
