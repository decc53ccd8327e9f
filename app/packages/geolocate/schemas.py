"""Pydantic schemas for geolocate package.

LocationResult is the value returned to callers. The *Record models mirror
the documented MaxMind GeoIP2/GeoLite2 City record layout so that a raw
database record is normalized in a single validation pass.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from packages.geolocate.countries import (
    UNKNOWN,
    UNKNOWN_FLAG,
    country_info as lookup_country_info,
)


class LocationResult(BaseModel):
    """Geolocation data for an IP address.

    Immutable once built. A result without ``country_code`` is the canonical
    unknown result: names are "Unknown", the flag is neutral and every
    optional field is None.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "country_code": "US",
                "country_name": "United States",
                "city": "Mountain View",
                "flag_emoji": "🇺🇸",
                "region": "California",
                "region_code": "CA",
                "continent": "NA",
                "timezone": "America/Los_Angeles",
                "latitude": 37.386,
                "longitude": -122.0838,
                "postal_code": "94035",
                "metro_code": "807",
            }
        },
    )

    country_code: Optional[str] = Field(None, description="ISO country code")
    country_name: str = Field(UNKNOWN, description="Country name")
    city: str = Field(UNKNOWN, description="City name")
    flag_emoji: str = Field(UNKNOWN_FLAG, description="Country flag emoji")
    region: Optional[str] = Field(None, description="First-level subdivision name")
    region_code: Optional[str] = Field(None, description="Subdivision ISO code")
    continent: Optional[str] = Field(None, description="Continent code")
    timezone: Optional[str] = Field(None, description="IANA time zone")
    latitude: Optional[float] = Field(None, description="Latitude")
    longitude: Optional[float] = Field(None, description="Longitude")
    postal_code: Optional[str] = Field(None, description="Postal/ZIP code")
    metro_code: Optional[str] = Field(None, description="Metro (DMA) code")

    @classmethod
    def unknown(cls) -> "LocationResult":
        """Build the result used whenever no country-level data is known."""
        return cls()

    @property
    def is_unknown(self) -> bool:
        return self.country_code is None

    @property
    def country(self) -> str:
        return self.country_name

    @property
    def emoji(self) -> str:
        return self.flag_emoji

    @property
    def emoji_flag(self) -> str:
        return self.flag_emoji

    @property
    def country_flag(self) -> str:
        return self.flag_emoji

    @property
    def country_info(self) -> Optional[Dict[str, Any]]:
        """ISO 3166 details for the country, when the code is a real country."""
        return lookup_country_info(self.country_code)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat dictionary.

        Every field is present; absent optional fields are None and
        ``country_info`` is an empty mapping when unavailable.
        """
        data = self.model_dump()
        data["country_info"] = self.country_info or {}
        return data


class NamedRecord(BaseModel):
    """A record section carrying localized names."""

    model_config = ConfigDict(extra="ignore")

    names: Dict[str, str] = Field(default_factory=dict)

    def preferred_name(self, locale: str = "en") -> Optional[str]:
        """Name in the given locale, else the first name available."""
        if self.names.get(locale) is not None:
            return self.names[locale]
        return next(iter(self.names.values()), None)


class CountryRecord(NamedRecord):
    iso_code: Optional[str] = None


class SubdivisionRecord(NamedRecord):
    iso_code: Optional[str] = None


class ContinentRecord(NamedRecord):
    code: Optional[str] = None


class LocationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time_zone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    metro_code: Optional[Union[int, str]] = None


class PostalRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: Optional[str] = None


class CityRecord(BaseModel):
    """Typed view of a raw GeoIP2/GeoLite2 City database record."""

    model_config = ConfigDict(extra="ignore")

    country: Optional[CountryRecord] = None
    city: Optional[NamedRecord] = None
    subdivisions: List[SubdivisionRecord] = Field(default_factory=list)
    continent: Optional[ContinentRecord] = None
    location: Optional[LocationRecord] = None
    postal: Optional[PostalRecord] = None

    @property
    def first_subdivision(self) -> Optional[SubdivisionRecord]:
        # Only the top-level subdivision is reported (e.g. state, not county)
        return self.subdivisions[0] if self.subdivisions else None
