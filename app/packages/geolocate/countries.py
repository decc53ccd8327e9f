"""Country helpers backed by the ISO 3166 data shipped with pycountry."""

from typing import Any, Dict, Optional

import pycountry

UNKNOWN = "Unknown"
UNKNOWN_FLAG = "\U0001f3f3\ufe0f"

_REGIONAL_INDICATOR_A = 0x1F1E6


def flag_emoji(country_code: Optional[str]) -> str:
    """Build the flag emoji for a two-letter country code.

    Letters map to regional indicator symbols; any other character is kept
    unchanged. A missing code yields the neutral white flag.
    """
    if not country_code:
        return UNKNOWN_FLAG
    return "".join(
        chr(_REGIONAL_INDICATOR_A + ord(char) - ord("A")) if "A" <= char <= "Z" else char
        for char in country_code
    )


def _lookup(country_code: Optional[str]) -> Any:
    if not country_code:
        return None
    try:
        return pycountry.countries.get(alpha_2=country_code.upper())
    except (KeyError, LookupError):
        return None


def country_name(country_code: Optional[str]) -> str:
    """Resolve the ISO short name for a country code, or "Unknown"."""
    country = _lookup(country_code)
    if country is None:
        return UNKNOWN
    return country.name


def country_info(country_code: Optional[str]) -> Optional[Dict[str, Any]]:
    """ISO 3166 details for a country code, or None when the code is unknown."""
    country = _lookup(country_code)
    if country is None:
        return None

    info = {
        "alpha_2": country.alpha_2,
        "alpha_3": country.alpha_3,
        "numeric": country.numeric,
        "name": country.name,
    }
    official_name = getattr(country, "official_name", None)
    if official_name:
        info["official_name"] = official_name
    return info
