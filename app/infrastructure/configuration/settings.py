"""Geolocation service settings - aggregator of all sections."""

from typing import Any, Dict, Type

from pydantic_settings import BaseSettings

from infrastructure.configuration.base import SECTION_CONFIG
from infrastructure.configuration.features import GeolocationSettings
from infrastructure.configuration.integrations import MaxMindSettings

# Section attribute name -> settings class built from the environment
SECTIONS: Dict[str, Type[BaseSettings]] = {
    "maxmind": MaxMindSettings,
    "geolocation": GeolocationSettings,
}


class Settings(BaseSettings):
    """All service settings, grouped by section.

    - ``maxmind``: database location, lookup timeout, reader pool
    - ``geolocation``: provider selection and private-IP policy

    Every value is validated when the object is built, so a bad provider
    name or a non-positive timeout fails at startup rather than on the
    first lookup. Sections passed explicitly are used as given, which is
    how tests and embedding applications inject configuration:

        settings = Settings(
            geolocation=GeolocationSettings(GEOLOCATION_PROVIDER="maxmind"),
        )

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    maxmind: MaxMindSettings
    geolocation: GeolocationSettings

    model_config = SECTION_CONFIG

    @property
    def is_production(self) -> bool:
        """True when no PREFIX is set."""
        return not self.PREFIX

    def __init__(self, **kwargs: Any):
        for section, settings_class in SECTIONS.items():
            if section not in kwargs:
                kwargs[section] = settings_class()
        super().__init__(**kwargs)
