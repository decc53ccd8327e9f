"""Base classes shared by the settings sections."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Variables are read from the environment or a local .env file, matched
# case-sensitively; variables belonging to other sections are ignored.
SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    case_sensitive=True,
    extra="ignore",
)


class IntegrationSettings(BaseSettings):
    """Settings for an external data source (e.g. the MaxMind database)."""

    model_config = SECTION_CONFIG


class FeatureSettings(BaseSettings):
    """Settings controlling lookup behaviour (provider choice, IP policy)."""

    model_config = SECTION_CONFIG
