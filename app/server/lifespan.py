from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_locator, get_settings

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    """Log top-level values, then the variable names of each section."""
    base_settings = []
    sections = {}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            sections[key] = list(value.keys())
        else:
            base_settings.append({key: value})

    logger.info("configuration_initialized", base_settings=base_settings)
    for section, keys in sections.items():
        logger.info("configuration_loaded", config_setting=section, keys=keys)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    # An unknown provider name fails startup here
    locator = get_locator()
    app.state.locator = locator
    logger.info(
        "geolocation_provider_configured",
        provider=locator.provider_name,
        database_path=settings.maxmind.MAXMIND_DB_PATH,
        reject_private_ips=locator.reject_private_ips,
        available_without_request=locator.is_available(),
    )

    try:
        yield
    finally:
        locator.close()
        logger.info("application_shutdown")
