"""Structlog configuration for the geolocation service.

Every log entry goes through one processor chain: request context (the
correlation ID and the address being looked up), level, timestamp and call
site, then a console renderer in development or JSON in production. Under
pytest nothing is emitted.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("reader_pool_created", pool_size=5)
"""

import inspect
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import EventDict, Processor, WrappedLogger

from infrastructure.configuration import Settings

SERVICE_NAME = "geolocate"

# Silences every stdlib handler, CRITICAL included
SUPPRESSED_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    """Return True when running under pytest."""
    return "pytest" in sys.modules


def _add_service_name(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _build_processors(prod_mode: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def _configure_silent() -> BoundLogger:
    logging.root.setLevel(SUPPRESSED_LEVEL)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=SUPPRESSED_LEVEL, force=True)
    return structlog.stdlib.get_logger()


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Settings providing LOG_LEVEL and is_production. Built from
            the environment when omitted.
        log_level: Overrides settings.LOG_LEVEL (DEBUG, INFO, WARNING, ...).
        is_production: Overrides settings.is_production; selects JSON output.

    Returns:
        A logger bound to the new configuration.
    """
    if _is_test_environment():
        return _configure_silent()

    if settings is None:
        settings = Settings()

    prod_mode = is_production if is_production is not None else settings.is_production

    structlog.configure(
        processors=_build_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )

    return structlog.stdlib.get_logger()


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Binds ``component`` (last segment of the module name) and
    ``module_path`` (dotted module name), e.g. ``component="auto"``,
    ``module_path="packages.geolocate.providers.auto"``.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module: Any = inspect.getmodule(caller) if caller is not None else None

    if module is None:
        return logger.bind(component="unknown")

    module_name = module.__name__
    return logger.bind(
        component=module_name.rsplit(".", 1)[-1],
        module_path=module_name,
    )
