"""Structured logging for the geolocation service (structlog).

Call ``configure_logging()`` once at startup, take a logger per module with
``get_module_logger()``, and wrap each lookup in ``bind_request_context()``
so its log entries share a correlation ID:

    logger = get_module_logger()

    with bind_request_context(correlation_id=request_id, ip_address=ip):
        logger.info("geolocate_request")
"""

from infrastructure.logging.context import (
    bind_request_context,
    clear_request_context,
    get_correlation_id,
)
from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_request_context",
    "get_correlation_id",
    "clear_request_context",
]
