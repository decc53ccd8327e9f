"""Request-scoped logging context.

Lookups served over HTTP bind a correlation ID, the request path and the
address being resolved, so every entry logged by the locator, the providers
and the reader client during that request can be tied together.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog

CORRELATION_ID_KEY = "correlation_id"


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind request context to every log entry made inside the block.

    Args:
        correlation_id: Request identifier; a UUID4 is generated when omitted.
        request_path: HTTP path, e.g. "/geolocate/8.8.8.8".
        request_method: HTTP method.
        **extra_context: Further keys, e.g. ``ip_address``.

    Values bound by an enclosing block are restored on exit.
    """
    context = {CORRELATION_ID_KEY: correlation_id or str(uuid.uuid4())}
    if request_path is not None:
        context["request_path"] = request_path
    if request_method is not None:
        context["request_method"] = request_method
    context.update(extra_context)

    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_correlation_id() -> Optional[str]:
    """Correlation ID bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get(CORRELATION_ID_KEY)


def clear_request_context() -> None:
    """Drop all bound context; call between requests on reused workers."""
    structlog.contextvars.clear_contextvars()
