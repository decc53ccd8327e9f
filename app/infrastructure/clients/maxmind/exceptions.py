"""Exceptions raised by the MaxMind reader client."""


class MaxMindClientError(Exception):
    """Base exception for MaxMind reader failures."""

    pass


class ReaderPoolTimeout(MaxMindClientError):
    """Raised when no reader becomes free within the pool wait timeout."""

    pass


class ReaderTimeout(MaxMindClientError):
    """Raised when a single record fetch exceeds the lookup timeout."""

    pass


class ReaderError(MaxMindClientError):
    """Raised for any other failure opening or reading the database."""

    pass


class ReaderPoolClosed(MaxMindClientError):
    """Raised when a reader is requested from a pool that has been closed."""

    pass
