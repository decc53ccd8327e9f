"""MaxMind database client for infrastructure layer.

Public API (Package Level):
- MaxMindClient: Pooled, timeout-bounded database record lookups
- ReaderPool: Bounded pool of reader handles
- MaxMindClientError and subclasses: Reader failures

Developer Usage:
    from infrastructure.clients.maxmind import MaxMindClient

    client = MaxMindClient(settings=settings)
    record = client.get_record("8.8.8.8")
"""

from infrastructure.clients.maxmind.client import MaxMindClient
from infrastructure.clients.maxmind.exceptions import (
    MaxMindClientError,
    ReaderError,
    ReaderPoolClosed,
    ReaderPoolTimeout,
    ReaderTimeout,
)
from infrastructure.clients.maxmind.pool import ReaderPool

__all__ = [
    "MaxMindClient",
    "ReaderPool",
    "MaxMindClientError",
    "ReaderError",
    "ReaderPoolClosed",
    "ReaderPoolTimeout",
    "ReaderTimeout",
]
