"""MaxMind integration settings."""

import os
from typing import Literal

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings

DEFAULT_DATABASE_FILE = os.path.join("db", "GeoLite2-City.mmdb")

# Path-based reader modes only; MODE_FD takes a file object
MemoryMode = Literal["auto", "mmap_ext", "mmap", "file", "memory"]


def default_database_path() -> str:
    """Resolve the default GeoLite2 database location.

    When the host application exports its root directory through ``APP_ROOT``
    the database lives under ``<APP_ROOT>/db``; otherwise the path is relative
    to the working directory.
    """
    app_root = os.environ.get("APP_ROOT")
    if app_root:
        return os.path.join(app_root, DEFAULT_DATABASE_FILE)
    return DEFAULT_DATABASE_FILE


class MaxMindSettings(IntegrationSettings):
    """MaxMind GeoIP database configuration.

    Environment Variables:
        MAXMIND_DB_PATH: Path to MaxMind GeoLite2-City database file
        MAXMIND_TIMEOUT_SECONDS: Hard timeout for a single record fetch (default: 3)
        MAXMIND_POOL_SIZE: Maximum number of open database readers (default: 5)
        MAXMIND_POOL_WAIT_SECONDS: Maximum wait for a free reader (default: 3)
        MAXMIND_MEMORY_MODE: Reader mode - 'memory' loads the whole database,
            'mmap'/'file' read on demand, 'auto' lets the reader decide

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        db_path = settings.maxmind.MAXMIND_DB_PATH
        ```
    """

    MAXMIND_DB_PATH: str = Field(default_factory=default_database_path)
    MAXMIND_TIMEOUT_SECONDS: float = Field(default=3, gt=0)
    MAXMIND_POOL_SIZE: int = Field(default=5, gt=0)
    MAXMIND_POOL_WAIT_SECONDS: float = Field(default=3, gt=0)
    MAXMIND_MEMORY_MODE: MemoryMode = "memory"
