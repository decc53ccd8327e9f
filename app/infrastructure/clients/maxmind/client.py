"""MaxMind database client for geolocation lookups.

Provides pooled, timeout-bounded access to a local MaxMind GeoLite2/GeoIP2
database. Raw records are returned as the reader produces them; turning
them into location results is left to the caller.
"""

import importlib
import importlib.util
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

import structlog

from infrastructure.clients.maxmind.exceptions import (
    ReaderError,
    ReaderPoolClosed,
    ReaderPoolTimeout,
    ReaderTimeout,
)
from infrastructure.clients.maxmind.pool import ReaderPool

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()

READER_PACKAGE = "maxminddb"


class MaxMindClient:
    """Client for MaxMind database record lookups.

    The reader pool and the lookup executor are created on first use and
    shared by every thread using this client.

    Args:
        settings: Settings instance with the maxmind section
        reader_factory: Optional callable opening a reader; defaults to
            ``maxminddb.open_database`` with the configured memory mode
    """

    def __init__(
        self,
        settings: "Settings",
        reader_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        maxmind = settings.maxmind
        self._db_path = maxmind.MAXMIND_DB_PATH
        self._timeout = maxmind.MAXMIND_TIMEOUT_SECONDS
        self._pool_size = maxmind.MAXMIND_POOL_SIZE
        self._pool_wait = maxmind.MAXMIND_POOL_WAIT_SECONDS
        self._memory_mode = maxmind.MAXMIND_MEMORY_MODE
        self._reader_factory = reader_factory or self._open_reader

        self._resources: Optional[Tuple[ReaderPool, ThreadPoolExecutor]] = None
        self._lock = threading.Lock()
        self._logger = logger.bind(component="maxmind_client")

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def timeout(self) -> float:
        return self._timeout

    def database_exists(self) -> bool:
        """Check whether the configured database file is present on disk."""
        return os.path.isfile(self._db_path)

    @staticmethod
    def reader_available() -> bool:
        """Check whether the maxminddb reader package can be imported."""
        return importlib.util.find_spec(READER_PACKAGE) is not None

    def get_record(self, ip_address: str) -> Optional[Dict[str, Any]]:
        """Fetch the raw database record for an IP address.

        A reader is checked out of the pool for the duration of the fetch
        only and is returned as soon as the fetch finishes, even when the
        caller has already given up waiting.

        Args:
            ip_address: IPv4 or IPv6 address to look up

        Returns:
            The raw record mapping, or None if the address is not in the database

        Raises:
            ReaderPoolTimeout: No reader became free within the pool wait timeout
            ReaderTimeout: The fetch exceeded the lookup timeout
            ReaderError: The database could not be opened or read, or the
                pool was closed again by reset() after one retry
        """
        log = self._logger.bind(ip_address=ip_address)
        pool, executor, reader = self._acquire_reader(log)

        try:
            future = executor.submit(_fetch, pool, reader, ip_address)
        except Exception as e:
            pool.release(reader)
            raise ReaderError(f"Unable to schedule database lookup: {e}") from e

        try:
            record = future.result(timeout=self._timeout)
        except FuturesTimeoutError as e:
            log.warning("lookup_timed_out", timeout_seconds=self._timeout)
            raise ReaderTimeout(
                f"MaxMind database lookup timed out after {self._timeout} seconds"
            ) from e
        except Exception as e:
            log.error("lookup_failed", error=str(e))
            raise ReaderError(f"Database error: {e}") from e

        log.debug("record_fetched", found=record is not None)
        return record

    def reset(self) -> None:
        """Drop the reader pool so the next lookup reopens the database.

        Call after the database file has been replaced. Idle readers are
        closed immediately; readers busy with a fetch are closed when that
        fetch completes.
        """
        with self._lock:
            resources = self._resources
            self._resources = None

        if resources is None:
            return

        pool, executor = resources
        pool.close()
        executor.shutdown(wait=False)
        self._logger.info("reader_pool_reset", db_path=self._db_path)

    close = reset

    def _acquire_reader(
        self, log: Any
    ) -> Tuple[ReaderPool, ThreadPoolExecutor, Any]:
        # A reset() may close the pool between _get_resources() and acquire();
        # the second attempt uses the pool built to replace it
        for _attempt in range(2):
            resources = self._get_resources()
            pool, executor = resources
            try:
                return pool, executor, pool.acquire()
            except ReaderPoolTimeout:
                raise
            except ReaderPoolClosed:
                log.debug("reader_pool_closed_during_acquire")
                self._discard_resources(resources)
            except Exception as e:
                log.error("database_open_failed", error=str(e), db_path=self._db_path)
                raise ReaderError(
                    f"Unable to open MaxMind database at {self._db_path}: {e}"
                ) from e

        raise ReaderError(
            "MaxMind reader pool was closed by a concurrent reset; retry the lookup"
        )

    def _discard_resources(
        self, stale: Tuple[ReaderPool, ThreadPoolExecutor]
    ) -> None:
        with self._lock:
            if self._resources is not stale:
                return
            self._resources = None
        stale[1].shutdown(wait=False)

    def _get_resources(self) -> Tuple[ReaderPool, ThreadPoolExecutor]:
        resources = self._resources
        if resources is not None:
            return resources

        with self._lock:
            if self._resources is None:
                pool = ReaderPool(
                    self._reader_factory,
                    size=self._pool_size,
                    wait_seconds=self._pool_wait,
                )
                executor = ThreadPoolExecutor(
                    max_workers=self._pool_size,
                    thread_name_prefix="maxmind-lookup",
                )
                self._resources = (pool, executor)
                self._logger.debug(
                    "reader_pool_created",
                    pool_size=self._pool_size,
                    memory_mode=self._memory_mode,
                )
            return self._resources

    def _open_reader(self) -> Any:
        maxminddb = importlib.import_module(READER_PACKAGE)
        mode = getattr(maxminddb, f"MODE_{self._memory_mode.upper()}")
        return maxminddb.open_database(self._db_path, mode=mode)


def _fetch(pool: ReaderPool, reader: Any, ip_address: str) -> Any:
    # Runs on a lookup thread; the reader goes back before the result is set
    try:
        return reader.get(ip_address)
    finally:
        pool.release(reader)
