"""Bounded pool of MaxMind database readers.

Readers are created lazily, up to ``size``, and handed out last-in
first-out. A caller that finds every reader checked out waits at most
``wait_seconds`` for one to be released.
"""

import queue
import threading
from typing import Any, Callable

from infrastructure.clients.maxmind.exceptions import (
    ReaderPoolClosed,
    ReaderPoolTimeout,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class ReaderPool:
    """Thread-safe pool of reader handles.

    Args:
        factory: Callable creating a new reader
        size: Maximum number of readers alive at once
        wait_seconds: Maximum time to wait for a free reader
    """

    def __init__(
        self,
        factory: Callable[[], Any],
        size: int,
        wait_seconds: float,
    ):
        self._factory = factory
        self.size = size
        self.wait_seconds = wait_seconds

        self._idle: "queue.LifoQueue[Any]" = queue.LifoQueue()
        self._created = 0
        self._closed = False
        self._lock = threading.Lock()

    @property
    def created(self) -> int:
        """Number of readers currently owned by the pool."""
        with self._lock:
            return self._created

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def acquire(self) -> Any:
        """Check out a reader, creating one when below capacity.

        Raises:
            ReaderPoolTimeout: If every reader stays busy for wait_seconds
            ReaderPoolClosed: If the pool has been closed
        """
        if self.closed:
            raise ReaderPoolClosed("Reader pool is closed")

        try:
            return self._idle.get_nowait()
        except queue.Empty:
            pass

        create = False
        with self._lock:
            if self._created < self.size:
                self._created += 1
                create = True

        if create:
            try:
                reader = self._factory()
            except Exception:
                with self._lock:
                    self._created -= 1
                raise
            logger.debug("reader_created", pool_size=self.size)
            return reader

        try:
            return self._idle.get(timeout=self.wait_seconds)
        except queue.Empty:
            logger.warning(
                "reader_pool_exhausted",
                pool_size=self.size,
                wait_seconds=self.wait_seconds,
            )
            raise ReaderPoolTimeout(
                f"No database reader available after waiting {self.wait_seconds} "
                f"seconds (pool size {self.size})"
            )

    def release(self, reader: Any) -> None:
        """Return a reader to the pool, closing it if the pool was closed."""
        with self._lock:
            if not self._closed:
                self._idle.put(reader)
                return
            self._created -= 1
        _close_reader(reader)

    def close(self) -> None:
        """Close idle readers; readers still checked out close on release."""
        drained = []
        with self._lock:
            self._closed = True
            while True:
                try:
                    drained.append(self._idle.get_nowait())
                except queue.Empty:
                    break
            self._created -= len(drained)

        for reader in drained:
            _close_reader(reader)
        logger.debug("reader_pool_closed", closed_readers=len(drained))


def _close_reader(reader: Any) -> None:
    close = getattr(reader, "close", None)
    if close is None:
        return
    try:
        close()
    except Exception as e:
        logger.warning("reader_close_failed", error=str(e))
