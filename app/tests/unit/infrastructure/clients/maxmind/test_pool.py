"""Unit tests for the MaxMind reader pool."""

import threading
from unittest.mock import Mock

import pytest

from infrastructure.clients.maxmind import (
    ReaderPool,
    ReaderPoolClosed,
    ReaderPoolTimeout,
)


@pytest.fixture
def factory():
    return Mock(side_effect=lambda: Mock(name="reader"))


@pytest.mark.unit
class TestReaderPool:
    """Test suite for ReaderPool."""

    def test_creates_readers_lazily(self, factory):
        pool = ReaderPool(factory, size=3, wait_seconds=0.1)

        assert pool.created == 0
        factory.assert_not_called()

        pool.acquire()

        assert pool.created == 1
        factory.assert_called_once()

    def test_released_reader_is_reused(self, factory):
        pool = ReaderPool(factory, size=3, wait_seconds=0.1)

        reader = pool.acquire()
        pool.release(reader)

        assert pool.acquire() is reader
        assert factory.call_count == 1

    def test_never_exceeds_size(self, factory):
        pool = ReaderPool(factory, size=2, wait_seconds=0.05)

        pool.acquire()
        pool.acquire()

        with pytest.raises(ReaderPoolTimeout, match="pool size 2"):
            pool.acquire()
        assert factory.call_count == 2

    def test_waiter_gets_reader_released_by_other_thread(self, factory):
        pool = ReaderPool(factory, size=1, wait_seconds=2)
        reader = pool.acquire()

        timer = threading.Timer(0.05, pool.release, args=(reader,))
        timer.start()
        try:
            assert pool.acquire() is reader
        finally:
            timer.join()

    def test_factory_failure_frees_capacity(self):
        reader = Mock()
        factory = Mock(side_effect=[OSError("unreadable"), reader])
        pool = ReaderPool(factory, size=1, wait_seconds=0.05)

        with pytest.raises(OSError):
            pool.acquire()

        assert pool.created == 0
        assert pool.acquire() is reader

    def test_close_closes_idle_readers(self, factory):
        pool = ReaderPool(factory, size=2, wait_seconds=0.05)
        reader = pool.acquire()
        pool.release(reader)

        pool.close()

        reader.close.assert_called_once()
        assert pool.closed is True
        assert pool.created == 0

    def test_reader_released_after_close_is_closed(self, factory):
        pool = ReaderPool(factory, size=2, wait_seconds=0.05)
        busy = pool.acquire()

        pool.close()
        busy.close.assert_not_called()

        pool.release(busy)

        busy.close.assert_called_once()
        assert pool.created == 0

    def test_acquire_after_close_raises(self, factory):
        pool = ReaderPool(factory, size=1, wait_seconds=0.05)
        pool.close()

        with pytest.raises(ReaderPoolClosed, match="closed"):
            pool.acquire()

    def test_close_failure_is_not_raised(self, factory):
        pool = ReaderPool(factory, size=1, wait_seconds=0.05)
        reader = pool.acquire()
        reader.close.side_effect = OSError("already closed")
        pool.release(reader)

        pool.close()

        reader.close.assert_called_once()
