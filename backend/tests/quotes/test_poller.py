"""Tests for QuotePoller."""

import asyncio

import pytest

from app.quotes.cache import SnapshotCache
from app.quotes.interface import QuoteSource
from app.quotes.models import Quote, Snapshot
from app.quotes.poller import QuotePoller


class _CountingSource(QuoteSource):
    """Returns a flat snapshot and records every call."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    async def fetch_snapshot(self, symbols: list[str]) -> Snapshot:
        self.calls.append(list(symbols))
        return Snapshot(
            quotes=tuple(Quote(symbol=s, price=100.0, change=0.0, change_percent=0.0) for s in symbols)
        )


class _BlockingSource(_CountingSource):
    """Holds every fetch until ``release`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.release = asyncio.Event()

    async def fetch_snapshot(self, symbols: list[str]) -> Snapshot:
        snapshot = await super().fetch_snapshot(symbols)
        await self.release.wait()
        return snapshot


class _FailingSource(_CountingSource):
    async def fetch_snapshot(self, symbols: list[str]) -> Snapshot:
        await super().fetch_snapshot(symbols)
        raise RuntimeError("boom")


@pytest.mark.asyncio
class TestQuotePoller:
    """Unit tests for the refresh cycle."""

    async def test_start_populates_cache(self):
        """start() refreshes immediately, before the first timer tick."""
        cache = SnapshotCache()
        source = _CountingSource()
        poller = QuotePoller(source, cache, interval=60.0)

        await poller.start(["AAPL", "GOOGL"])

        assert cache.get().symbols == ["AAPL", "GOOGL"]
        assert len(source.calls) == 1

        await poller.stop()

    async def test_start_normalizes_and_dedupes_symbols(self):
        poller = QuotePoller(_CountingSource(), SnapshotCache(), interval=60.0)
        await poller.start(["aapl", " AAPL ", "msft"])

        assert poller.get_symbols() == ["AAPL", "MSFT"]

        await poller.stop()

    async def test_periodic_refresh(self):
        cache = SnapshotCache()
        source = _CountingSource()
        poller = QuotePoller(source, cache, interval=0.05)

        await poller.start(["AAPL"])
        await asyncio.sleep(0.3)

        assert len(source.calls) > 2
        assert cache.version == len(source.calls)

        await poller.stop()

    async def test_manual_refresh(self):
        cache = SnapshotCache()
        source = _CountingSource()
        poller = QuotePoller(source, cache, interval=60.0)
        await poller.start(["AAPL"])

        snapshot = await poller.refresh()

        assert snapshot is cache.get()
        assert len(source.calls) == 2

        await poller.stop()

    async def test_overlapping_refresh_is_skipped(self):
        """A trigger during an in-flight cycle returns the cached snapshot."""
        cache = SnapshotCache()
        source = _BlockingSource()
        poller = QuotePoller(source, cache, interval=60.0)

        source.release.set()
        await poller.start(["AAPL"])
        cached = cache.get()
        source.release.clear()

        first = asyncio.create_task(poller.refresh())
        await asyncio.sleep(0)  # let the first cycle start

        second = await poller.refresh()
        assert second is cached
        assert len(source.calls) == 2

        source.release.set()
        snapshot = await first
        assert snapshot is not cached
        assert snapshot.symbols == ["AAPL"]
        assert cache.get() is snapshot

        await poller.stop()
    async def test_stop_cancels_timer(self):
        source = _CountingSource()
        poller = QuotePoller(source, SnapshotCache(), interval=0.05)
        await poller.start(["AAPL"])
        assert poller.running

        await poller.stop()
        assert not poller.running

        calls = len(source.calls)
        await asyncio.sleep(0.15)
        assert len(source.calls) == calls

    async def test_stop_is_idempotent(self):
        poller = QuotePoller(_CountingSource(), SnapshotCache())
        await poller.stop()
        await poller.stop()  # Should not raise

    async def test_source_error_does_not_crash_loop(self):
        cache = SnapshotCache()
        source = _FailingSource()
        poller = QuotePoller(source, cache, interval=0.05)

        await poller.start(["AAPL"])
        await asyncio.sleep(0.15)

        assert poller.running
        assert len(source.calls) > 1
        assert cache.get() is None

        await poller.stop()
