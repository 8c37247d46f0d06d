"""Periodic refresh of the quote snapshot."""

from __future__ import annotations

import asyncio
import logging

from .cache import SnapshotCache
from .interface import QuoteSource
from .models import Snapshot
from .symbols import normalize_symbol

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 30.0


class QuotePoller:
    """Drives a QuoteSource on a fixed timer and writes results to a SnapshotCache.

    Refresh cycles come from two places: the background timer (every
    ``interval`` seconds) and manual calls to refresh(). Cycles never
    overlap: a trigger that arrives while one is in flight is skipped and
    gets the current cached snapshot back.

    Lifecycle:
        poller = QuotePoller(source, cache)
        await poller.start(default_symbols())
        # ... app runs ...
        await poller.refresh()   # manual trigger
        # ... app shutting down ...
        await poller.stop()
    """

    def __init__(
        self,
        source: QuoteSource,
        cache: SnapshotCache,
        interval: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        self._source = source
        self._cache = cache
        self._interval = interval
        self._symbols: list[str] = []
        self._task: asyncio.Task | None = None
        self._in_flight = False

    async def start(self, symbols: list[str]) -> None:
        self._symbols = []
        for symbol in symbols:
            symbol = normalize_symbol(symbol)
            if symbol not in self._symbols:
                self._symbols.append(symbol)

        # Do an immediate first refresh so the cache has data right away
        await self.refresh()

        self._task = asyncio.create_task(self._poll_loop(), name="quote-poller")
        logger.info(
            "Quote poller started: %d symbols, %.1fs interval",
            len(self._symbols),
            self._interval,
        )

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Quote poller stopped")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def get_symbols(self) -> list[str]:
        return list(self._symbols)

    async def refresh(self) -> Snapshot | None:
        """Run one refresh cycle and return the resulting snapshot.

        Returns the cached snapshot unchanged if a cycle is already running,
        or if the source fails unexpectedly (the error is logged).
        """
        if self._in_flight:
            logger.debug("Refresh already in flight, skipping")
            return self._cache.get()

        self._in_flight = True
        try:
            snapshot = await self._source.fetch_snapshot(list(self._symbols))
        except Exception:
            logger.exception("Quote refresh failed")
            return self._cache.get()
        finally:
            self._in_flight = False

        self._cache.update(snapshot)
        logger.debug(
            "Refreshed %d quotes (fallback=%s, synthetic=%d)",
            len(snapshot),
            snapshot.used_fallback,
            len(snapshot.synthetic_symbols),
        )
        return snapshot

    # --- Internal ---

    async def _poll_loop(self) -> None:
        """Refresh on interval. First refresh already happened in start()."""
        while True:
            await asyncio.sleep(self._interval)
            await self.refresh()
