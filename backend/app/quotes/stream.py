"""HTTP endpoints for the dashboard: snapshot JSON, manual refresh, SSE."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from .cache import SnapshotCache
from .models import Snapshot
from .poller import QuotePoller
from .synthetic import generate_synthetic_snapshot

logger = logging.getLogger(__name__)


def create_quotes_router(cache: SnapshotCache, poller: QuotePoller) -> APIRouter:
    """Create the quotes router bound to a cache and poller.

    This factory pattern lets us inject the cache and poller without globals.
    """
    router = APIRouter(prefix="/api", tags=["quotes"])

    @router.get("/quotes")
    async def get_quotes() -> dict:
        """Latest snapshot. 503 until the first refresh has completed."""
        snapshot = cache.get()
        if snapshot is None:
            raise HTTPException(status_code=503, detail="Quotes not loaded yet")
        return snapshot.to_dict()

    @router.post("/quotes/refresh")
    async def refresh_quotes() -> dict:
        """Manual refresh trigger (the dashboard's refresh button)."""
        snapshot = await poller.refresh()
        if snapshot is None:
            raise HTTPException(status_code=503, detail="Quotes not loaded yet")
        return snapshot.to_dict()

    @router.get("/quotes/demo")
    async def demo_quotes() -> dict:
        """Synthetic data for the watched symbols, independent of the network."""
        quotes = generate_synthetic_snapshot(poller.get_symbols())
        return Snapshot(quotes=quotes).to_dict()

    @router.get("/stream/quotes")
    async def stream_quotes(request: Request) -> StreamingResponse:
        """SSE endpoint pushing the snapshot whenever it changes.

        The client connects with EventSource and receives events in the format:

            data: {"quotes": [{"symbol": "AAPL", "price": 190.5, ...}], ...}
        """
        return StreamingResponse(
            _generate_events(cache, request),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


def _format_event(version: int, snapshot: Snapshot) -> str:
    """One SSE message; the cache version doubles as the event id."""
    return f"id: {version}\ndata: {json.dumps(snapshot.to_dict())}\n\n"


async def _generate_events(
    cache: SnapshotCache,
    request: Request,
    interval: float = 1.0,
) -> AsyncGenerator[str, None]:
    """Yield a snapshot event each time the poller publishes a new one.

    The cache is polled every ``interval`` seconds; a snapshot is sent at
    most once per version. Ends when the browser goes away.
    """
    yield "retry: 1000\n\n"  # EventSource reconnect delay, ms

    sent_version = -1
    peer = request.client.host if request.client else "unknown"
    logger.info("Quote stream opened by %s", peer)

    try:
        while not await request.is_disconnected():
            version = cache.version
            snapshot = cache.get()
            if version != sent_version and snapshot is not None:
                sent_version = version
                yield _format_event(version, snapshot)
            await asyncio.sleep(interval)
        logger.info("Quote stream closed by %s", peer)
    except asyncio.CancelledError:
        logger.info("Quote stream to %s cancelled", peer)
