"""FastAPI application wiring the quote poller to the HTTP endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .quotes import (
    QuotePoller,
    QuoteSource,
    SnapshotCache,
    create_quote_source,
    create_quotes_router,
    default_symbols,
)
from .quotes.poller import DEFAULT_REFRESH_INTERVAL


def create_app(
    source: QuoteSource | None = None,
    symbols: list[str] | None = None,
    interval: float = DEFAULT_REFRESH_INTERVAL,
) -> FastAPI:
    """Build the dashboard API.

    The lifespan starts the poller (first refresh runs before the app accepts
    requests) and on shutdown cancels the refresh timer and closes the source.
    """
    source = source or create_quote_source()
    cache = SnapshotCache()
    poller = QuotePoller(source, cache, interval=interval)
    watchlist = symbols if symbols is not None else default_symbols()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await poller.start(watchlist)
        try:
            yield
        finally:
            await poller.stop()
            await source.aclose()

    app = FastAPI(title="Stock Dashboard", version="0.1.0", lifespan=lifespan)
    app.include_router(create_quotes_router(cache, poller))
    app.state.cache = cache
    app.state.poller = poller
    app.state.source = source
    return app
