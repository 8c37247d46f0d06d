"""Abstract interface for quote sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import Snapshot


class QuoteSource(ABC):
    """Contract for anything that can produce a snapshot for a symbol list.

    Sources are stateless with respect to prices: every call builds a new
    Snapshot value. Periodic refresh and caching live in QuotePoller and
    SnapshotCache, not here.

    Lifecycle:
        source = create_quote_source()
        snapshot = await source.fetch_snapshot(["AAPL", "MSFT"])
        # ... app shutting down ...
        await source.aclose()
    """

    @abstractmethod
    async def fetch_snapshot(self, symbols: list[str]) -> Snapshot:
        """Return a fully populated snapshot, one Quote per symbol.

        Must never raise for data-availability reasons; failures are
        absorbed by substituting synthetic quotes.
        """

    async def aclose(self) -> None:
        """Release network resources. Safe to call multiple times."""
