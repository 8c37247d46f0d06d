"""Quote acquisition subsystem for the stock dashboard.

Public API:
    Quote, Snapshot         - Immutable quote / snapshot dataclasses
    QuoteFeed               - Finnhub client with retry and synthetic fallback
    QuoteSource             - Abstract interface for snapshot producers
    SyntheticQuoteSource    - Demo-mode source that only generates data
    generate_synthetic_quote / generate_synthetic_snapshot
    default_symbols         - The fixed 8-symbol watchlist
    RetryPolicy             - Fixed-delay retry budget
    SnapshotCache           - Thread-safe holder of the latest snapshot
    QuotePoller             - 30s refresh timer + manual trigger
    create_quote_source     - Factory that selects Finnhub or demo mode
    create_quotes_router    - FastAPI router factory for JSON + SSE endpoints
"""

from .cache import SnapshotCache
from .errors import BatchUnavailableError, NetworkError, NoDataError, QuoteFeedError
from .factory import create_quote_source
from .feed import QuoteFeed
from .interface import QuoteSource
from .models import Quote, Snapshot
from .poller import QuotePoller
from .retry import RetryPolicy
from .stream import create_quotes_router
from .symbols import default_symbols
from .synthetic import SyntheticQuoteSource, generate_synthetic_quote, generate_synthetic_snapshot

__all__ = [
    "Quote",
    "Snapshot",
    "QuoteFeed",
    "QuoteSource",
    "SyntheticQuoteSource",
    "generate_synthetic_quote",
    "generate_synthetic_snapshot",
    "default_symbols",
    "RetryPolicy",
    "SnapshotCache",
    "QuotePoller",
    "create_quote_source",
    "create_quotes_router",
    "QuoteFeedError",
    "NetworkError",
    "NoDataError",
    "BatchUnavailableError",
]
