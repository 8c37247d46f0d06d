"""Factory for creating quote sources."""

from __future__ import annotations

import logging
import os

from .feed import DEFAULT_API_KEY, DEFAULT_BASE_URL, QuoteFeed
from .interface import QuoteSource
from .synthetic import SyntheticQuoteSource

logger = logging.getLogger(__name__)


def create_quote_source() -> QuoteSource:
    """Create the appropriate quote source based on environment variables.

    - QUOTE_FEED_MODE=demo → SyntheticQuoteSource (generated data only)
    - Otherwise → QuoteFeed against Finnhub, using FINNHUB_API_KEY
      (default "sandbox") and FINNHUB_BASE_URL

    The returned source owns its HTTP client; call ``aclose()`` on shutdown.
    """
    mode = os.environ.get("QUOTE_FEED_MODE", "").strip().lower()

    if mode == "demo":
        logger.info("Quote source: synthetic demo data")
        return SyntheticQuoteSource()

    api_key = os.environ.get("FINNHUB_API_KEY", "").strip() or DEFAULT_API_KEY
    base_url = os.environ.get("FINNHUB_BASE_URL", "").strip() or DEFAULT_BASE_URL
    logger.info("Quote source: Finnhub API at %s", base_url)
    return QuoteFeed(api_key=api_key, base_url=base_url)
