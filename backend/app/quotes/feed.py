"""Finnhub quote feed with retry and synthetic fallback."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
import numpy as np

from .errors import BatchUnavailableError, NetworkError, NoDataError
from .interface import QuoteSource
from .models import Quote, Snapshot
from .retry import RetryPolicy
from .symbols import normalize_symbol
from .synthetic import generate_synthetic_quote, generate_synthetic_snapshot

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://finnhub.io/api/v1"
DEFAULT_API_KEY = "sandbox"
DEFAULT_TIMEOUT = 10.0


class QuoteFeed(QuoteSource):
    """QuoteSource backed by the Finnhub REST API.

    Each symbol is a separate GET /quote call. Calls for one batch run
    concurrently on the event loop, so a batch costs roughly as long as its
    slowest symbol (retries included), not the sum of all of them.

    Two levels of fallback:
      - per symbol: inside fetch_all(), any failed symbol is swapped for a
        synthetic quote. Silent to the user, logged at WARNING.
      - whole batch: fetch_snapshot_with_fallback() returns an all-synthetic
        snapshot with used_fallback=True when nothing reached the API.

    The feed holds no price state. The HTTP client is the only resource and
    can be injected (tests pass one built on httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str = DEFAULT_API_KEY,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry: RetryPolicy | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._retry = retry or RetryPolicy()
        self._rng = rng
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    # --- Single symbol ---

    async def fetch_one(self, symbol: str) -> Quote:
        """Fetch and normalize the live quote for one symbol.

        Raises:
            NetworkError: transport, timeout or HTTP status failure after
                the retry budget is spent.
            NoDataError: the API answered without a usable price.
        """
        symbol = normalize_symbol(symbol)
        try:
            payload = await self._retry.call(self._request_quote, symbol)
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to fetch data for {symbol}: {e}", symbol=symbol) from e
        return self._to_quote(symbol, payload)

    async def _request_quote(self, symbol: str) -> Any:
        """One HTTP round trip. Returns the decoded body, or None if not JSON."""
        response = await self._client.get(
            f"{self._base_url}/quote",
            params={"symbol": symbol},
            headers={"X-Finnhub-Token": self._api_key},
            timeout=self._timeout,
        )
        response.raise_for_status()
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _to_float(value: Any, default: float = 0.0) -> float:
        try:
            if value is None or value == "":
                return default
            return float(value)
        except (TypeError, ValueError):
            return default

    @classmethod
    def _to_quote(cls, symbol: str, payload: Any) -> Quote:
        """Map a Finnhub payload {c, d, dp, pc, ...} onto a Quote.

        Finnhub answers unknown symbols with 200 and zeroed/null fields, so a
        payload without current price and previous close means "no data".
        """
        if not isinstance(payload, dict):
            raise NoDataError(f"No data available for symbol: {symbol}", symbol=symbol)

        price = cls._to_float(payload.get("c"))
        previous_close = cls._to_float(payload.get("pc"))
        if not price and not previous_close:
            raise NoDataError(f"No data available for symbol: {symbol}", symbol=symbol)

        return Quote(
            symbol=symbol,
            price=price,
            change=cls._to_float(payload.get("d")),
            change_percent=cls._to_float(payload.get("dp")),
        )

    # --- Batches ---

    async def fetch_all(self, symbols: list[str]) -> tuple[Quote, ...]:
        """Fetch every symbol concurrently. Never raises.

        Symbols that fail for any reason get a synthetic quote, so the result
        always has one Quote per input symbol, in input order.
        """
        symbols = [normalize_symbol(s) for s in symbols]
        outcomes = await self._gather(symbols)
        return self._substitute(symbols, outcomes)

    async def fetch_snapshot_with_fallback(self, symbols: list[str]) -> tuple[Snapshot, bool]:
        """Fetch a snapshot, falling back to all-synthetic data when the API is unusable.

        Returns (snapshot, used_fallback). used_fallback is True only when the
        batch as a whole could not run, i.e. not a single symbol reached the
        API. Per-symbol substitution leaves it False. Never raises.
        """
        symbols = [normalize_symbol(s) for s in symbols]
        try:
            outcomes = await self._gather(symbols)
            reached_api = [o for o in outcomes if isinstance(o, (Quote, NoDataError))]
            if outcomes and not reached_api:
                raise BatchUnavailableError(
                    f"All {len(outcomes)} quote requests failed before reaching the API"
                ) from _first_error(outcomes)
            quotes = self._substitute(symbols, outcomes)
        except Exception as e:
            logger.warning("API failed, using demo data for %d symbols: %s", len(symbols), e)
            snapshot = Snapshot(
                quotes=generate_synthetic_snapshot(symbols, self._rng),
                used_fallback=True,
            )
            return snapshot, True

        snapshot = Snapshot(quotes=quotes, used_fallback=False)
        if snapshot.synthetic_symbols:
            logger.info(
                "Snapshot for %d symbols used synthetic data for: %s",
                len(snapshot),
                ", ".join(snapshot.synthetic_symbols),
            )
        return snapshot, False

    async def fetch_snapshot(self, symbols: list[str]) -> Snapshot:
        snapshot, _ = await self.fetch_snapshot_with_fallback(symbols)
        return snapshot

    async def aclose(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    # --- Internal ---

    async def _gather(self, symbols: list[str]) -> list[Quote | BaseException]:
        """Run fetch_one for all symbols concurrently, collecting errors as values."""
        return await asyncio.gather(
            *(self.fetch_one(symbol) for symbol in symbols),
            return_exceptions=True,
        )

    def _substitute(
        self,
        symbols: list[str],
        outcomes: list[Quote | BaseException],
    ) -> tuple[Quote, ...]:
        quotes: list[Quote] = []
        for symbol, outcome in zip(symbols, outcomes):
            if isinstance(outcome, Quote):
                quotes.append(outcome)
                continue
            if not isinstance(outcome, Exception):
                raise outcome  # CancelledError and friends are not data failures
            logger.warning("Error fetching %s, using synthetic quote: %s", symbol, outcome)
            quotes.append(generate_synthetic_quote(symbol, self._rng))
        return tuple(quotes)


def _first_error(outcomes: list[Quote | BaseException]) -> BaseException | None:
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            return outcome
    return None
