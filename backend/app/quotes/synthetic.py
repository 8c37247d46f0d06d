"""Synthetic quote generation for fallback and demo mode."""

from __future__ import annotations

import logging

import numpy as np

from .interface import QuoteSource
from .models import Quote, Snapshot
from .symbols import normalize_symbol

logger = logging.getLogger(__name__)

# Half-open [low, high) ranges for generated values
PRICE_RANGE: tuple[float, float] = (50.0, 250.0)
CHANGE_RANGE: tuple[float, float] = (-5.0, 5.0)
CHANGE_PERCENT_RANGE: tuple[float, float] = (-2.5, 2.5)

_default_rng = np.random.default_rng()


def _uniform_cents(rng: np.random.Generator, bounds: tuple[float, float]) -> float:
    """Uniform value on the 0.01 grid within [low, high).

    Drawing whole cents keeps the result at two decimals without rounding
    ever landing on the exclusive upper bound.
    """
    low, high = bounds
    cents = int(rng.integers(round(low * 100), round(high * 100)))
    return round(cents / 100, 2)


def generate_synthetic_quote(symbol: str, rng: np.random.Generator | None = None) -> Quote:
    """Build a placeholder Quote for a symbol. Never fails, no network."""
    rng = rng if rng is not None else _default_rng
    return Quote(
        symbol=normalize_symbol(symbol),
        price=_uniform_cents(rng, PRICE_RANGE),
        change=_uniform_cents(rng, CHANGE_RANGE),
        change_percent=_uniform_cents(rng, CHANGE_PERCENT_RANGE),
        synthetic=True,
    )


def generate_synthetic_snapshot(
    symbols: list[str],
    rng: np.random.Generator | None = None,
) -> tuple[Quote, ...]:
    """Synthetic quotes for every symbol, in input order."""
    return tuple(generate_synthetic_quote(symbol, rng) for symbol in symbols)


class SyntheticQuoteSource(QuoteSource):
    """QuoteSource for explicit demo mode: every snapshot is generated.

    Demo mode is a choice rather than a failure, so snapshots report
    used_fallback=False.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._rng = rng

    async def fetch_snapshot(self, symbols: list[str]) -> Snapshot:
        quotes = generate_synthetic_snapshot(symbols, self._rng)
        logger.debug("Demo source: generated %d quotes", len(quotes))
        return Snapshot(quotes=quotes, used_fallback=False)
