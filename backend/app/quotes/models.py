"""Data models for quote snapshots."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

FALLBACK_MESSAGE = "Using demo data - API may be unavailable"


@dataclass(frozen=True, slots=True)
class Quote:
    """Immutable price/change data for one symbol within a snapshot."""

    symbol: str
    price: float
    change: float
    change_percent: float
    synthetic: bool = False  # True when generated instead of fetched

    @property
    def direction(self) -> str:
        """'up', 'down', or 'flat'."""
        if self.change > 0:
            return "up"
        elif self.change < 0:
            return "down"
        return "flat"

    def to_dict(self) -> dict:
        """Serialize for JSON / SSE transmission."""
        return {
            "symbol": self.symbol,
            "price": self.price,
            "change": self.change,
            "change_percent": self.change_percent,
            "direction": self.direction,
            "synthetic": self.synthetic,
        }


@dataclass(frozen=True, slots=True)
class Snapshot:
    """The quotes produced by one fetch cycle, one per requested symbol."""

    quotes: tuple[Quote, ...]
    used_fallback: bool = False
    timestamp: float = field(default_factory=time.time)  # Unix seconds

    @property
    def symbols(self) -> list[str]:
        return [q.symbol for q in self.quotes]

    @property
    def synthetic_symbols(self) -> list[str]:
        """Symbols whose quote was substituted with synthetic data."""
        return [q.symbol for q in self.quotes if q.synthetic]

    @property
    def message(self) -> str | None:
        """User-facing advisory, only set for a whole-batch fallback."""
        return FALLBACK_MESSAGE if self.used_fallback else None

    def get(self, symbol: str) -> Quote | None:
        symbol = symbol.upper()
        for quote in self.quotes:
            if quote.symbol == symbol:
                return quote
        return None

    def __len__(self) -> int:
        return len(self.quotes)

    def to_dict(self) -> dict:
        return {
            "quotes": [q.to_dict() for q in self.quotes],
            "used_fallback": self.used_fallback,
            "message": self.message,
            "timestamp": self.timestamp,
        }
