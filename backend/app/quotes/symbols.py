"""Default watchlist for the dashboard."""

# Popular large-cap tickers shown when the user hasn't picked any
DEFAULT_SYMBOLS: tuple[str, ...] = (
    "AAPL",
    "GOOGL",
    "MSFT",
    "AMZN",
    "TSLA",
    "META",
    "NVDA",
    "NFLX",
)


def default_symbols() -> list[str]:
    """Return a fresh list of the 8 default symbols."""
    return list(DEFAULT_SYMBOLS)


def normalize_symbol(symbol: str) -> str:
    """Canonical form of a user-supplied symbol: stripped and uppercase."""
    return symbol.strip().upper()
