"""Exceptions raised by the quote feed."""

from __future__ import annotations


class QuoteFeedError(Exception):
    """Base class for quote acquisition failures."""

    def __init__(self, message: str, symbol: str | None = None) -> None:
        super().__init__(message)
        self.symbol = symbol


class NetworkError(QuoteFeedError):
    """Transport, timeout or HTTP status failure that outlived the retry budget."""


class NoDataError(QuoteFeedError):
    """The API answered, but the payload has no usable price for the symbol.

    Never retried: asking again will not produce data.
    """


class BatchUnavailableError(QuoteFeedError):
    """No symbol in a batch could reach the API at all."""
