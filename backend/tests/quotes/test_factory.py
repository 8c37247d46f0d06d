"""Tests for quote source factory."""

import asyncio
import os
from unittest.mock import patch

import pytest

from app.quotes.factory import create_quote_source
from app.quotes.feed import DEFAULT_BASE_URL, QuoteFeed
from app.quotes.synthetic import SyntheticQuoteSource


@pytest.fixture
def create_source():
    """create_quote_source() under a given environment; closes what it built."""
    sources = []

    def _create(env: dict[str, str]):
        with patch.dict(os.environ, env, clear=True):
            source = create_quote_source()
        sources.append(source)
        return source

    yield _create

    for source in sources:
        asyncio.run(source.aclose())


class TestFactory:
    """Tests for create_quote_source factory."""

    def test_creates_feed_by_default(self, create_source):
        source = create_source({})

        assert isinstance(source, QuoteFeed)
        assert source._api_key == "sandbox"
        assert source._base_url == DEFAULT_BASE_URL

    def test_creates_demo_source(self, create_source):
        source = create_source({"QUOTE_FEED_MODE": "demo"})
        assert isinstance(source, SyntheticQuoteSource)

    def test_demo_mode_case_insensitive(self, create_source):
        source = create_source({"QUOTE_FEED_MODE": "  DEMO "})
        assert isinstance(source, SyntheticQuoteSource)

    def test_feed_receives_api_key(self, create_source):
        source = create_source({"FINNHUB_API_KEY": "test-key-123"})

        assert isinstance(source, QuoteFeed)
        assert source._api_key == "test-key-123"

    def test_blank_api_key_falls_back_to_sandbox(self, create_source):
        source = create_source({"FINNHUB_API_KEY": "   "})
        assert source._api_key == "sandbox"

    def test_feed_receives_base_url(self, create_source):
        source = create_source({"FINNHUB_BASE_URL": "http://localhost:9000/api/"})
        assert source._base_url == "http://localhost:9000/api"

    def test_feed_owns_its_client(self, create_source):
        source = create_source({})
        asyncio.run(source.aclose())
        assert source._client.is_closed
