"""Pytest configuration and fixtures."""

import httpx
import pytest


@pytest.fixture
def event_loop_policy():
    """Use the default event loop policy for all async tests."""
    import asyncio

    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture
def sleeps():
    """Records retry delays instead of actually sleeping."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)

    return _sleep


@pytest.fixture
def make_client():
    """Build an httpx.AsyncClient whose requests are answered by ``handler``.

    ``handler`` takes an httpx.Request and returns an httpx.Response (or a
    coroutine resolving to one), or raises an httpx error.
    """

    def _make(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
