"""Fixed-delay retry policy for quote requests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry a coroutine function a fixed number of times.

    ``attempts`` is the total budget: attempts=3 means one initial call plus
    up to two retries. Only exceptions listed in ``retry_on`` are retried;
    anything else propagates on the first occurrence. The delay is awaited
    with ``sleep`` so only the failing caller is suspended.
    """

    attempts: int = 3
    delay: float = 1.0
    retry_on: tuple[type[BaseException], ...] = (httpx.HTTPError,)
    sleep: Callable[[float], Awaitable[Any]] = field(default=asyncio.sleep, repr=False)

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError(f"attempts must be >= 1, got {self.attempts}")
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")

    async def call(self, fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Await ``fn(*args, **kwargs)``, retrying on ``retry_on`` errors.

        Re-raises the last error once the budget is spent.
        """
        for attempt in range(1, self.attempts + 1):
            try:
                return await fn(*args, **kwargs)
            except self.retry_on as e:
                remaining = self.attempts - attempt
                if remaining == 0:
                    raise
                logger.warning(
                    "Request failed (%s), retrying in %.1fs (%d attempts left)",
                    e,
                    self.delay,
                    remaining,
                )
                await self.sleep(self.delay)
        raise AssertionError("unreachable")  # pragma: no cover
