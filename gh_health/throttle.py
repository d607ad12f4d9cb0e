"""Admission control for concurrent API requests."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")


class RequestThrottle:
    """Limits how many requests run at once and how often they start.

    Args:
        concurrency: Maximum requests in flight, 0 for no limit
        requests_per_second: Maximum request starts per second, None for no limit
    """

    def __init__(
        self, concurrency: int = 20, requests_per_second: float | None = None
    ):
        if concurrency < 0:
            raise ValueError("concurrency must be >= 0")
        if requests_per_second is not None and requests_per_second <= 0:
            raise ValueError("requests_per_second must be > 0")

        self.concurrency = concurrency
        self._semaphore = asyncio.Semaphore(concurrency) if concurrency else None
        self._interval = 1.0 / requests_per_second if requests_per_second else 0.0
        self._start_lock = asyncio.Lock()
        self._next_start = 0.0

    async def _wait_for_slot(self) -> None:
        if not self._interval:
            return
        async with self._start_lock:
            now = time.monotonic()
            delay = self._next_start - now
            if delay > 0:
                await asyncio.sleep(delay)
                now = time.monotonic()
            self._next_start = now + self._interval

    async def run(self, func: Callable[[], Awaitable[T]]) -> T:
        """Run ``func`` once a concurrency slot and a start slot are free."""
        if self._semaphore is None:
            await self._wait_for_slot()
            return await func()

        async with self._semaphore:
            await self._wait_for_slot()
            return await func()
