"""Admission control for outbound registry fetches."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sui_mvr.core.exceptions import TooManyConcurrentRequestsError


class AdmissionController:
    """
    Counting semaphore bounding the number of fetches in flight.

    A permit is held for exactly one network exchange (single or batch) and
    is always given back, whether the fetch succeeds, fails, times out or is
    cancelled. Cancelling a task that is still waiting takes no permit.
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError("Admission limit must be at least 1")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._in_flight = 0
        self._closed = False

    @property
    def in_flight(self) -> int:
        """Number of permits currently held."""
        return self._in_flight

    @property
    def available(self) -> int:
        """Number of permits that can be taken without waiting."""
        return self.limit - self._in_flight

    @property
    def closed(self) -> bool:
        return self._closed

    @asynccontextmanager
    async def permit(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the block."""
        await self._acquire()
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1
            self._semaphore.release()

    async def _acquire(self) -> None:
        if self._closed:
            raise TooManyConcurrentRequestsError(self.limit)
        await self._semaphore.acquire()
        if self._closed:
            # Hand the wake-up on to the next waiter before aborting
            self._semaphore.release()
            raise TooManyConcurrentRequestsError(self.limit)

    def close(self) -> None:
        """Abort current and future waits with TooManyConcurrentRequestsError."""
        if self._closed:
            return
        self._closed = True
        self._semaphore.release()
