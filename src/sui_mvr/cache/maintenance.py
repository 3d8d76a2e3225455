"""Periodic cleanup of expired cache entries."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from sui_mvr.cache.memory import MvrCache
from sui_mvr.core.exceptions import CacheError

logger = logging.getLogger(__name__)


class CacheMaintenance:
    """
    Background task that sweeps expired entries on a fixed interval.

    Usage:
        maintenance = CacheMaintenance(cache, interval=300)
        maintenance.start()
        ...
        await maintenance.stop()
    """

    def __init__(self, cache: MvrCache, interval: float = 300.0) -> None:
        if interval <= 0:
            raise ValueError("Maintenance interval must be positive")
        self._cache = cache
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="mvr-cache-maintenance")

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    def run_once(self) -> int:
        """Sweep expired entries once and log cache statistics."""
        removed = self._cache.cleanup_expired()
        stats = self._cache.stats()
        logger.info(
            f"Cache sweep removed {removed} entries "
            f"(entries={stats.total_entries}, "
            f"utilization={stats.utilization:.1%}, hit_rate={stats.hit_rate:.1%})"
        )
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.run_once()
            except CacheError as e:
                logger.warning(f"Cache sweep failed: {e}")
