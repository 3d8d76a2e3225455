"""In-memory TTL cache with LRU eviction for resolved names."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sui_mvr.core.exceptions import CacheError

logger = logging.getLogger(__name__)

# Seconds to wait for the cache lock before giving up on an operation
LOCK_TIMEOUT = 5.0


@dataclass
class CacheEntry:
    """A cached value with its expiry and access bookkeeping."""

    value: str
    expires_at: float
    hit_count: int = 0
    last_accessed: float = 0.0

    @classmethod
    def create(cls, value: str, ttl: float, now: float) -> CacheEntry:
        return cls(value=value, expires_at=now + ttl, last_accessed=now)

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at

    def access(self, now: float) -> str:
        """Record a read and return the value."""
        self.hit_count += 1
        self.last_accessed = now
        return self.value


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time cache statistics."""

    total_entries: int
    valid_entries: int
    expired_entries: int
    total_hits: int
    max_size: int

    @property
    def utilization(self) -> float:
        """Fraction of capacity in use (expired entries included)."""
        if self.max_size == 0:
            return 0.0
        return self.total_entries / self.max_size

    @property
    def hit_rate(self) -> float:
        """Lifetime hits relative to hits plus resident entries."""
        if self.total_hits == 0:
            return 0.0
        return self.total_hits / (self.total_hits + self.total_entries)


class MvrCache:
    """
    Thread-safe in-memory cache for name resolutions.

    Every public operation takes the lock once and never holds it across
    an await, so the cache can be shared by concurrent resolution tasks
    (and threads) without per-entry locking.

    Features:
    - Per-entry TTL, expired entries purged on read or by cleanup_expired()
    - LRU eviction (minimum last-accessed) when at capacity
    - Hit accounting for monitoring
    """

    def __init__(
        self,
        default_ttl: float,
        max_size: int,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self.default_ttl = default_ttl
        self.max_size = max_size

    @contextmanager
    def _locked(self) -> Iterator[dict[str, CacheEntry]]:
        if not self._lock.acquire(timeout=LOCK_TIMEOUT):
            raise CacheError("Failed to acquire cache lock")
        try:
            yield self._entries
        finally:
            self._lock.release()

    def get(self, key: str) -> str | None:
        """Return the cached value, or None if missing or expired."""
        with self._locked() as entries:
            entry = entries.get(key)
            if entry is None:
                return None
            now = self._clock()
            if entry.is_expired(now):
                del entries[key]
                return None
            return entry.access(now)

    def insert(self, key: str, value: str, ttl: float | None = None) -> None:
        """Store ``value`` under ``key``, evicting one LRU entry if full."""
        if ttl is None:
            ttl = self.default_ttl
        with self._locked() as entries:
            if self.max_size <= 0:
                return
            if len(entries) >= self.max_size:
                self._evict_lru(entries)
            entries[key] = CacheEntry.create(value, ttl, self._clock())

    def remove(self, key: str) -> str | None:
        """Remove ``key``, returning its value if it was present."""
        with self._locked() as entries:
            entry = entries.pop(key, None)
            return entry.value if entry else None

    def clear(self) -> None:
        """Drop all entries."""
        with self._locked() as entries:
            entries.clear()

    def cleanup_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        with self._locked() as entries:
            now = self._clock()
            expired = [key for key, entry in entries.items() if entry.is_expired(now)]
            for key in expired:
                del entries[key]
        if expired:
            logger.debug(f"Removed {len(expired)} expired cache entries")
        return len(expired)

    def stats(self) -> CacheStats:
        """Snapshot of entry counts and hit totals."""
        with self._locked() as entries:
            now = self._clock()
            total = len(entries)
            expired = sum(1 for entry in entries.values() if entry.is_expired(now))
            hits = sum(entry.hit_count for entry in entries.values())
        return CacheStats(
            total_entries=total,
            valid_entries=total - expired,
            expired_entries=expired,
            total_hits=hits,
            max_size=self.max_size,
        )

    def __len__(self) -> int:
        with self._locked() as entries:
            return len(entries)

    @staticmethod
    def _evict_lru(entries: dict[str, CacheEntry]) -> None:
        # min() keeps the first of equal timestamps, i.e. the oldest insertion
        if not entries:
            return
        lru_key = min(entries, key=lambda k: entries[k].last_accessed)
        del entries[lru_key]
        logger.debug(f"Evicted least recently used cache entry: {lru_key}")
