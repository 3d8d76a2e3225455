"""In-memory caching layer."""

from .keys import CacheKeys
from .maintenance import CacheMaintenance
from .memory import CacheEntry, CacheStats, MvrCache

__all__ = [
    "CacheEntry",
    "CacheKeys",
    "CacheMaintenance",
    "CacheStats",
    "MvrCache",
]
