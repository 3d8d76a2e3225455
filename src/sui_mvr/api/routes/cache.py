"""Cache maintenance endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from sui_mvr.api.dependencies import Resolver
from sui_mvr.api.schemas import CacheCleanupResponse, CacheStatsResponse
from sui_mvr.cache.memory import CacheStats

router = APIRouter(prefix="/cache", tags=["cache"])


def stats_to_response(stats: CacheStats) -> CacheStatsResponse:
    """Convert cache statistics to the API response."""
    return CacheStatsResponse(
        total_entries=stats.total_entries,
        valid_entries=stats.valid_entries,
        expired_entries=stats.expired_entries,
        total_hits=stats.total_hits,
        max_size=stats.max_size,
        utilization=stats.utilization,
        hit_rate=stats.hit_rate,
    )


@router.get(
    "/stats",
    response_model=CacheStatsResponse,
    response_model_by_alias=True,
    operation_id="getCacheStats",
    summary="Cache statistics",
)
async def get_cache_stats(resolver: Resolver) -> CacheStatsResponse:
    return stats_to_response(resolver.cache_stats())


@router.post(
    "/cleanup",
    response_model=CacheCleanupResponse,
    response_model_by_alias=True,
    operation_id="cleanupCache",
    summary="Remove expired entries",
)
async def cleanup_cache(resolver: Resolver) -> CacheCleanupResponse:
    """Sweep expired cache entries now instead of waiting for maintenance."""
    removed = resolver.cleanup_expired_cache()
    return CacheCleanupResponse(removed=removed, stats=stats_to_response(resolver.cache_stats()))


@router.delete(
    "",
    response_model=CacheStatsResponse,
    response_model_by_alias=True,
    operation_id="clearCache",
    summary="Clear the cache",
    description="Drop every cached resolution. Overrides are unaffected.",
)
async def clear_cache(resolver: Resolver) -> CacheStatsResponse:
    resolver.clear_cache()
    return stats_to_response(resolver.cache_stats())
