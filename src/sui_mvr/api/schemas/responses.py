"""Response schemas for API endpoints."""

from __future__ import annotations

from pydantic import Field

from sui_mvr.api.schemas.base import APIBaseSchema
from sui_mvr.core.types import HealthState, ResolutionKind


class ResolveNameResponse(APIBaseSchema):
    """A single resolution result."""

    name: str
    kind: ResolutionKind
    value: str = Field(description="On-chain address or full type signature")
    duration_ms: float


class ResolveNamesResponse(APIBaseSchema):
    """Batch resolution result."""

    kind: ResolutionKind
    resolved: dict[str, str] = Field(description="Name -> resolved value")
    unresolved: list[str] = Field(
        default_factory=list,
        description="Requested names the registry did not return",
    )
    duration_ms: float


class CacheStatsResponse(APIBaseSchema):
    """Cache statistics."""

    total_entries: int
    valid_entries: int
    expired_entries: int
    total_hits: int
    max_size: int
    utilization: float
    hit_rate: float


class CacheCleanupResponse(APIBaseSchema):
    """Result of an expired-entry sweep."""

    removed: int
    stats: CacheStatsResponse


class AdmissionResponse(APIBaseSchema):
    """Admission controller state."""

    limit: int
    in_flight: int
    available: int


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: HealthState
    version: str
    endpoint: str
    cache: CacheStatsResponse | None = None
    admission: AdmissionResponse | None = None
