"""API schema definitions."""

from sui_mvr.api.schemas.base import (
    APIBaseSchema,
    APIError,
    ErrorDetail,
)
from sui_mvr.api.schemas.requests import (
    ResolveNameRequest,
    ResolveNamesRequest,
)
from sui_mvr.api.schemas.responses import (
    AdmissionResponse,
    CacheCleanupResponse,
    CacheStatsResponse,
    HealthResponse,
    ResolveNameResponse,
    ResolveNamesResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    # Requests
    "ResolveNameRequest",
    "ResolveNamesRequest",
    # Responses
    "AdmissionResponse",
    "CacheCleanupResponse",
    "CacheStatsResponse",
    "HealthResponse",
    "ResolveNameResponse",
    "ResolveNamesResponse",
]
