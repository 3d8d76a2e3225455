"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

from sui_mvr import __version__
from sui_mvr.api.routes.cache import stats_to_response
from sui_mvr.api.schemas import AdmissionResponse, HealthResponse
from sui_mvr.core.exceptions import CacheError
from sui_mvr.core.types import HealthState

router = APIRouter(tags=["health"])

# Cache utilization above which the service reports itself degraded
DEGRADED_UTILIZATION = 0.8


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_by_alias=True,
    operation_id="getHealth",
    summary="Health check",
    description="Report resolver, cache and admission status.",
)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        return HealthResponse(status=HealthState.UNHEALTHY, version=__version__, endpoint="")

    overall_status = HealthState.HEALTHY

    cache = None
    try:
        stats = resolver.cache_stats()
        cache = stats_to_response(stats)
        if stats.utilization > DEGRADED_UTILIZATION:
            overall_status = HealthState.DEGRADED
    except CacheError:
        overall_status = HealthState.DEGRADED

    admission = resolver.admission
    if admission.closed:
        overall_status = HealthState.UNHEALTHY

    return HealthResponse(
        status=overall_status,
        version=__version__,
        endpoint=resolver.config.endpoint_url,
        cache=cache,
        admission=AdmissionResponse(
            limit=admission.limit,
            in_flight=admission.in_flight,
            available=admission.available,
        ),
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    resolver = getattr(request.app.state, "resolver", None)
    ready = resolver is not None and not resolver.admission.closed
    return {"ready": ready}
