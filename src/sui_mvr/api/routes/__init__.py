"""API route modules."""

from sui_mvr.api.routes.cache import router as cache_router
from sui_mvr.api.routes.health import router as health_router
from sui_mvr.api.routes.resolve import router as resolve_router

__all__ = [
    "cache_router",
    "health_router",
    "resolve_router",
]
