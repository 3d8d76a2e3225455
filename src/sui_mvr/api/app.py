"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sui_mvr import __version__
from sui_mvr.api.errors import mvr_error_handler
from sui_mvr.api.routes import cache_router, health_router, resolve_router
from sui_mvr.cache.maintenance import CacheMaintenance
from sui_mvr.config import get_settings
from sui_mvr.core.exceptions import MvrError
from sui_mvr.logging_config import configure_logging
from sui_mvr.resolution.resolver import MvrResolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Creates the shared resolver and the cache maintenance task on startup
    and tears both down on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    config = settings.to_config()
    logger.info(f"Initializing resolver for {config.endpoint_url}...")
    app.state.resolver = MvrResolver(config)

    app.state.cache_maintenance = CacheMaintenance(
        app.state.resolver.cache,
        interval=settings.cache_cleanup_interval,
    )
    app.state.cache_maintenance.start()

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")

    await app.state.cache_maintenance.stop()
    await app.state.resolver.close()

    logger.info("Application shutdown complete")


def create_app(
    *,
    title: str = "MVR Resolver API",
    description: str = "Move Registry package and type name resolution",
    version: str = __version__,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version
        cors_origins: List of allowed CORS origins (settings value if omitted)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    if cors_origins is None:
        cors_origins = get_settings().cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MvrError, mvr_error_handler)

    # Register routes
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(resolve_router, prefix="/api/v1")
    app.include_router(cache_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()
