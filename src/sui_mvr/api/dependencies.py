"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from sui_mvr.config import MvrSettings, get_settings
from sui_mvr.resolution.resolver import MvrResolver


async def get_resolver(request: Request) -> MvrResolver:
    """Get the shared resolver from app state."""
    return request.app.state.resolver


# Type aliases for cleaner dependency injection
Settings = Annotated[MvrSettings, Depends(get_settings)]
Resolver = Annotated[MvrResolver, Depends(get_resolver)]
