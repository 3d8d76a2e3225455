"""Resolution endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter

from sui_mvr.api.dependencies import Resolver
from sui_mvr.api.schemas import (
    ResolveNameRequest,
    ResolveNameResponse,
    ResolveNamesRequest,
    ResolveNamesResponse,
)
from sui_mvr.core.types import ResolutionKind

router = APIRouter(prefix="/resolve", tags=["resolve"])


def _elapsed_ms(start_time: float) -> float:
    return (time.monotonic() - start_time) * 1000


def _unresolved(names: list[str], resolved: dict[str, str]) -> list[str]:
    return [name for name in dict.fromkeys(names) if name not in resolved]


@router.post(
    "/package",
    response_model=ResolveNameResponse,
    response_model_by_alias=True,
    operation_id="resolvePackage",
    summary="Resolve a package name",
    description="Resolve @namespace/package to its on-chain address.",
)
async def resolve_package(
    request: ResolveNameRequest,
    resolver: Resolver,
) -> ResolveNameResponse:
    start_time = time.monotonic()
    address = await resolver.resolve_package(request.name)
    return ResolveNameResponse(
        name=request.name,
        kind=ResolutionKind.PACKAGE,
        value=address,
        duration_ms=_elapsed_ms(start_time),
    )


@router.post(
    "/type",
    response_model=ResolveNameResponse,
    response_model_by_alias=True,
    operation_id="resolveType",
    summary="Resolve a type name",
    description="Resolve @namespace/package::module::Type to its full type signature.",
)
async def resolve_type(
    request: ResolveNameRequest,
    resolver: Resolver,
) -> ResolveNameResponse:
    start_time = time.monotonic()
    signature = await resolver.resolve_type(request.name)
    return ResolveNameResponse(
        name=request.name,
        kind=ResolutionKind.TYPE,
        value=signature,
        duration_ms=_elapsed_ms(start_time),
    )


@router.post(
    "/packages",
    response_model=ResolveNamesResponse,
    response_model_by_alias=True,
    operation_id="resolvePackages",
    summary="Resolve package names in batch",
)
async def resolve_packages(
    request: ResolveNamesRequest,
    resolver: Resolver,
) -> ResolveNamesResponse:
    """Resolve several package names with at most one registry request."""
    start_time = time.monotonic()
    resolved = await resolver.resolve_packages(request.names)
    return ResolveNamesResponse(
        kind=ResolutionKind.PACKAGE,
        resolved=resolved,
        unresolved=_unresolved(request.names, resolved),
        duration_ms=_elapsed_ms(start_time),
    )


@router.post(
    "/types",
    response_model=ResolveNamesResponse,
    response_model_by_alias=True,
    operation_id="resolveTypes",
    summary="Resolve type names in batch",
)
async def resolve_types(
    request: ResolveNamesRequest,
    resolver: Resolver,
) -> ResolveNamesResponse:
    """Resolve several type names with at most one registry request."""
    start_time = time.monotonic()
    resolved = await resolver.resolve_types(request.names)
    return ResolveNamesResponse(
        kind=ResolutionKind.TYPE,
        resolved=resolved,
        unresolved=_unresolved(request.names, resolved),
        duration_ms=_elapsed_ms(start_time),
    )
