"""Mapping of MvrError to HTTP error responses."""

from __future__ import annotations

import logging
import math

from fastapi import Request
from fastapi.responses import JSONResponse

from sui_mvr.api.schemas import APIError, ErrorDetail
from sui_mvr.core.exceptions import (
    InvalidPackageNameError,
    InvalidTypeNameError,
    MvrError,
    PackageNotFoundError,
    RateLimitExceededError,
    RequestTimeoutError,
    ServerError,
    TooManyConcurrentRequestsError,
    TypeNotFoundError,
)

logger = logging.getLogger(__name__)

# Checked in order; anything unmatched is a 500
ERROR_STATUS: list[tuple[type[MvrError], int]] = [
    (InvalidPackageNameError, 400),
    (InvalidTypeNameError, 400),
    (PackageNotFoundError, 404),
    (TypeNotFoundError, 404),
    (RateLimitExceededError, 429),
    (RequestTimeoutError, 504),
    (ServerError, 502),
    (TooManyConcurrentRequestsError, 503),
]


def status_for_error(exc: MvrError) -> int:
    """HTTP status code reported for a resolution error."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def mvr_error_handler(request: Request, exc: MvrError) -> JSONResponse:
    """Render an MvrError as the standard API error body."""
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc}")

    body = APIError(
        error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details or None)
    )
    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(math.ceil(exc.retry_after))}

    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, mode="json"),
        headers=headers,
    )
