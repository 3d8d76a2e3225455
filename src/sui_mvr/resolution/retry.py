"""Retry helper driven by MvrError predicates."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sui_mvr.core.exceptions import MvrError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 300.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Await ``operation()``, retrying retryable MvrErrors.

    The delay before each retry is the error's own retry_delay() when it
    has one (e.g. a rate limit's Retry-After), otherwise exponential
    backoff from ``base_delay``. Both are capped at ``max_delay``.

    Usage:
        address = await with_retry(lambda: resolver.resolve_package("@ns/pkg"))

    Raises:
        MvrError: The last error once it is not retryable or retries run out
    """
    attempt = 0
    while True:
        try:
            result = await operation()
        except MvrError as e:
            if attempt >= max_retries or not e.is_retryable():
                if attempt:
                    logger.warning(f"Giving up after {attempt} retries: {e}")
                raise
            attempt += 1
            delay = e.retry_delay()
            if delay is None:
                delay = base_delay * 2**attempt
            delay = min(delay, max_delay)
            logger.info(f"Retrying in {delay:.2f}s (attempt {attempt}/{max_retries}): {e}")
            await sleep(delay)
        else:
            if attempt:
                logger.info(f"Succeeded after {attempt} retries")
            return result
