"""sui-mvr - Move Registry (MVR) name resolution with caching and admission control."""

from sui_mvr.cache.memory import CacheStats
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
from sui_mvr.core.models import MvrConfig, MvrOverrides
from sui_mvr.core.types import Network
from sui_mvr.resolution.resolver import MvrResolver, resolve_target
from sui_mvr.resolution.retry import with_retry

__version__ = "0.1.0"
__all__ = [
    # Resolver
    "MvrResolver",
    "resolve_target",
    "with_retry",
    # Config
    "MvrConfig",
    "MvrOverrides",
    "Network",
    # Stats
    "CacheStats",
    # Errors
    "InvalidPackageNameError",
    "InvalidTypeNameError",
    "MvrError",
    "PackageNotFoundError",
    "RateLimitExceededError",
    "RequestTimeoutError",
    "ServerError",
    "TooManyConcurrentRequestsError",
    "TypeNotFoundError",
    # Version
    "__version__",
]
