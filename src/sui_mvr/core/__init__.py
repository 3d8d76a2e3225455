"""Core domain models, errors and name validation."""

from sui_mvr.core.exceptions import (
    CacheError,
    ConfigError,
    DecodeError,
    HttpError,
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
from sui_mvr.core.names import (
    is_valid_package_name,
    is_valid_type_name,
    split_target,
    validate_package_name,
    validate_type_name,
)
from sui_mvr.core.types import HealthState, Network, ResolutionKind

__all__ = [
    # Exceptions
    "CacheError",
    "ConfigError",
    "DecodeError",
    "HttpError",
    "InvalidPackageNameError",
    "InvalidTypeNameError",
    "MvrError",
    "PackageNotFoundError",
    "RateLimitExceededError",
    "RequestTimeoutError",
    "ServerError",
    "TooManyConcurrentRequestsError",
    "TypeNotFoundError",
    # Models
    "MvrConfig",
    "MvrOverrides",
    # Names
    "is_valid_package_name",
    "is_valid_type_name",
    "split_target",
    "validate_package_name",
    "validate_type_name",
    # Types
    "HealthState",
    "Network",
    "ResolutionKind",
]
