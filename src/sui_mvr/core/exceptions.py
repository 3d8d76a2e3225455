"""Custom exception hierarchy for sui-mvr."""

from typing import Any, ClassVar

# Fixed backoff for transport-level failures and 5xx responses (seconds)
TRANSPORT_RETRY_DELAY = 1.0
SERVER_ERROR_RETRY_DELAY = 2.0


class MvrError(Exception):
    """Base exception for all sui-mvr errors.

    Subclasses override the predicates below so callers can build uniform
    retry loops without matching on every concrete error type.
    """

    code: ClassVar[str] = "mvr_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def is_retryable(self) -> bool:
        """Whether repeating the same call may succeed."""
        return False

    def is_client_error(self) -> bool:
        """Whether the caller supplied something the registry rejects."""
        return False

    def is_rate_limited(self) -> bool:
        """Whether the registry asked us to slow down."""
        return False

    def retry_delay(self) -> float | None:
        """Suggested delay in seconds before retrying, if retryable."""
        return None


class InvalidPackageNameError(MvrError):
    """Package name does not match ``@namespace/package``."""

    code: ClassVar[str] = "invalid_package_name"

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid package name format: '{name}'. Expected format: @namespace/package",
            {"name": name},
        )
        self.name = name

    def is_client_error(self) -> bool:
        return True


class InvalidTypeNameError(MvrError):
    """Type name does not match ``@namespace/package::module::Type``."""

    code: ClassVar[str] = "invalid_type_name"

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid type name format: '{name}'. "
            "Expected format: @namespace/package::module::Type",
            {"name": name},
        )
        self.name = name

    def is_client_error(self) -> bool:
        return True


class PackageNotFoundError(MvrError):
    """Registry has no package with this name."""

    code: ClassVar[str] = "package_not_found"

    def __init__(self, name: str) -> None:
        super().__init__(f"Package '{name}' not found in MVR", {"name": name})
        self.name = name

    def is_client_error(self) -> bool:
        return True


class TypeNotFoundError(MvrError):
    """Registry has no type with this name."""

    code: ClassVar[str] = "type_not_found"

    def __init__(self, name: str) -> None:
        super().__init__(f"Type '{name}' not found in MVR", {"name": name})
        self.name = name

    def is_client_error(self) -> bool:
        return True


class RateLimitExceededError(MvrError):
    """Registry rate limit exceeded."""

    code: ClassVar[str] = "rate_limit_exceeded"

    def __init__(self, retry_after: float) -> None:
        super().__init__(
            f"Rate limit exceeded. Try again in {retry_after:g} seconds",
            {"retry_after": retry_after},
        )
        self.retry_after = retry_after

    def is_retryable(self) -> bool:
        return True

    def is_rate_limited(self) -> bool:
        return True

    def retry_delay(self) -> float | None:
        return self.retry_after


class RequestTimeoutError(MvrError):
    """Remote fetch did not complete within the configured timeout."""

    code: ClassVar[str] = "timeout"

    def __init__(self, timeout_secs: float) -> None:
        super().__init__(
            f"Request timed out after {timeout_secs:g} seconds",
            {"timeout_secs": timeout_secs},
        )
        self.timeout_secs = timeout_secs

    def is_retryable(self) -> bool:
        return True

    def retry_delay(self) -> float | None:
        return TRANSPORT_RETRY_DELAY


class ServerError(MvrError):
    """Registry answered with an unexpected status code."""

    code: ClassVar[str] = "server_error"

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(
            f"Server error: {status_code} - {message}",
            {"status_code": status_code},
        )
        self.status_code = status_code
        self.server_message = message

    def is_retryable(self) -> bool:
        return self.status_code >= 500

    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    def retry_delay(self) -> float | None:
        if self.status_code >= 500:
            return SERVER_ERROR_RETRY_DELAY
        return None


class TooManyConcurrentRequestsError(MvrError):
    """Waiting for an admission permit was aborted."""

    code: ClassVar[str] = "too_many_concurrent_requests"

    def __init__(self, max_concurrent: int) -> None:
        super().__init__(
            f"Too many concurrent requests. Maximum allowed: {max_concurrent}",
            {"max_concurrent": max_concurrent},
        )
        self.max_concurrent = max_concurrent

    def is_retryable(self) -> bool:
        return True


class CacheError(MvrError):
    """Cache operation failed."""

    code: ClassVar[str] = "cache_error"


class HttpError(MvrError):
    """Transport-level failure talking to the registry."""

    code: ClassVar[str] = "http_error"

    def is_retryable(self) -> bool:
        return True

    def retry_delay(self) -> float | None:
        return TRANSPORT_RETRY_DELAY


class DecodeError(MvrError):
    """Registry response did not have the expected shape."""

    code: ClassVar[str] = "decode_error"


class ConfigError(MvrError):
    """Invalid configuration."""

    code: ClassVar[str] = "config_error"
