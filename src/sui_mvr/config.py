"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sui_mvr.core.models import MvrConfig, MvrOverrides
from sui_mvr.core.types import Network


class MvrSettings(BaseSettings):
    """Configuration from environment variables (``MVR_`` prefix)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="MVR_",
    )

    # Registry
    network: Network = Field(
        default=Network.TESTNET,
        description="Registry network used when no explicit endpoint is set",
    )
    endpoint: str | None = Field(
        default=None,
        description="Custom MVR endpoint URL (overrides network)",
    )
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Request timeout in seconds",
    )
    max_concurrent_requests: int = Field(
        default=10,
        ge=1,
        description="Maximum registry requests in flight",
    )

    # Cache
    cache_ttl: float = Field(
        default=3600.0,
        ge=0.0,
        description="Cache TTL in seconds",
    )
    cache_max_size: int = Field(
        default=1000,
        ge=0,
        description="Maximum number of cached resolutions",
    )
    cache_cleanup_interval: float = Field(
        default=300.0,
        gt=0.0,
        description="Seconds between expired-entry sweeps in the API service",
    )

    # Overrides, as JSON: {"packages": {...}, "types": {...}}
    overrides: MvrOverrides | None = Field(
        default=None,
        description="Static package/type overrides",
    )

    # App settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins for the API",
    )

    def to_config(self) -> MvrConfig:
        """Build the resolver configuration these settings describe."""
        config = MvrConfig.for_network(self.network)
        if self.endpoint:
            config = config.with_endpoint(self.endpoint)
        return (
            config.with_timeout(self.timeout)
            .with_cache_ttl(self.cache_ttl)
            .with_cache_max_size(self.cache_max_size)
            .with_max_concurrent_requests(self.max_concurrent_requests)
            .with_overrides(self.overrides)
        )


@lru_cache
def get_settings() -> MvrSettings:
    """Get cached settings instance."""
    return MvrSettings()
