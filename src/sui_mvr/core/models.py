"""Configuration and override value objects."""

from __future__ import annotations

from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sui_mvr.core.exceptions import ConfigError
from sui_mvr.core.types import Network


class MvrOverrides(BaseModel):
    """Static name -> value mappings that bypass cache and network."""

    model_config = ConfigDict(frozen=True)

    packages: dict[str, str] = Field(
        default_factory=dict, description="Package name -> on-chain address"
    )
    types: dict[str, str] = Field(
        default_factory=dict, description="Type name -> full type signature"
    )

    def with_package(self, name: str, address: str) -> MvrOverrides:
        """Return a copy with one more package override."""
        return self.model_copy(update={"packages": {**self.packages, name: address}})

    def with_type(self, name: str, type_signature: str) -> MvrOverrides:
        """Return a copy with one more type override."""
        return self.model_copy(update={"types": {**self.types, name: type_signature}})

    @classmethod
    def from_json(cls, data: str | bytes) -> MvrOverrides:
        """Load overrides from ``{"packages": {...}, "types": {...}}`` JSON."""
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid overrides JSON: {e}") from e

    def to_json(self) -> str:
        """Dump overrides as pretty-printed JSON."""
        return self.model_dump_json(indent=2)


class MvrConfig(BaseModel):
    """
    Resolver configuration.

    Instances are immutable; the ``with_*`` builders return new values so a
    config shared between tasks is never changed underneath them.
    """

    model_config = ConfigDict(frozen=True)

    ENDPOINTS: ClassVar[dict[Network, str]] = {
        Network.MAINNET: "https://mainnet.mvr.mystenlabs.com",
        Network.TESTNET: "https://testnet.mvr.mystenlabs.com",
    }

    endpoint_url: str = Field(
        default="https://testnet.mvr.mystenlabs.com",
        min_length=1,
        description="MVR API endpoint URL",
    )
    cache_ttl: float = Field(default=3600.0, ge=0.0, description="Cache TTL in seconds")
    timeout: float = Field(default=30.0, gt=0.0, description="Request timeout in seconds")
    max_concurrent_requests: int = Field(
        default=10, ge=1, description="Maximum outbound fetches in flight"
    )
    cache_max_size: int = Field(default=1000, ge=0, description="Maximum cache entries")
    overrides: MvrOverrides | None = Field(default=None, description="Static overrides")

    @classmethod
    def for_network(cls, network: Network | str) -> Self:
        """Default configuration pointed at a known network."""
        return cls(endpoint_url=cls.ENDPOINTS[Network(network)])

    @classmethod
    def mainnet(cls) -> Self:
        return cls.for_network(Network.MAINNET)

    @classmethod
    def testnet(cls) -> Self:
        return cls.for_network(Network.TESTNET)

    def _replace(self, **changes: Any) -> Self:
        # Re-validate so builders enforce the same constraints as __init__
        return type(self)(**{**dict(self), **changes})

    def with_endpoint(self, endpoint_url: str) -> Self:
        return self._replace(endpoint_url=endpoint_url)

    def with_cache_ttl(self, ttl: float) -> Self:
        return self._replace(cache_ttl=ttl)

    def with_timeout(self, timeout: float) -> Self:
        return self._replace(timeout=timeout)

    def with_max_concurrent_requests(self, limit: int) -> Self:
        return self._replace(max_concurrent_requests=limit)

    def with_cache_max_size(self, max_size: int) -> Self:
        return self._replace(cache_max_size=max_size)

    def with_overrides(self, overrides: MvrOverrides | None) -> Self:
        return self._replace(overrides=overrides)
