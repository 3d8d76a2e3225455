"""Core enums and type definitions."""

from enum import StrEnum


class ResolutionKind(StrEnum):
    """Kinds of names the registry can resolve."""

    PACKAGE = "package"
    TYPE = "type"


class Network(StrEnum):
    """Known registry deployments."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


class HealthState(StrEnum):
    """Overall service health."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
