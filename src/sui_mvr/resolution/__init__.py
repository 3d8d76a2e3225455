"""Resolution layer: admission control, transport and the resolver."""

from sui_mvr.resolution.admission import AdmissionController
from sui_mvr.resolution.resolver import MvrResolver, resolve_target
from sui_mvr.resolution.retry import with_retry
from sui_mvr.resolution.transport import (
    BatchResolution,
    HttpRegistryTransport,
    RegistryTransport,
)

__all__ = [
    # Admission
    "AdmissionController",
    # Resolver
    "MvrResolver",
    "resolve_target",
    # Retry
    "with_retry",
    # Transport
    "BatchResolution",
    "HttpRegistryTransport",
    "RegistryTransport",
]
