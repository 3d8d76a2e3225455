"""Unit test fixtures with HTTP mocking and fake registry transports."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

import pytest
import respx
from httpx import Response

from sui_mvr.core.exceptions import PackageNotFoundError, TypeNotFoundError
from sui_mvr.resolution.transport import BatchResolution, RegistryTransport

# Registry contents served by the fake and mocked transports
PACKAGE_ADDRESSES = {
    "@suifrens/core": "0x123456789",
    "@suifrens/accessories": "0x987654321",
    "@test/package": "0xabcdef123",
}

TYPE_SIGNATURES = {
    "@suifrens/core::suifren::SuiFren": "0x123456789::suifren::SuiFren",
    "@suifrens/core::bullshark::Bullshark": "0x123456789::bullshark::Bullshark",
    "@suifrens/accessories::hat::Hat": "0x987654321::hat::Hat",
}


# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Mock Response Helpers
# ============================================================================


def mock_json_response(data: Any, status_code: int = 200) -> Response:
    """Create a mock JSON response."""
    return Response(
        status_code=status_code,
        json=data,
        headers={"Content-Type": "application/json"},
    )


def mock_error_response(status_code: int, message: str = "Error") -> Response:
    """Create a mock plain-text error response."""
    return Response(status_code=status_code, text=message)


def mock_rate_limit_response(retry_after: int | None = 60) -> Response:
    """Create a mock 429 rate limit response."""
    headers = {"Content-Type": "application/json"}
    if retry_after is not None:
        headers["Retry-After"] = str(retry_after)
    return Response(
        status_code=429,
        json={"error": "Rate limit exceeded"},
        headers=headers,
    )


@pytest.fixture
def mock_responses():
    """Provide helper functions for creating mock responses."""
    return {
        "json": mock_json_response,
        "error": mock_error_response,
        "rate_limit": mock_rate_limit_response,
    }


# ============================================================================
# Fake Transport
# ============================================================================


class FakeTransport(RegistryTransport):
    """In-memory registry that records every call it receives.

    Set ``error`` to make every fetch raise it, and ``delay`` to make
    fetches take that long (useful for timeout and concurrency tests).
    """

    def __init__(
        self,
        packages: dict[str, str] | None = None,
        types: dict[str, str] | None = None,
    ) -> None:
        self.packages = dict(PACKAGE_ADDRESSES if packages is None else packages)
        self.types = dict(TYPE_SIGNATURES if types is None else types)
        self.error: Exception | None = None
        self.delay = 0.0
        self.calls: list[tuple[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def _enter(self, call: str, arg: Any) -> None:
        self.calls.append((call, arg))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
        finally:
            self.in_flight -= 1

    async def fetch_package(self, package_name: str) -> str:
        await self._enter("package", package_name)
        if package_name not in self.packages:
            raise PackageNotFoundError(package_name)
        return self.packages[package_name]

    async def fetch_type(self, type_name: str) -> str:
        await self._enter("type", type_name)
        if type_name not in self.types:
            raise TypeNotFoundError(type_name)
        return self.types[type_name]

    async def fetch_batch(
        self,
        packages: Sequence[str] | None = None,
        types: Sequence[str] | None = None,
    ) -> BatchResolution:
        await self._enter(
            "batch",
            {
                "packages": list(packages) if packages is not None else None,
                "types": list(types) if types is not None else None,
            },
        )
        return BatchResolution(
            packages=(
                {n: self.packages[n] for n in packages if n in self.packages}
                if packages is not None
                else None
            ),
            types=(
                {n: self.types[n] for n in types if n in self.types}
                if types is not None
                else None
            ),
        )

    async def close(self) -> None:
        self.closed = True

    def count(self, call: str) -> int:
        """Number of calls of one kind received."""
        return sum(1 for name, _ in self.calls if name == call)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Create an in-memory registry transport."""
    return FakeTransport()


# ============================================================================
# Clock Fixtures
# ============================================================================


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def make_transport():
    """Factory fixture for fake transports with custom registry contents."""
    def _make(
        packages: dict[str, str] | None = None,
        types: dict[str, str] | None = None,
    ) -> FakeTransport:
        return FakeTransport(packages, types)
    return _make


@pytest.fixture
def registry_packages() -> dict[str, str]:
    """Package addresses served by the default fake transport."""
    return dict(PACKAGE_ADDRESSES)


@pytest.fixture
def registry_types() -> dict[str, str]:
    """Type signatures served by the default fake transport."""
    return dict(TYPE_SIGNATURES)
