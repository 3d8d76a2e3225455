"""Shared test fixtures for all tests."""

from __future__ import annotations

import pytest

from sui_mvr.config import MvrSettings
from sui_mvr.core.models import MvrConfig, MvrOverrides

# Registry endpoint used by configs built in tests
TEST_ENDPOINT = "https://mvr.test"


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_overrides() -> MvrOverrides:
    """Overrides pointing at local addresses."""
    return MvrOverrides(
        packages={
            "@local/package": "0xabcdef123456",
            "@suifrens/core": "0x999999999",
        },
        types={
            "@local/package::module::Type": "0xabcdef123456::module::Type",
        },
    )


@pytest.fixture
def test_config() -> MvrConfig:
    """Resolver config aimed at a test endpoint with short timeouts."""
    return MvrConfig(
        endpoint_url=TEST_ENDPOINT,
        cache_ttl=60.0,
        timeout=5.0,
        max_concurrent_requests=4,
        cache_max_size=100,
    )


@pytest.fixture
def mock_settings() -> MvrSettings:
    """Create settings for testing without reading the environment."""
    return MvrSettings(
        _env_file=None,
        endpoint=TEST_ENDPOINT,
        cache_ttl=60.0,
        timeout=5.0,
        max_concurrent_requests=4,
        cache_max_size=100,
        log_level="DEBUG",
    )


@pytest.fixture
def test_endpoint() -> str:
    """Registry endpoint used by test configs."""
    return TEST_ENDPOINT
