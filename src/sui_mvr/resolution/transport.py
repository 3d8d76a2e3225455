"""Registry transport: the remote fetch contract and its httpx implementation."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any, ClassVar, TypeVar

import httpx
from pydantic import BaseModel, Field, ValidationError

from sui_mvr.core.exceptions import (
    DecodeError,
    HttpError,
    PackageNotFoundError,
    RateLimitExceededError,
    RequestTimeoutError,
    ServerError,
    TypeNotFoundError,
)
from sui_mvr.core.models import MvrConfig

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

USER_AGENT = "sui-mvr-python/0.1.0"

# Used when a 429 carries no usable Retry-After header
DEFAULT_RETRY_AFTER = 60.0

# Shortest string accepted as a bare hex address in a 200 body
MIN_RAW_ADDRESS_LENGTH = 42


class PackageResponse(BaseModel):
    """Registry response for a single package lookup."""

    package_id: str | None = None
    address: str | None = None
    name: str | None = None
    version: str | int | None = None

    @property
    def resolved_address(self) -> str | None:
        return self.address or self.package_id


class TypeResponse(BaseModel):
    """Registry response for a single type lookup."""

    type_signature: str | None = None
    signature: str | None = None
    package_id: str | None = None
    module: str | None = None
    name: str | None = None

    @property
    def resolved_signature(self) -> str | None:
        return self.type_signature or self.signature


class BatchResolutionRequest(BaseModel):
    """Body of a batch resolution request."""

    packages: list[str] | None = None
    types: list[str] | None = None


class BatchResolution(BaseModel):
    """Result of a batch resolution request."""

    packages: dict[str, str] | None = Field(default=None)
    types: dict[str, str] | None = Field(default=None)
    errors: dict[str, str] | None = Field(
        default=None, description="Per-name errors reported inside a successful batch"
    )


class RegistryTransport(ABC):
    """
    Remote fetch contract consumed by the resolver.

    Implementations raise MvrError subclasses: *NotFoundError for unknown
    names, RateLimitExceededError, ServerError, RequestTimeoutError,
    HttpError for transport failures and DecodeError for malformed bodies.
    """

    @abstractmethod
    async def fetch_package(self, package_name: str) -> str:
        """Fetch the on-chain address of one package."""
        ...

    @abstractmethod
    async def fetch_type(self, type_name: str) -> str:
        """Fetch the full signature of one type."""
        ...

    @abstractmethod
    async def fetch_batch(
        self,
        packages: Sequence[str] | None = None,
        types: Sequence[str] | None = None,
    ) -> BatchResolution:
        """Fetch many packages and/or types in one request."""
        ...

    async def close(self) -> None:
        """Release any resources held by the transport."""

    async def __aenter__(self) -> RegistryTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class HttpRegistryTransport(RegistryTransport):
    """
    MVR HTTP API transport.

    Provides:
    - Lazily created httpx client with connection pooling
    - Status code -> MvrError mapping
    - Tolerant parsing of single-name response bodies
    """

    PACKAGE_PATH: ClassVar[str] = "/resolve/package/{name}"
    TYPE_PATH: ClassVar[str] = "/resolve/type/{name}"
    BATCH_PATH: ClassVar[str] = "/resolve/batch"

    def __init__(self, config: MvrConfig) -> None:
        self.config = config
        self._client: httpx.AsyncClient | None = None

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client, translating httpx failures."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.endpoint_url,
                timeout=httpx.Timeout(self.config.timeout),
                headers=self._get_default_headers(),
            )

        try:
            yield self._client
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(self.config.timeout) from e
        except httpx.HTTPError as e:
            raise HttpError(f"HTTP request failed: {e}") from e

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        async with self._get_client() as client:
            response = await client.request(method, url, **kwargs)
            # Read inside the client context so body errors are translated too
            await response.aread()
        return response

    async def fetch_package(self, package_name: str) -> str:
        response = await self._request("GET", self.PACKAGE_PATH.format(name=package_name))
        if response.status_code == 404:
            raise PackageNotFoundError(package_name)
        self._raise_for_status(response)
        return self._extract_package_address(response.text)

    async def fetch_type(self, type_name: str) -> str:
        response = await self._request("GET", self.TYPE_PATH.format(name=type_name))
        if response.status_code == 404:
            raise TypeNotFoundError(type_name)
        self._raise_for_status(response)
        return self._extract_type_signature(response.text)

    async def fetch_batch(
        self,
        packages: Sequence[str] | None = None,
        types: Sequence[str] | None = None,
    ) -> BatchResolution:
        request = BatchResolutionRequest(
            packages=list(packages) if packages is not None else None,
            types=list(types) if types is not None else None,
        )
        response = await self._request(
            "POST",
            self.BATCH_PATH,
            json=request.model_dump(),
        )
        self._raise_for_status(response)

        try:
            result = BatchResolution.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"Malformed batch response: {e}") from e

        if result.errors:
            logger.warning(
                f"Registry reported {len(result.errors)} per-name errors in batch: "
                f"{sorted(result.errors)}"
            )
        return result

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        """Map any non-200 status to the matching MvrError."""
        if response.status_code == 200:
            return
        if response.status_code == 429:
            raise RateLimitExceededError(_parse_retry_after(response))
        raise ServerError(response.status_code, response.text or "Unknown error")

    @staticmethod
    def _extract_package_address(text: str) -> str:
        body = text.strip()
        if body.startswith("0x") and len(body) >= MIN_RAW_ADDRESS_LENGTH:
            return body
        payload = _parse_json_object(body, PackageResponse)
        if payload.resolved_address is None:
            raise DecodeError("Address not found in response")
        return payload.resolved_address

    @staticmethod
    def _extract_type_signature(text: str) -> str:
        payload = _parse_json_object(text, TypeResponse)
        if payload.resolved_signature is None:
            raise DecodeError("Type signature not found in response")
        return payload.resolved_signature


def _parse_json_object(text: str, model: type[ModelT]) -> ModelT:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Failed to parse JSON response: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError("Expected a JSON object in response")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected response shape: {e}") from e


def _parse_retry_after(response: httpx.Response) -> float:
    retry_after = response.headers.get("Retry-After")
    if retry_after is None:
        return DEFAULT_RETRY_AFTER
    try:
        return float(retry_after)
    except ValueError:
        return DEFAULT_RETRY_AFTER
