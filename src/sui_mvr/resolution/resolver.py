"""MVR resolver: override -> cache -> registry lookup pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from typing import TypeVar

from sui_mvr.cache.keys import CacheKeys
from sui_mvr.cache.memory import CacheStats, MvrCache
from sui_mvr.core.exceptions import CacheError, RequestTimeoutError
from sui_mvr.core.models import MvrConfig, MvrOverrides
from sui_mvr.core.names import split_target, validate_package_name, validate_type_name
from sui_mvr.core.types import ResolutionKind
from sui_mvr.resolution.admission import AdmissionController
from sui_mvr.resolution.transport import HttpRegistryTransport, RegistryTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MvrResolver:
    """
    Resolves MVR package and type names to on-chain identifiers.

    Lookups go through static overrides first, then the in-memory cache,
    and only then the registry. Registry fetches are bounded by an
    admission controller and by the configured timeout; successful
    fetches populate the cache.

    Usage:
        async with MvrResolver.mainnet() as resolver:
            address = await resolver.resolve_package("@suifrens/core")
            signatures = await resolver.resolve_types([
                "@suifrens/core::suifren::SuiFren",
            ])
    """

    def __init__(
        self,
        config: MvrConfig | None = None,
        *,
        transport: RegistryTransport | None = None,
        cache: MvrCache | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            config: Resolver configuration (testnet defaults if omitted)
            transport: Registry transport; an HTTP transport for
                ``config.endpoint_url`` is created if omitted
            cache: Cache instance; one sized from the config if omitted
        """
        self._config = config if config is not None else MvrConfig()
        self._custom_transport = transport is not None
        self._transport = (
            transport if transport is not None else HttpRegistryTransport(self._config)
        )
        self._cache = (
            cache
            if cache is not None
            else MvrCache(self._config.cache_ttl, self._config.cache_max_size)
        )
        self._admission = AdmissionController(self._config.max_concurrent_requests)

    @classmethod
    def mainnet(cls) -> MvrResolver:
        """Create a resolver for mainnet."""
        return cls(MvrConfig.mainnet())

    @classmethod
    def testnet(cls) -> MvrResolver:
        """Create a resolver for testnet."""
        return cls(MvrConfig.testnet())

    def with_overrides(self, overrides: MvrOverrides) -> MvrResolver:
        """
        Return a resolver using ``overrides`` in place of the current ones.

        The new resolver starts with an empty cache and its own admission
        controller. An injected transport is shared with it; otherwise it
        gets its own HTTP transport, so closing one resolver never closes
        the other's client.
        """
        transport = self._transport if self._custom_transport else None
        return type(self)(self._config.with_overrides(overrides), transport=transport)

    @property
    def config(self) -> MvrConfig:
        """The active configuration."""
        return self._config

    @property
    def transport(self) -> RegistryTransport:
        return self._transport

    @property
    def cache(self) -> MvrCache:
        return self._cache

    @property
    def admission(self) -> AdmissionController:
        return self._admission

    # Single resolution

    async def resolve_package(self, package_name: str) -> str:
        """Resolve a package name to its on-chain address."""
        validate_package_name(package_name)
        return await self._resolve(ResolutionKind.PACKAGE, package_name)

    async def resolve_type(self, type_name: str) -> str:
        """Resolve a type name to its full type signature."""
        validate_type_name(type_name)
        return await self._resolve(ResolutionKind.TYPE, type_name)

    # Batch resolution

    async def resolve_packages(self, package_names: Iterable[str]) -> dict[str, str]:
        """
        Resolve many package names with at most one registry request.

        Returns:
            Mapping of package name -> address for every name resolved.
            Names the registry did not return are absent.

        Raises:
            InvalidPackageNameError: If any name is malformed (nothing is looked up)
            MvrError: If the batch fetch fails (no partial results)
        """
        names = list(dict.fromkeys(package_names))
        for name in names:
            validate_package_name(name)
        return await self._resolve_many(ResolutionKind.PACKAGE, names)

    async def resolve_types(self, type_names: Iterable[str]) -> dict[str, str]:
        """
        Resolve many type names with at most one registry request.

        Same semantics as resolve_packages().
        """
        names = list(dict.fromkeys(type_names))
        for name in names:
            validate_type_name(name)
        return await self._resolve_many(ResolutionKind.TYPE, names)

    # Cache maintenance

    def cache_stats(self) -> CacheStats:
        """Get cache statistics."""
        return self._cache.stats()

    def cleanup_expired_cache(self) -> int:
        """Remove expired cache entries, returning how many were removed."""
        return self._cache.cleanup_expired()

    def clear_cache(self) -> None:
        """Drop every cached resolution."""
        self._cache.clear()

    # Pipeline

    def _override_for(self, kind: ResolutionKind, name: str) -> str | None:
        overrides = self._config.overrides
        if overrides is None:
            return None
        if kind == ResolutionKind.PACKAGE:
            return overrides.packages.get(name)
        return overrides.types.get(name)

    async def _resolve(self, kind: ResolutionKind, name: str) -> str:
        override = self._override_for(kind, name)
        if override is not None:
            logger.debug(f"Override hit for {kind}: {name}")
            return override

        cache_key = CacheKeys.for_kind(kind, name)
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {kind}: {name}")
            return cached

        async with self._admission.permit():
            if kind == ResolutionKind.PACKAGE:
                value = await self._with_timeout(self._transport.fetch_package(name))
            else:
                value = await self._with_timeout(self._transport.fetch_type(name))

        self._store(cache_key, value)
        return value

    async def _resolve_many(self, kind: ResolutionKind, names: list[str]) -> dict[str, str]:
        if not names:
            return {}

        results: dict[str, str] = {}
        to_fetch: list[str] = []

        for name in names:
            override = self._override_for(kind, name)
            if override is not None:
                results[name] = override
                continue

            cached = self._cache.get(CacheKeys.for_kind(kind, name))
            if cached is not None:
                results[name] = cached
                continue

            to_fetch.append(name)

        if not to_fetch:
            return results

        logger.debug(
            f"Batch {kind} resolution: {len(results)} local hits, fetching {len(to_fetch)}"
        )
        async with self._admission.permit():
            if kind == ResolutionKind.PACKAGE:
                batch = await self._with_timeout(self._transport.fetch_batch(packages=to_fetch))
                fetched = batch.packages or {}
            else:
                batch = await self._with_timeout(self._transport.fetch_batch(types=to_fetch))
                fetched = batch.types or {}

        for name, value in fetched.items():
            self._store(CacheKeys.for_kind(kind, name), value)
            results[name] = value

        missing = [name for name in to_fetch if name not in fetched]
        if missing:
            logger.info(f"Registry did not resolve {len(missing)} {kind} names: {missing}")

        return results

    async def _with_timeout(self, awaitable: Awaitable[T]) -> T:
        try:
            async with asyncio.timeout(self._config.timeout):
                return await awaitable
        except TimeoutError as e:
            raise RequestTimeoutError(self._config.timeout) from e

    def _store(self, cache_key: str, value: str) -> None:
        # The value is already resolved; failing to cache it must not fail the call
        try:
            self._cache.insert(cache_key, value)
        except CacheError as e:
            logger.warning(f"Could not cache {cache_key}: {e}")

    # Lifecycle

    async def close(self) -> None:
        """Abort pending admissions and close the transport."""
        self._admission.close()
        await self._transport.close()

    async def __aenter__(self) -> MvrResolver:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


async def resolve_target(resolver: MvrResolver, target: str) -> str:
    """
    Resolve the package part of a ``@ns/pkg::module::function`` target.

    Targets that do not start with ``@`` are returned unchanged.

    Returns:
        ``<address>::module::function``
    """
    if not target.startswith("@"):
        return target
    package_name, remainder = split_target(target)
    address = await resolver.resolve_package(package_name)
    return f"{address}::{remainder}"
