"""Cache key builders for consistent key formatting."""

from sui_mvr.core.types import ResolutionKind


class CacheKeys:
    """Cache key builders; package and type keys never collide."""

    PACKAGE_PREFIX = "pkg"
    TYPE_PREFIX = "type"

    @classmethod
    def package(cls, package_name: str) -> str:
        """Key for a resolved package address."""
        return f"{cls.PACKAGE_PREFIX}:{package_name}"

    @classmethod
    def type(cls, type_name: str) -> str:
        """Key for a resolved type signature."""
        return f"{cls.TYPE_PREFIX}:{type_name}"

    @classmethod
    def for_kind(cls, kind: ResolutionKind | str, name: str) -> str:
        """Key for ``name`` namespaced by resolution kind."""
        if ResolutionKind(kind) == ResolutionKind.PACKAGE:
            return cls.package(name)
        return cls.type(name)
