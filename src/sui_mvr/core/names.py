"""Syntax checks for MVR package and type names."""

from __future__ import annotations

from sui_mvr.core.exceptions import InvalidPackageNameError, InvalidTypeNameError

NAME_PREFIX = "@"
PACKAGE_SEPARATOR = "/"
MODULE_SEPARATOR = "::"


def is_valid_package_name(name: str) -> bool:
    """Check ``@namespace/package`` syntax."""
    if not name.startswith(NAME_PREFIX):
        return False
    parts = name[1:].split(PACKAGE_SEPARATOR)
    return len(parts) == 2 and all(parts)


def is_valid_type_name(name: str) -> bool:
    """Check ``@namespace/package::module::Type`` syntax."""
    if not name.startswith(NAME_PREFIX) or MODULE_SEPARATOR not in name:
        return False
    parts = name.split(MODULE_SEPARATOR)
    if len(parts) < 3:
        return False
    return is_valid_package_name(parts[0])


def validate_package_name(name: str) -> None:
    """Raise InvalidPackageNameError unless ``name`` is a package name."""
    if not is_valid_package_name(name):
        raise InvalidPackageNameError(name)


def validate_type_name(name: str) -> None:
    """Raise InvalidTypeNameError unless ``name`` is a type name."""
    if not is_valid_type_name(name):
        raise InvalidTypeNameError(name)


def split_target(target: str) -> tuple[str, str]:
    """
    Split ``@namespace/package::module::function`` into package and remainder.

    Returns:
        Tuple of (package_name, "module::function")

    Raises:
        InvalidPackageNameError: If the package part is missing or malformed
    """
    package, separator, remainder = target.partition(MODULE_SEPARATOR)
    if not separator or not remainder or not is_valid_package_name(package):
        raise InvalidPackageNameError(target)
    return package, remainder
