"""Dependency specifications used when registering services."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, runtime_checkable

__all__ = [
    "DepMode",
    "Dep",
    "DependencyProvider",
    "eager",
    "eager_typed",
    "lazy",
    "lazy_typed",
    "optional",
    "optional_typed",
    "lazy_optional",
    "lazy_optional_typed",
    "dep_names",
    "deps_from_names",
]


class DepMode(IntEnum):
    """How a dependency is resolved."""

    EAGER = 0
    """Resolved immediately; missing dependencies are an error."""
    LAZY = 1
    """Resolved on first access."""
    OPTIONAL = 2
    """Resolved immediately; ``None`` when missing."""
    LAZY_OPTIONAL = 3
    """Resolved on first access; ``None`` when missing."""

    def __str__(self) -> str:
        return self.name.lower()

    def is_lazy(self) -> bool:
        """Return True if resolution is deferred until first access."""
        return self in (DepMode.LAZY, DepMode.LAZY_OPTIONAL)

    def is_optional(self) -> bool:
        """Return True if a missing dependency is tolerated."""
        return self in (DepMode.OPTIONAL, DepMode.LAZY_OPTIONAL)


@dataclass(frozen=True)
class Dep:
    """A dependency: the service name, an optional expected type and a mode."""

    name: str
    type: type | None = None
    mode: DepMode = DepMode.EAGER


@runtime_checkable
class DependencyProvider(Protocol):
    """Implemented by services that declare their own dependencies."""

    def dependencies(self) -> list[Dep]:
        """Return the dependencies this service requires."""


def eager(name: str) -> Dep:
    """Create an eager dependency."""
    return Dep(name, mode=DepMode.EAGER)


def eager_typed(name: str, type_: type) -> Dep:
    """Create an eager dependency with an expected type."""
    return Dep(name, type_, DepMode.EAGER)


def lazy(name: str) -> Dep:
    """Create a lazy dependency."""
    return Dep(name, mode=DepMode.LAZY)


def lazy_typed(name: str, type_: type) -> Dep:
    """Create a lazy dependency with an expected type."""
    return Dep(name, type_, DepMode.LAZY)


def optional(name: str) -> Dep:
    """Create an optional dependency."""
    return Dep(name, mode=DepMode.OPTIONAL)


def optional_typed(name: str, type_: type) -> Dep:
    """Create an optional dependency with an expected type."""
    return Dep(name, type_, DepMode.OPTIONAL)


def lazy_optional(name: str) -> Dep:
    """Create a lazy optional dependency."""
    return Dep(name, mode=DepMode.LAZY_OPTIONAL)


def lazy_optional_typed(name: str, type_: type) -> Dep:
    """Create a lazy optional dependency with an expected type."""
    return Dep(name, type_, DepMode.LAZY_OPTIONAL)


def dep_names(deps: Iterable[Dep]) -> list[str]:
    """Return the names of the given dependencies, in order."""
    return [dep.name for dep in deps]


def deps_from_names(names: Iterable[str]) -> list[Dep]:
    """Turn plain service names into eager dependencies."""
    return [eager(name) for name in names]