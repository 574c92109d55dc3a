"""Options for service registration."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .dep import Dep, eager

__all__ = [
    "RegisterOption",
    "singleton",
    "transient",
    "scoped",
    "with_dependencies",
    "with_deps",
    "with_di_metadata",
    "with_group",
    "merge_options",
]


@dataclass
class RegisterOption:
    """One piece of registration configuration; several are merged together."""

    lifecycle: str = ""
    dependencies: list[str] = field(default_factory=list)
    deps: list[Dep] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    groups: list[str] = field(default_factory=list)

    def all_deps(self) -> list[Dep]:
        """Return every dependency, plain names converted to eager deps."""
        return [*self.deps, *(eager(name) for name in self.dependencies)]

    def all_dep_names(self) -> list[str]:
        """Return the names of every dependency."""
        return [*(dep.name for dep in self.deps), *self.dependencies]


def singleton() -> RegisterOption:
    """Make the service a singleton (the default)."""
    return RegisterOption(lifecycle="singleton")


def transient() -> RegisterOption:
    """Create a new instance on every resolve."""
    return RegisterOption(lifecycle="transient")


def scoped() -> RegisterOption:
    """Keep one instance per scope."""
    return RegisterOption(lifecycle="scoped")


def with_dependencies(*args: str) -> RegisterOption:
    """Declare eager dependencies by name."""
    return RegisterOption(dependencies=list(args))


def with_deps(*args: Dep) -> RegisterOption:
    """Declare dependencies with full specifications."""
    return RegisterOption(deps=list(args))


def with_di_metadata(key: str, value: str) -> RegisterOption:
    """Attach a diagnostic metadata entry."""
    return RegisterOption(metadata={key: value})


def with_group(group: str) -> RegisterOption:
    """Add the service to a named group."""
    return RegisterOption(groups=[group])


def merge_options(opts: Iterable[RegisterOption]) -> RegisterOption:
    """Combine options; the last lifecycle and metadata value win."""
    result = RegisterOption(lifecycle="singleton")
    for opt in opts:
        if opt.lifecycle:
            result.lifecycle = opt.lifecycle
        result.dependencies.extend(opt.dependencies)
        result.deps.extend(opt.deps)
        result.metadata.update(opt.metadata)
        result.groups.extend(opt.groups)
    return result