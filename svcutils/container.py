"""Interfaces for the dependency-injection container and managed services."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from .dep import Dep
from .options import RegisterOption

__all__ = [
    "Factory",
    "Container",
    "Scope",
    "ServiceInfo",
    "Service",
    "HealthChecker",
    "Configurable",
    "Disposable",
]


@dataclass
class ServiceInfo:
    """Diagnostic information about a registered service."""

    name: str
    type: str = ""
    lifecycle: str = ""
    dependencies: list[str] = field(default_factory=list)
    deps: list[Dep] = field(default_factory=list)
    started: bool = False
    healthy: bool = False
    metadata: dict[str, str] = field(default_factory=dict)


class Scope(Protocol):
    """A bounded lifetime for scoped services, such as one request."""

    def resolve(self, name: str) -> Any:
        """Return a service; scoped ones are cached in this scope."""

    def end(self) -> None:
        """Release every scoped service created in this scope."""


class Container(Protocol):
    """Dependency injection with lifecycle management."""

    def register(self, name: str, factory: Factory, *args: RegisterOption) -> None:
        """Add a service factory; raises if the name is taken or invalid."""

    def resolve(self, name: str) -> Any:
        """Return a service by name; raises if missing or creation fails."""

    def resolve_ready(self, name: str) -> Any:
        """Return a service after starting it and its dependencies."""

    def has(self, name: str) -> bool:
        """Return True if a service is registered under the name."""

    def is_started(self, name: str) -> bool:
        """Return True if the service exists and has been started."""

    def services(self) -> list[str]:
        """Return the names of all registered services."""

    def begin_scope(self) -> Scope:
        """Open a scope for scoped services; end it when done."""

    def start(self) -> None:
        """Start all services in dependency order."""

    def stop(self) -> None:
        """Stop all services in reverse dependency order."""

    def health(self) -> None:
        """Check every service; raises if any is unhealthy."""

    def inspect(self, name: str) -> ServiceInfo:
        """Return diagnostic information about a service."""


Factory = Callable[[Container], Any]
"""Creates a service instance from the container."""


@runtime_checkable
class Service(Protocol):
    """A managed service with a start/stop lifecycle."""

    def name(self) -> str:
        """Return the service name."""

    def start(self) -> None:
        """Start the service."""

    def stop(self) -> None:
        """Stop the service."""


@runtime_checkable
class HealthChecker(Protocol):
    """A service that can report its health."""

    def health(self) -> None:
        """Raise if the service is unhealthy."""


@runtime_checkable
class Configurable(Protocol):
    """A service that accepts configuration."""

    def configure(self, config: Any) -> None:
        """Apply the configuration; raise if it is invalid."""


@runtime_checkable
class Disposable(Protocol):
    """A scoped service that needs cleanup."""

    def dispose(self) -> None:
        """Release the service's resources."""