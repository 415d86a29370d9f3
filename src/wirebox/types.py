from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from wirebox.container import Container

Key: TypeAlias = "str | type[Any]"
"""An entry key: a string id or a class (normalized to its dotted path)."""

Definition: TypeAlias = "Callable[[Container], Any]"
"""An invokable recipe that receives the container and returns the service."""

Decorator: TypeAlias = "Callable[[Any, Container], Any]"
"""A callable receiving a freshly built service and the container, returning the effective service."""

Observer: TypeAlias = "Callable[[Any, Container], Any]"
"""A callable invoked with every value returned by ``Container.get``."""


@runtime_checkable
class ServiceProvider(Protocol):
    """Protocol for objects that add a batch of related entries to a container."""

    def register(self, container: "Container") -> None: ...  # noqa: D102


@runtime_checkable
class Autowiring(Protocol):
    """Protocol for strategies that construct unregistered classes."""

    def autowire(self, target: "str | type[Any]") -> Any: ...  # noqa: D102


AutowiringFactory: TypeAlias = "Callable[[Container], Autowiring]"
"""A callable building an autowiring strategy bound to a container."""
