from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any, TypeVar

from typing_extensions import Self

from wirebox.types import Decorator, Key, Observer, ServiceProvider

F = TypeVar("F")


class IContainer(ABC):
    """Interface for container-like objects.

    Subclasses implement the entry operations; mapping-style access
    (``container[key]``, ``key in container``, ``del container[key]``) is
    derived from them.
    """

    @abstractmethod
    def get(self, key: Key) -> Any:
        """Return the service or parameter stored under ``key``."""

    @abstractmethod
    def has(self, key: Key) -> bool:
        """Return whether ``key`` names a known entry."""

    @abstractmethod
    def add(self, key: Key, value: Any) -> None:
        """Add a parameter or a service definition."""

    @abstractmethod
    def remove(self, key: Key) -> None:
        """Remove an entry and its tags."""

    @abstractmethod
    def factory(self, definition: F) -> F:
        """Tag a definition to build a new instance on every ``get``."""

    @abstractmethod
    def protect(self, definition: F) -> F:
        """Tag a callable to be returned as-is instead of invoked."""

    @abstractmethod
    def extend(self, key: Key | Observer, decorator: Decorator | None = None) -> None:
        """Decorate a definition, or register a global observer."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return entry keys in insertion order."""

    @abstractmethod
    def register(self, provider: ServiceProvider) -> Self:
        """Let a service provider add its entries to this container."""

    def __getitem__(self, key: Key) -> Any:
        return self.get(key)

    def __setitem__(self, key: Key, value: Any) -> None:
        self.add(key, value)

    def __delitem__(self, key: Key) -> None:
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, type)):
            return False
        return self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())
