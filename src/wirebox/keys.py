from __future__ import annotations

import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def class_key(cls: type[Any]) -> str:
    """Return the dotted path used as the entry key of a class.

    Classes defined inside a function share their qualname across calls, so
    their key also carries the class identity.
    """
    if "<locals>" in cls.__qualname__:
        return unique_class_key(cls)
    return f"{cls.__module__}.{cls.__qualname__}"


def unique_class_key(cls: type[Any]) -> str:
    """Return a key that no other live class can share."""
    return f"{cls.__module__}.{cls.__qualname__}@{id(cls):x}"


def entry_key(key: str | type[Any]) -> str:
    """Normalize a public key (string or class) into an entry key."""
    if isinstance(key, str):
        return key
    if is_runtime_class(key):
        return class_key(key)
    msg = f"Entry keys must be strings or classes, got {key!r}."
    raise TypeError(msg)


__all__ = ["class_key", "entry_key", "is_runtime_class", "unique_class_key"]
