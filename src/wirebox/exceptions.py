from __future__ import annotations

from collections.abc import Sequence


class WireboxError(Exception):
    """Represent a base class for all wirebox-specific failures.

    Catch this type when you want to handle any wirebox error path without
    matching each concrete exception class individually.
    """


class WireboxNotFoundError(WireboxError, LookupError):
    """Signal that a key has no entry in the container.

    Raised by ``Container.get`` when autowiring is disabled and the key was
    never added, and by ``Container.extend`` when the target key is missing.

    Typical fixes include adding the entry first, binding the key to a
    registered alias, or enabling autowiring for concrete classes.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Entry '{key}' is not registered in the container.")


class WireboxCyclicDependencyError(WireboxError):
    """Signal that an entry depends on itself, directly or transitively.

    Raised by ``Container.get`` when the requested key is already being
    resolved higher up the current call stack. ``chain`` holds the keys in
    resolution order, ending with the key that closed the cycle.
    """

    def __init__(self, key: str, chain: Sequence[str]) -> None:
        self.key = key
        self.chain = tuple(chain)
        path = " -> ".join((*self.chain, key))
        super().__init__(f"Cyclic dependency detected while resolving '{key}': {path}")


class WireboxImmutableError(WireboxError):
    """Signal mutation of an entry that can no longer change.

    Raised by ``Container.add`` for entries that are already resolved, and by
    ``Container.extend`` for entries that are resolving or protected.

    Typical fix is calling ``Container.remove`` before re-adding the entry.
    """

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"Entry '{key}' is resolved and cannot be modified.")


class WireboxExpectedInvokableError(WireboxError, TypeError):
    """Signal that a callable was required but something else was given.

    Raised by ``Container.factory``, ``Container.protect`` and
    ``Container.extend`` for non-callable arguments, and by ``extend`` when
    the target entry is a parameter or an already-resolved service.
    """


class WireboxAutowiringError(WireboxError):
    """Represent a base class for failures raised while autowiring a class."""


class WireboxNotInstantiableError(WireboxAutowiringError):
    """Signal that an autowiring target cannot be constructed.

    Raised when the target cannot be located, is not a class, or is an
    abstract class, protocol or builtin value type.

    Typical fixes include adding an explicit definition for the key or binding
    an interface to a concrete implementation with ``Container.bind``.
    """

    def __init__(self, target: object, reason: str) -> None:
        self.target = target
        super().__init__(f"The class '{target}' is not instantiable: {reason}.")


class WireboxUnresolvableParameterError(WireboxAutowiringError):
    """Signal a required constructor parameter that autowiring cannot satisfy.

    Raised when a parameter has neither a class annotation nor a default
    value.

    Typical fixes include annotating the parameter with a class, giving it a
    default, or adding an explicit definition for the owning class.
    """

    def __init__(self, parameter: str, owner: str) -> None:
        self.parameter = parameter
        self.owner = owner
        super().__init__(f"Could not resolve parameter '{parameter}' while resolving '{owner}'.")
