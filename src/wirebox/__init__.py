from wirebox.autowiring import ConcreteTypePolicy, ReflectionAutowiring
from wirebox.container import Container
from wirebox.container_interface import IContainer
from wirebox.exceptions import (
    WireboxAutowiringError,
    WireboxCyclicDependencyError,
    WireboxError,
    WireboxExpectedInvokableError,
    WireboxImmutableError,
    WireboxNotFoundError,
    WireboxNotInstantiableError,
    WireboxUnresolvableParameterError,
)
from wirebox.lock_mode import LockMode
from wirebox.types import Autowiring, ServiceProvider

__all__ = [
    "Autowiring",
    "ConcreteTypePolicy",
    "Container",
    "IContainer",
    "LockMode",
    "ReflectionAutowiring",
    "ServiceProvider",
    "WireboxAutowiringError",
    "WireboxCyclicDependencyError",
    "WireboxError",
    "WireboxExpectedInvokableError",
    "WireboxImmutableError",
    "WireboxNotFoundError",
    "WireboxNotInstantiableError",
    "WireboxUnresolvableParameterError",
]
