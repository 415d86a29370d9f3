from __future__ import annotations

import datetime
import decimal
import inspect
import logging
import pathlib
import pkgutil
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeGuard, get_type_hints

from typing_extensions import is_protocol

from wirebox.exceptions import WireboxNotInstantiableError, WireboxUnresolvableParameterError
from wirebox.keys import is_runtime_class

if TYPE_CHECKING:
    from wirebox.container import Container

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConcreteTypePolicy:
    """Decide which classes autowiring may construct or inject."""

    ignored_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    )

    def is_injectable(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a parameter annotation names a class to resolve.

        Builtins and plain value types count as "no class hint", so such
        parameters fall back to their default value.

        Args:
            candidate: Annotation being checked.

        """
        if not is_runtime_class(candidate):
            return False
        if candidate.__module__ == "builtins":
            return False
        if issubclass(candidate, type):
            return False
        return not issubclass(candidate, self.ignored_base_types)

    def instantiation_problem(self, candidate: object) -> str | None:
        """Return why a candidate cannot be constructed, or None when it can."""
        if not is_runtime_class(candidate):
            return "not a class"
        if not self.is_injectable(candidate):
            return "builtin or value types are not autowired"
        if is_protocol(candidate):
            return "protocols cannot be instantiated"
        if inspect.isabstract(candidate):
            return "abstract classes cannot be instantiated"
        return None


class ReflectionAutowiring:
    """Construct unregistered classes from their constructor annotations.

    Each annotated parameter is resolved through ``Container.get``, so
    transitive dependencies are cached like any other entry and cycles are
    reported by the container's cycle detection.
    """

    def __init__(self, container: Container, policy: ConcreteTypePolicy | None = None) -> None:
        self._container = container
        self._policy = policy or ConcreteTypePolicy()

    def autowire(self, target: str | type[Any]) -> Any:
        cls = self._locate(target)
        problem = self._policy.instantiation_problem(cls)
        if problem is not None:
            raise WireboxNotInstantiableError(target, problem)

        if cls.__init__ is object.__init__:
            logger.debug("Autowiring %s without constructor arguments", cls.__qualname__)
            return cls()

        args, kwargs = self._build_arguments(cls)
        logger.debug("Autowiring %s with %d argument(s)", cls.__qualname__, len(args) + len(kwargs))
        return cls(*args, **kwargs)

    def _locate(self, target: str | type[Any]) -> Any:
        if not isinstance(target, str):
            return target
        try:
            return pkgutil.resolve_name(target)
        except (ImportError, AttributeError, ValueError) as exc:
            raise WireboxNotInstantiableError(target, "the class cannot be located") from exc

    def _build_arguments(self, cls: type[Any]) -> tuple[list[Any], dict[str, Any]]:
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError) as exc:
            raise WireboxNotInstantiableError(cls.__qualname__, "its constructor cannot be inspected") from exc

        hints = _get_init_type_hints(cls)
        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for name, parameter in signature.parameters.items():
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue

            value = self._resolve_parameter(cls, name, parameter, hints.get(name))

            if parameter.kind is parameter.KEYWORD_ONLY:
                kwargs[name] = value
            else:
                args.append(value)

        return args, kwargs

    def _resolve_parameter(self, cls: type[Any], name: str, parameter: inspect.Parameter, annotation: Any) -> Any:
        if self._policy.is_injectable(annotation):
            return self._container.get(annotation)

        if parameter.default is not inspect.Parameter.empty:
            return parameter.default

        raise WireboxUnresolvableParameterError(name, cls.__qualname__)


def _get_init_type_hints(cls: type[Any]) -> dict[str, Any]:
    try:
        init = inspect.getattr_static(cls, "__init__")
        hints = get_type_hints(init)
    except TypeError:
        hints = {}
    except NameError as exc:
        logger.warning("'%s' name error retrieving %s (%s) type hints", exc.name, cls.__name__, cls.__qualname__)
        hints = {}

    return hints


__all__ = ["ConcreteTypePolicy", "ReflectionAutowiring"]
