from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from typing_extensions import Self

from wirebox._internal.entries import EntryStore, IdentitySet
from wirebox.autowiring import ReflectionAutowiring
from wirebox.container_interface import IContainer
from wirebox.exceptions import (
    WireboxCyclicDependencyError,
    WireboxExpectedInvokableError,
    WireboxImmutableError,
    WireboxNotFoundError,
)
from wirebox.keys import entry_key, is_runtime_class, unique_class_key
from wirebox.lock_mode import LockMode
from wirebox.types import Autowiring, AutowiringFactory, Decorator, Definition, Key, Observer, ServiceProvider

F = TypeVar("F")

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Centralize creation and retrieval of services and parameters.

    Services are objects built lazily from *definitions*: callables that
    receive the container and return the service. Parameters are plain
    values returned as stored. Any callable added to the container is a
    definition unless it is tagged with ``protect``.

    By default a definition runs once and its result is shared by every later
    ``get``. Tag a definition with ``factory`` to build a new instance on
    every call, or wrap it with ``extend`` to decorate the built service.

    Keys are strings or classes. A class key is stored under its dotted path
    (``"package.module.ClassName"``), so ``container.get(Mailer)`` and
    ``container.get("app.mail.Mailer")`` address the same entry. With
    autowiring enabled, unknown class keys are constructed from their
    constructor annotations.
    """

    def __init__(
        self,
        entries: Mapping[Key, Any] | None = None,
        *,
        autowiring: Autowiring | AutowiringFactory | None = None,
        autowire: bool = False,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Initialize a container, optionally with initial entries.

        Args:
            entries: Initial parameters and definitions, added in mapping
                order exactly as with ``add``.
            autowiring: Strategy used to construct unregistered classes, or a
                callable receiving this container and returning one. Defaults
                to ``ReflectionAutowiring``.
            autowire: Enable the autowiring fallback for unknown keys.
            lock_mode: ``LockMode.THREAD`` guards all operations with one
                reentrant lock; ``LockMode.NONE`` disables locking.

        Examples:
            .. code-block:: python

                container = Container(
                    {
                        "dsn": "sqlite:///app.db",
                        "db": lambda c: Database(c.get("dsn")),
                    },
                )

                wired = Container(autowire=True)

        """
        self._entries = EntryStore()
        self._factories = IdentitySet()
        self._protected = IdentitySet()
        self._aliases: dict[str, str] = {}
        self._classes: dict[str, type[Any]] = {}
        self._observers: list[Observer] = []
        self._autowire = autowire
        self._lock_mode = lock_mode
        self._lock = lock_mode.create_lock()

        if autowiring is None:
            self._autowiring: Autowiring = ReflectionAutowiring(self)
        elif is_runtime_class(autowiring) or not isinstance(autowiring, Autowiring):
            self._autowiring = autowiring(self)
        else:
            self._autowiring = autowiring

        for key, value in (entries or {}).items():
            self.add(key, value)

    # region Resolution
    def get(self, key: Key) -> Any:
        """Return the service or parameter stored under ``key``.

        Definitions are invoked with the container on first retrieval and
        their result replaces the definition, unless the definition is tagged
        ``factory``. Parameters and protected callables are returned as
        stored. Every global observer runs after each successful call, cache
        hits included.

        Args:
            key: Entry key, alias, or class.

        Returns:
            The resolved value.

        Raises:
            WireboxNotFoundError: If the key is unknown and autowiring is
                disabled.
            WireboxCyclicDependencyError: If the key is already being
                resolved further up the current call stack.
            WireboxNotInstantiableError: If autowiring cannot construct the
                class.
            WireboxUnresolvableParameterError: If autowiring cannot satisfy a
                constructor parameter.

        """
        with self._lock:
            canonical = self._canonical_key(key)
            known = canonical in self._entries

            if not known and not self._autowire:
                raise WireboxNotFoundError(canonical)

            if self._entries.is_resolving(canonical):
                chain = self._entries.resolving_chain()
                logger.debug("Cycle detected for '%s' (chain: %s)", canonical, chain)
                raise WireboxCyclicDependencyError(canonical, chain)

            self._entries.mark_resolving(canonical)
            try:
                service, shared = self._produce(canonical, known=known)
                # a definition may remove its own entry; only autowiring creates one
                if shared and (not known or canonical in self._entries):
                    self._entries.store_resolved(canonical, service)
            finally:
                self._entries.unmark_resolving(canonical)

            self._notify_observers(service)
            return service

    def _produce(self, canonical: str, *, known: bool) -> tuple[Any, bool]:
        """Build the value for ``canonical``; the flag tells whether to cache it."""
        if not known:
            target = self._classes.get(canonical, canonical)
            logger.debug("Autowiring '%s'", canonical)
            return self._autowiring.autowire(target), True

        entry = self._entries.entry(canonical)
        definition = entry.value
        if not entry.is_definition or definition in self._protected:
            return definition, True

        service = definition(self)
        if definition in self._factories:
            return service, False
        return service, True

    def _notify_observers(self, value: Any) -> None:
        for observer in self._observers:
            observer(value, self)

    def has(self, key: Key) -> bool:
        """Return whether ``key`` (or the key it is bound to) is a known entry."""
        with self._lock:
            return self._canonical_key(key, remember=False) in self._entries

    def keys(self) -> list[str]:
        """Return entry keys in insertion order."""
        with self._lock:
            return list(self._entries)

    # endregion Resolution

    # region Registration
    def add(self, key: Key, value: Definition | Any) -> None:
        """Add a parameter or service definition under ``key``.

        Callables are service definitions; anything else is a parameter.
        Re-adding an unresolved key overwrites it in place.

        Raises:
            WireboxImmutableError: If the key is already resolved. Call
                ``remove`` first to replace it.

        """
        with self._lock:
            canonical = self._canonical_key(key)
            if self._entries.is_resolved(canonical):
                raise WireboxImmutableError(canonical)

            if canonical in self._entries:
                previous = self._entries.entry(canonical).value
                if previous is not value:
                    self._factories.discard(previous)
                    self._protected.discard(previous)

            entry = self._entries.put(canonical, value)
            logger.debug("Added %s '%s'", entry.kind.value, canonical)

    def remove(self, key: Key) -> None:
        """Remove the entry under ``key`` together with its tags.

        Removing an unknown key does nothing.
        """
        with self._lock:
            canonical = self._canonical_key(key, remember=False)
            self._classes.pop(canonical, None)
            entry = self._entries.pop(canonical)
            if entry is None:
                return

            self._factories.discard(entry.value)
            self._protected.discard(entry.value)
            logger.debug("Removed '%s'", canonical)

    def factory(self, definition: F) -> F:
        """Tag ``definition`` to build a new instance on every ``get``.

        Returns the definition unchanged so it can be tagged inline:

        .. code-block:: python

            container.add("request", container.factory(lambda c: Request()))

        Raises:
            WireboxExpectedInvokableError: If ``definition`` is not callable.

        """
        if not callable(definition):
            msg = "Invalid factory callback supplied."
            raise WireboxExpectedInvokableError(msg)

        with self._lock:
            self._factories.add(definition)
        return definition

    def protect(self, definition: F) -> F:
        """Tag a callable so ``get`` returns it as-is instead of invoking it.

        Raises:
            WireboxExpectedInvokableError: If ``definition`` is not callable.

        """
        if not callable(definition):
            msg = "Invalid protect callback supplied."
            raise WireboxExpectedInvokableError(msg)

        with self._lock:
            self._protected.add(definition)
        return definition

    def extend(self, key: Key | Observer, decorator: Decorator | None = None) -> None:
        """Decorate the definition under ``key``, or register a global observer.

        With two arguments, ``decorator(service, container)`` runs on the
        service built by the current definition and its return value becomes
        the service. Extensions compose in registration order, the first one
        wrapping innermost. A factory definition stays a factory.

        With a single callable argument, the callable is called with
        ``(value, container)`` after every successful ``get``.

        Args:
            key: Entry key, or the observer in the single-argument form.
            decorator: Callable receiving the built service and the container.

        Raises:
            WireboxNotFoundError: If the key is unknown.
            WireboxImmutableError: If the entry is resolving or protected.
            WireboxExpectedInvokableError: If the entry is a parameter or
                already resolved, or if the decorator (or observer) is not
                callable.

        Examples:
            .. code-block:: python

                container.extend("mailer", lambda mailer, c: mailer.with_logger(c.get("logger")))

                container.extend(lambda value, c: print("resolved", value))

        """
        if decorator is None:
            self._add_observer(key)
            return

        with self._lock:
            canonical = self._canonical_key(key)  # type: ignore[arg-type]

            if canonical not in self._entries:
                raise WireboxNotFoundError(canonical)

            if self._entries.is_resolving(canonical):
                msg = f"Cannot mutate '{canonical}' while it's resolving."
                raise WireboxImmutableError(canonical, msg)

            entry = self._entries.entry(canonical)
            if not entry.is_definition:
                msg = "Cannot extend definition of a parameter or resolved entry."
                raise WireboxExpectedInvokableError(msg)

            definition = entry.value
            if definition in self._protected:
                msg = f"Cannot extend definition of protected entry '{canonical}'."
                raise WireboxImmutableError(canonical, msg)

            if not callable(decorator):
                msg = "Invalid extend callback supplied."
                raise WireboxExpectedInvokableError(msg)

            extended = _compose(definition, decorator)

            if definition in self._factories:
                self._factories.discard(definition)
                self._factories.add(extended)

            self.add(canonical, extended)

    def _add_observer(self, observer: object) -> None:
        if not callable(observer):
            msg = "Invalid extend callback supplied."
            raise WireboxExpectedInvokableError(msg)

        with self._lock:
            self._observers.append(observer)

    def register(self, provider: ServiceProvider) -> Self:
        """Let ``provider`` add its entries and return the container.

        Providers group related entries:

        .. code-block:: python

            class MailProvider:
                def register(self, container: Container) -> None:
                    container.add("mail.host", "localhost")
                    container.add("mailer", lambda c: Mailer(c.get("mail.host")))


            container.register(MailProvider()).register(CacheProvider())

        """
        provider.register(self)
        return self

    # endregion Registration

    # region Configuration
    def bind(self, abstract: Key, concrete: Key) -> None:
        """Make ``abstract`` an alias of ``concrete``.

        Aliases are followed once; binding to another alias does not chain.
        Binding an interface class to an implementation class lets autowiring
        satisfy parameters annotated with the interface.
        """
        with self._lock:
            self._aliases[self._key(abstract)] = self._key(concrete)

    def use_autowiring(self, enabled: bool) -> None:  # noqa: FBT001
        """Enable or disable the autowiring fallback for unknown keys."""
        with self._lock:
            self._autowire = enabled

    @property
    def autowire(self) -> bool:
        return self._autowire

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    # endregion Configuration

    def _key(self, key: Key, *, remember: bool = True) -> str:
        normalized = entry_key(key)
        if not is_runtime_class(key):
            return normalized

        known = self._classes.get(normalized)
        if known is not None and known is not key:
            # same dotted path, different class object
            normalized = unique_class_key(key)
        if remember:
            self._classes[normalized] = key
        return normalized

    def _canonical_key(self, key: Key, *, remember: bool = True) -> str:
        normalized = self._key(key, remember=remember)
        return self._aliases.get(normalized, normalized)


def _compose(definition: Definition, decorator: Decorator) -> Definition:
    def extended(container: Container) -> Any:
        return decorator(definition(container), container)

    return extended
