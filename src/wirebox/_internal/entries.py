from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class EntryKind(Enum):
    """Tagged variant of a stored entry value."""

    PARAMETER = "parameter"
    """A non-invokable value returned verbatim."""

    DEFINITION = "definition"
    """An invokable recipe not yet resolved."""

    RESOLVED = "resolved"
    """A value that ``get`` has already produced and cached."""


@dataclass(slots=True)
class Entry:
    """Current value of one key and how ``get`` must interpret it."""

    key: str
    value: Any
    kind: EntryKind

    @classmethod
    def from_value(cls, key: str, value: Any) -> Entry:
        kind = EntryKind.DEFINITION if callable(value) else EntryKind.PARAMETER
        return cls(key=key, value=value, kind=kind)

    @property
    def is_resolved(self) -> bool:
        return self.kind is EntryKind.RESOLVED

    @property
    def is_definition(self) -> bool:
        return self.kind is EntryKind.DEFINITION


class IdentitySet:
    """Set of objects compared by identity rather than equality.

    Definitions are arbitrary callables; bound methods and callable instances
    may define value equality, so membership is keyed by ``id()``. The set
    keeps a strong reference to every member so an identity cannot be reused
    by an unrelated object while tagged.
    """

    __slots__ = ("_members",)

    def __init__(self) -> None:
        self._members: dict[int, object] = {}

    def add(self, obj: object) -> None:
        self._members[id(obj)] = obj

    def discard(self, obj: object) -> None:
        member = self._members.get(id(obj))
        if member is obj:
            del self._members[id(obj)]

    def __contains__(self, obj: object) -> bool:
        return self._members.get(id(obj)) is obj

    def __len__(self) -> int:
        return len(self._members)


class EntryStore:
    """Own entries in insertion order plus the keys currently resolving."""

    __slots__ = ("_entries", "_resolving")

    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}
        # dict keeps resolution order for cycle reports
        self._resolving: dict[str, None] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def entry(self, key: str) -> Entry:
        return self._entries[key]

    def put(self, key: str, value: Any) -> Entry:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = Entry.from_value(key, value)
        else:
            # overwrite in place to keep the original insertion position
            fresh = Entry.from_value(key, value)
            entry.value = fresh.value
            entry.kind = fresh.kind
        return entry

    def store_resolved(self, key: str, value: Any) -> None:
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = Entry(key=key, value=value, kind=EntryKind.RESOLVED)
            return
        entry.value = value
        entry.kind = EntryKind.RESOLVED

    def pop(self, key: str) -> Entry | None:
        self._resolving.pop(key, None)
        return self._entries.pop(key, None)

    def is_resolved(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.is_resolved

    def is_resolving(self, key: str) -> bool:
        return key in self._resolving

    def mark_resolving(self, key: str) -> None:
        self._resolving[key] = None

    def unmark_resolving(self, key: str) -> None:
        self._resolving.pop(key, None)

    def resolving_chain(self) -> tuple[str, ...]:
        return tuple(self._resolving)
