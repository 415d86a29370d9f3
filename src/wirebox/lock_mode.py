from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from enum import Enum


class LockMode(Enum):
    """Select locking behavior for container operations.

    A container guards its entries, tags and resolving state with a single
    lock, since any definition may call back into the container for other
    keys.
    """

    THREAD = "thread"
    """Guard every operation with one reentrant ``threading.RLock``."""

    NONE = "none"
    """Disable locking, for containers used from a single thread only."""

    def create_lock(self) -> AbstractContextManager[object]:
        """Return the lock object a container holds for this mode."""
        if self is LockMode.THREAD:
            return threading.RLock()
        return nullcontext()
