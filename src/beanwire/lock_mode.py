from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from enum import Enum


class LockMode(Enum):
    """Select locking behavior for cached strategy and member-index lookups.

    Strategies and member indexes are immutable once built, so the lock only
    guards the one-time build. ``NONE`` may build the same entry twice under
    concurrent first use; the duplicate is discarded.
    """

    THREAD = "thread"
    """Guard cache population with ``threading.Lock``."""

    NONE = "none"
    """Disable locking around cache population."""

    def new_lock(self) -> AbstractContextManager[object]:
        """Return a fresh lock object honoring this mode."""
        if self is LockMode.THREAD:
            return threading.Lock()
        return nullcontext()
