"""Linear undo/redo over canvas snapshots."""
from __future__ import annotations

from typing import List, Optional

import numpy as np

Array = np.ndarray

# Unbounded by default; a 32x32 RGBA frame is 4 KiB.
DEFAULT_LIMIT: Optional[int] = None


def _freeze(snapshot: Array) -> Array:
    frozen = np.array(snapshot, dtype=np.uint8, copy=True)
    frozen.flags.writeable = False
    return frozen


class HistoryStack:
    """Ordered snapshots with a current-index pointer.

    Stored snapshots are private read-only copies, so nothing the caller
    does to its live buffer can change an entry after the fact. Pushing
    after an undo discards the redo branch.
    """

    def __init__(self, initial: Optional[Array] = None, limit: Optional[int] = DEFAULT_LIMIT) -> None:
        if limit is not None and limit < 1:
            raise ValueError("limit must be >= 1 or None")
        self._entries: List[Array] = []
        self._index = -1
        self._limit = limit
        if initial is not None:
            self.push(initial)

    def push(self, snapshot: Array) -> None:
        del self._entries[self._index + 1:]
        self._entries.append(_freeze(snapshot))
        if self._limit is not None and len(self._entries) > self._limit:
            del self._entries[: len(self._entries) - self._limit]
        self._index = len(self._entries) - 1

    def undo(self) -> Optional[Array]:
        """Step back one entry and return it, or ``None`` at the oldest entry."""
        if self._index <= 0:
            return None
        self._index -= 1
        return self._entries[self._index]

    def redo(self) -> Optional[Array]:
        """Step forward one entry and return it, or ``None`` at the newest entry."""
        if self._index >= len(self._entries) - 1:
            return None
        self._index += 1
        return self._entries[self._index]

    def reset(self, snapshot: Array) -> None:
        """Drop everything and start over from a single entry."""
        self._entries = [_freeze(snapshot)]
        self._index = 0

    @property
    def current(self) -> Optional[Array]:
        if self._index < 0:
            return None
        return self._entries[self._index]

    @property
    def index(self) -> int:
        return self._index

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return 0 <= self._index < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["DEFAULT_LIMIT", "HistoryStack"]
