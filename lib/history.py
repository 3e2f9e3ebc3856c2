"""Bounded undo/redo history over grocery list snapshots."""

import copy
from typing import Generic, TypeVar

T = TypeVar('T')

DEFAULT_MAX_HISTORY = 50


class ListHistory(Generic[T]):
    """Past/present/future snapshots with a capped number of undo steps.

    Snapshots are deep-copied on the way in and out so callers can't
    rewrite history by mutating a list they hold.
    """

    def __init__(self, initial: T, max_history: int = DEFAULT_MAX_HISTORY):
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self.max_history = max_history
        self._past: list[T] = []
        self._present: T = copy.deepcopy(initial)
        self._future: list[T] = []

    @property
    def present(self) -> T:
        return copy.deepcopy(self._present)

    @property
    def can_undo(self) -> bool:
        return len(self._past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._future) > 0

    def set(self, state: T) -> None:
        """Record a new state. Clears anything that could be redone."""
        self._past.append(self._present)
        self._past = self._past[-self.max_history:]
        self._present = copy.deepcopy(state)
        self._future = []

    def undo(self) -> bool:
        if not self._past:
            return False
        self._future.insert(0, self._present)
        self._present = self._past.pop()
        return True

    def redo(self) -> bool:
        if not self._future:
            return False
        self._past.append(self._present)
        self._present = self._future.pop(0)
        return True

    def clear(self) -> None:
        """Forget past and future, keep the current state."""
        self._past = []
        self._future = []

    def reset(self, state: T) -> None:
        """Replace the current state and forget all history."""
        self._past = []
        self._present = copy.deepcopy(state)
        self._future = []
