"""Bounded undo/redo history of immutable states."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_HISTORY_SIZE = 100


class HistoryManager(Generic[T]):
    """Linear history with a cursor, like browser back/forward.

    Pushing after an undo discards the redo branch. Beyond max_size the
    oldest state is dropped.
    """

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE):
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._states: list[T] = []
        self._index = -1

    def push(self, state: T) -> None:
        del self._states[self._index + 1:]
        self._states.append(state)
        self._index += 1

        if len(self._states) > self.max_size:
            self._states.pop(0)
            self._index -= 1

    def undo(self) -> Optional[T]:
        """Step back; None if there is nothing to undo."""
        if not self.can_undo():
            return None
        self._index -= 1
        return self._states[self._index]

    def redo(self) -> Optional[T]:
        """Step forward again; None if there is nothing to redo."""
        if not self.can_redo():
            return None
        self._index += 1
        return self._states[self._index]

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._states) - 1

    def current(self) -> T:
        if self._index < 0:
            raise IndexError("History is empty")
        return self._states[self._index]

    def jump_to(self, index: int) -> T:
        """Move the cursor to `index` without discarding anything."""
        if not 0 <= index < len(self._states):
            raise IndexError(f"Invalid history index: {index}")
        self._index = index
        return self._states[index]

    def clear(self) -> None:
        self._states = []
        self._index = -1

    @property
    def states(self) -> tuple[T, ...]:
        return tuple(self._states)

    def __len__(self) -> int:
        return len(self._states)
