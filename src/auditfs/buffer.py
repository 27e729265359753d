"""Append-only staging area for encoded audit records."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_CAPACITY = 128


class BatchBuffer(Generic[T]):
    """Growable buffer with an explicit capacity that doubles on overflow.

    Slots are allocated up front and reused between flushes: clearing resets
    the logical length and leaves the capacity where it was. Not thread-safe;
    the owning driver serializes access.
    """

    def __init__(self, initial_capacity: int = DEFAULT_CAPACITY):
        if initial_capacity < 1:
            raise ValueError("initial_capacity must be at least 1")
        self._slots: list[T | None] = [None] * initial_capacity
        self._length = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0

    def push(self, item: T) -> None:
        if self._length >= len(self._slots):
            self._slots.extend([None] * len(self._slots))
        self._slots[self._length] = item
        self._length += 1

    def rows(self) -> list[T]:
        return self._slots[: self._length]  # type: ignore[return-value]

    def clear(self) -> None:
        for i in range(self._length):
            self._slots[i] = None
        self._length = 0

    def drain(self) -> list[T]:
        """Pending items in push order; the buffer is empty afterwards."""
        rows = self.rows()
        self.clear()
        return rows
