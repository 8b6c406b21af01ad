"""Fixed-size FIFO ring buffer with one slot kept free."""

from __future__ import annotations

import threading
from typing import Generic, Optional, TypeVar

_T = TypeVar("_T")


class RingBuffer(Generic[_T]):
    """Ring of ``capacity`` slots holding at most ``capacity - 1`` items."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._size = capacity
        self._slots: list[Optional[_T]] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._size

    def push(self, item: _T) -> bool:
        """Append an item; returns False and drops it when the buffer is full."""
        with self._lock:
            next_tail = (self._tail + 1) % self._size
            if next_tail == self._head:
                return False
            self._slots[self._tail] = item
            self._tail = next_tail
            return True

    def pop(self) -> _T:
        """Remove and return the oldest item; raises IndexError when empty."""
        with self._lock:
            if self._head == self._tail:
                raise IndexError("pop from empty ring buffer")
            item = self._slots[self._head]
            self._slots[self._head] = None
            self._head = (self._head + 1) % self._size
            return item  # type: ignore[return-value]

    def __len__(self) -> int:
        head, tail = self._head, self._tail
        if tail >= head:
            return tail - head
        return self._size - head + tail