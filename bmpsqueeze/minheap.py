"""A bounded binary min-heap of Huffman trees keyed on frequency."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

MAX_HEAP_SIZE = 512


class HeapFullError(OverflowError):
    """Raised when pushing onto a heap that has reached its capacity."""


class MinHeap:
    """Min-heap ordered by each element's ``frequency`` attribute.

    The sift rules are fixed so that ties resolve in a reproducible order,
    which keeps the resulting Huffman trees stable.
    """

    def __init__(self, capacity: int = MAX_HEAP_SIZE) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._items: list[Any] = []

    @staticmethod
    def _parent(index: int) -> int:
        return (index - 1) // 2

    def _less(self, a: int, b: int) -> bool:
        return self._items[a].frequency < self._items[b].frequency

    def _swap(self, a: int, b: int) -> None:
        items = self._items
        items[a], items[b] = items[b], items[a]

    def push(self, node: Any) -> None:
        """Insert ``node``; raise HeapFullError when at capacity."""
        if len(self._items) >= self.capacity:
            raise HeapFullError("heap capacity reached")
        self._items.append(node)
        current = len(self._items) - 1
        while current != 0 and self._less(current, self._parent(current)):
            parent = self._parent(current)
            self._swap(current, parent)
            current = parent

    def pop(self) -> Any:
        """Remove and return the element with the smallest frequency."""
        if not self._items:
            raise IndexError("pop from an empty heap")
        items = self._items
        smallest_item = items[0]
        last = items.pop()
        if not items:
            return smallest_item
        items[0] = last

        size = len(items)
        current = 0
        while True:
            left = 2 * current + 1
            right = left + 1
            smallest = current
            if left < size and self._less(left, smallest):
                smallest = left
            if right < size and self._less(right, smallest):
                smallest = right
            if smallest == current:
                break
            self._swap(current, smallest)
            current = smallest
        return smallest_item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the stored elements in internal heap order."""
        return iter(list(self._items))