from __future__ import annotations

from itertools import count
from math import isnan
from typing import Dict, Generic, Hashable, Iterator, List, TypeVar

from navgraph.lib.algorithms.base import (
    Cost,
    DuplicateKeyError,
    EmptyQueueError,
    KeyNotFoundError,
)

K = TypeVar("K", bound=Hashable)


class IndexedMinPQ(Generic[K]):
    """
    Binary min-heap of unique keys with mutable priorities.

    Alongside the array-backed heap the queue keeps a ``key -> heap position``
    index, so membership tests are O(1) and ``change_priority`` on an arbitrary
    key is O(log n) without scanning the heap.

    Keys with equal priority come out in the order they were first added.
    Changing a key's priority keeps its original insertion order.

    Heap entries are ``[priority, order, key]`` lists; ``(priority, order)`` is
    unique per entry, so keys themselves are never compared.
    """

    def __init__(self) -> None:
        self._heap: List[list] = []
        self._index: Dict[K, int] = {}
        self._counter = count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[K]:
        """Iterate over a snapshot of the queued keys in heap (not priority) order."""
        return iter([entry[2] for entry in self._heap])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self._heap)})"

    def size(self) -> int:
        """Return the number of queued keys."""
        return len(self._heap)

    def add(self, key: K, priority: Cost) -> None:
        """
        Queue ``key`` with ``priority``.

        Raises:
            DuplicateKeyError: If the key is already queued.
            ValueError: If the priority is NaN.
        """
        if key in self._index:
            raise DuplicateKeyError(f"Key '{key}' is already in the queue.")
        self._check_priority(priority)
        self._heap.append([priority, next(self._counter), key])
        pos = len(self._heap) - 1
        self._index[key] = pos
        self._swim(pos)

    def peek_smallest(self) -> K:
        """
        Return the key with the smallest priority without removing it.

        Raises:
            EmptyQueueError: If the queue is empty.
        """
        if not self._heap:
            raise EmptyQueueError("peek_smallest() on an empty queue.")
        return self._heap[0][2]

    def remove_smallest(self) -> K:
        """
        Remove and return the key with the smallest priority.

        Raises:
            EmptyQueueError: If the queue is empty.
        """
        if not self._heap:
            raise EmptyQueueError("remove_smallest() on an empty queue.")
        last = len(self._heap) - 1
        self._swap(0, last)
        _, _, key = self._heap.pop()
        del self._index[key]
        if self._heap:
            self._sink(0)
        return key

    def priority(self, key: K) -> Cost:
        """
        Return the current priority of ``key``.

        Raises:
            KeyNotFoundError: If the key is not queued.
        """
        if key not in self._index:
            raise KeyNotFoundError(key)
        return self._heap[self._index[key]][0]

    def change_priority(self, key: K, priority: Cost) -> None:
        """
        Set a new priority for a queued key. Both increases and decreases are
        allowed.

        Raises:
            KeyNotFoundError: If the key is not queued.
            ValueError: If the priority is NaN.
        """
        if key not in self._index:
            raise KeyNotFoundError(key)
        self._check_priority(priority)
        pos = self._index[key]
        old_priority = self._heap[pos][0]
        self._heap[pos][0] = priority
        if priority < old_priority:
            self._swim(pos)
        elif priority > old_priority:
            self._sink(pos)

    #
    # Heap internals
    #
    @staticmethod
    def _check_priority(priority: Cost) -> None:
        if isnan(priority):
            raise ValueError("Priority must not be NaN.")

    def _less(self, i: int, j: int) -> bool:
        a = self._heap[i]
        b = self._heap[j]
        return (a[0], a[1]) < (b[0], b[1])

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._index[heap[i][2]] = i
        self._index[heap[j][2]] = j

    def _swim(self, pos: int) -> None:
        while pos > 0:
            parent = (pos - 1) // 2
            if not self._less(pos, parent):
                break
            self._swap(pos, parent)
            pos = parent

    def _sink(self, pos: int) -> None:
        size = len(self._heap)
        while True:
            smallest = pos
            left = 2 * pos + 1
            right = left + 1
            if left < size and self._less(left, smallest):
                smallest = left
            if right < size and self._less(right, smallest):
                smallest = right
            if smallest == pos:
                return
            self._swap(pos, smallest)
            pos = smallest
