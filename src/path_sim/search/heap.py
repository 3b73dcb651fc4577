# search/heap.py
import heapq
from typing import Generic, TypeVar

T = TypeVar("T")


class MinHeap(Generic[T]):
    """Binary min-heap of (priority, item) entries.

    Equal priorities pop in insertion order, so a fixed sequence of pushes
    always pops the same way. There is no decrease-key: callers push a fresh
    entry and skip the stale one when it surfaces.
    """

    def __init__(self):
        self._q: list[tuple[float, int, T]] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._q)

    def __bool__(self) -> bool:
        return bool(self._q)

    def push(self, priority: float, item: T) -> None:
        self._seq += 1
        heapq.heappush(self._q, (priority, self._seq, item))

    def pop(self) -> tuple[float, T]:
        if not self._q:
            raise IndexError("pop from empty heap")
        priority, _, item = heapq.heappop(self._q)
        return priority, item

    def peek(self) -> tuple[float, T]:
        if not self._q:
            raise IndexError("peek at empty heap")
        priority, _, item = self._q[0]
        return priority, item

    def items(self) -> list[T]:
        return [item for _, _, item in self._q]
