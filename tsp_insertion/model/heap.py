"""Min-heap keyed by a caller-supplied priority function.

Besides the usual push/pop this supports the bulk operations the circuit search
relies on: cloning, conditional deletion, in-place rewriting of entries and
trimming to the N smallest entries. Entries are shared by reference between a
heap and its clones; only the membership is copied.
"""

from __future__ import annotations

import heapq
from typing import Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")

# (priority, insertion sequence, entry); the sequence keeps ties FIFO and means entries are never compared.
_Slot = Tuple[float, int, T]

__all__ = ["Heap"]


class Heap(Generic[T]):
    def __init__(self, priority: Callable[[T], float]) -> None:
        self._priority: Optional[Callable[[T], float]] = priority
        self._arr: List[_Slot] = []
        self._seq = 0

    def _slot(self, entry: T) -> _Slot:
        self._seq += 1
        return (self._priority(entry), self._seq, entry)

    # ------------------------------------------------------------------
    #  Single-entry operations
    # ------------------------------------------------------------------
    def push(self, entry: T) -> None:
        """Add ``entry`` in O(log n)."""
        heapq.heappush(self._arr, self._slot(entry))

    def pop(self) -> Optional[T]:
        """Remove and return the minimum entry, or ``None`` if the heap is empty."""
        if not self._arr:
            return None
        return heapq.heappop(self._arr)[2]

    def peek(self) -> Optional[T]:
        """Return the minimum entry without removing it, or ``None`` if empty."""
        if not self._arr:
            return None
        return self._arr[0][2]

    # ------------------------------------------------------------------
    #  Bulk operations
    # ------------------------------------------------------------------
    def push_all(self, entries: Iterable[T]) -> None:
        """Append every entry, then restore heap order once (O(n) rather than O(n log n))."""
        self._arr.extend(self._slot(entry) for entry in entries)
        heapq.heapify(self._arr)

    def clone(self) -> "Heap[T]":
        """Return an independent heap holding the same entries (shared by reference)."""
        copy: Heap[T] = Heap(self._priority)
        copy._arr = list(self._arr)
        copy._seq = self._seq
        return copy

    def delete_all(self, should_delete: Callable[[T], bool]) -> List[T]:
        """Remove every entry matching ``should_delete`` and return the removed entries."""
        kept: List[_Slot] = []
        deleted: List[T] = []
        for slot in self._arr:
            if should_delete(slot[2]):
                deleted.append(slot[2])
            else:
                kept.append(slot)
        self._arr = kept
        heapq.heapify(self._arr)
        return deleted

    def replace_all(self, replace: Callable[[T], Iterable[T]]) -> None:
        """Rewrite the heap in a single pass.

        ``replace`` receives each entry and returns the entries that take its
        place: an empty iterable drops it, ``(entry,)`` keeps it, and one or
        more new entries replace it.
        """
        updated: List[_Slot] = []
        for slot in self._arr:
            for replacement in replace(slot[2]):
                if replacement is slot[2]:
                    updated.append(slot)
                else:
                    updated.append(self._slot(replacement))
        self._arr = updated
        heapq.heapify(self._arr)

    def any_match(self, predicate: Callable[[T], bool]) -> bool:
        """Return True as soon as one entry satisfies ``predicate``."""
        return any(predicate(slot[2]) for slot in self._arr)

    def trim_to_smallest(self, number_to_retain: int) -> None:
        """Keep the ``number_to_retain`` smallest entries and discard the rest."""
        if number_to_retain >= len(self._arr):
            return
        self._arr = heapq.nsmallest(max(number_to_retain, 0), self._arr)
        heapq.heapify(self._arr)

    def heapify(self) -> None:
        """Recompute every priority and restore heap order (use after mutating entries)."""
        self._arr = [(self._priority(slot[2]), slot[1], slot[2]) for slot in self._arr]
        heapq.heapify(self._arr)

    def values(self) -> List[T]:
        """Return the entries in storage order (not sorted)."""
        return [slot[2] for slot in self._arr]

    def delete(self) -> None:
        """Release the entries and the priority function."""
        self._arr = []
        self._priority = None

    def __len__(self) -> int:
        return len(self._arr)

    def __iter__(self) -> Iterator[T]:
        return iter(self.values())

    def __repr__(self) -> str:
        return f"Heap(len={len(self._arr)})"
