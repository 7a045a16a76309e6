"""
Index-addressable binary min-heap with decrease-key.

The heap holds dense vertex indices and orders them by the ``key`` stored in
the StateTable the queue is bound to. Each vertex's current slot is written
back into its state (``heap_index``), so decrease-key locates the vertex
without scanning. A forward and a backward search bind their queues to
different tables, so one vertex can sit in both queues at once.

The heap is 1-indexed: slot 0 is unused and ``heap_index == 0`` means the
vertex is not queued.
"""

from typing import List, Optional

from ..exceptions import EmptyQueueError
from .state import StateTable


class IndexedPriorityQueue:
    """Min-priority queue over vertex indices with O(log n) decrease-key."""

    def __init__(self, table: StateTable):
        self._table = table
        self._heap: List[int] = [-1]
        self._keys: List[float] = [0.0]
        self._counter = 0  # Insertion sequence, breaks ties between equal keys

    def __len__(self) -> int:
        return len(self._heap) - 1

    def empty(self) -> bool:
        """Return True if the queue is empty."""
        return len(self._heap) == 1

    def __contains__(self, index: int) -> bool:
        return self._table[index].in_queue

    def peek_key(self) -> Optional[float]:
        """Key of the minimum element, or None when empty."""
        if self.empty():
            return None
        return self._keys[1]

    def insert(self, index: int) -> None:
        """Add a vertex using the key currently stored in its state."""
        state = self._table[index]
        if state.in_queue:
            raise ValueError(f"Vertex index {index} is already queued")
        if state.key is None:
            raise ValueError(f"Vertex index {index} has no priority key")

        state.sequence = self._counter
        self._counter += 1
        self._heap.append(index)
        self._keys.append(state.key)
        state.in_queue = True
        state.heap_index = len(self._heap) - 1
        self._sift_up(state.heap_index)

    def extract_min(self) -> int:
        """Remove and return the vertex index with the smallest key."""
        if self.empty():
            raise EmptyQueueError("extract_min called on an empty priority queue")

        top = self._heap[1]
        last = len(self._heap) - 1
        if last > 1:
            self._move(last, 1)
        self._heap.pop()
        self._keys.pop()
        if len(self._heap) > 1:
            self._sift_down(1)

        state = self._table[top]
        state.in_queue = False
        state.heap_index = 0
        return top

    def decrease_key(self, index: int) -> None:
        """Restore heap order after the key stored in the vertex state decreased."""
        state = self._table[index]
        if not state.in_queue:
            raise ValueError(f"Vertex index {index} is not queued")
        slot = state.heap_index
        if state.key is None or not state.key < self._keys[slot]:
            raise ValueError(
                f"New key {state.key} for vertex index {index} is not lower than {self._keys[slot]}"
            )
        self._keys[slot] = state.key
        self._sift_up(slot)

    def push_or_decrease(self, index: int) -> None:
        """Insert the vertex if absent, otherwise apply decrease-key."""
        state = self._table[index]
        if state.in_queue:
            # Float rounding can turn a shorter distance into an equal key
            if state.key == self._keys[state.heap_index]:
                return
            self.decrease_key(index)
        else:
            self.insert(index)

    def _less(self, a: int, b: int) -> bool:
        key_a, key_b = self._keys[a], self._keys[b]
        if key_a != key_b:
            return key_a < key_b
        return self._table[self._heap[a]].sequence < self._table[self._heap[b]].sequence

    def _move(self, src: int, dst: int) -> None:
        index = self._heap[src]
        self._heap[dst] = index
        self._keys[dst] = self._keys[src]
        self._table[index].heap_index = dst

    def _swap(self, a: int, b: int) -> None:
        heap, keys = self._heap, self._keys
        heap[a], heap[b] = heap[b], heap[a]
        keys[a], keys[b] = keys[b], keys[a]
        self._table[heap[a]].heap_index = a
        self._table[heap[b]].heap_index = b

    def _sift_up(self, slot: int) -> None:
        while slot > 1:
            parent = slot // 2
            if not self._less(slot, parent):
                break
            self._swap(slot, parent)
            slot = parent

    def _sift_down(self, slot: int) -> None:
        size = len(self._heap) - 1
        while True:
            smallest = slot
            left, right = 2 * slot, 2 * slot + 1
            if left <= size and self._less(left, smallest):
                smallest = left
            if right <= size and self._less(right, smallest):
                smallest = right
            if smallest == slot:
                return
            self._swap(slot, smallest)
            slot = smallest
