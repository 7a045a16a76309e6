"""
Per-search vertex state.

Every search run allocates fresh tables, one per search direction, so no
search can observe the distances or predecessors left behind by another.
Tables are addressed by the dense vertex index assigned by the graph.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..models import Edge


@dataclass
class VertexState:
    """Search bookkeeping for one vertex in one direction."""

    __slots__ = (
        "distance",
        "predecessor",
        "predecessor_edge",
        "key",
        "visited",
        "in_queue",
        "heap_index",
        "sequence",
    )

    distance: Optional[float]
    predecessor: Optional[int]
    predecessor_edge: Optional[Edge]
    key: Optional[float]
    visited: bool
    in_queue: bool
    heap_index: int
    sequence: int

    @property
    def reached(self) -> bool:
        """Whether a tentative distance has been assigned."""
        return self.distance is not None


class StateTable:
    """Dense table of VertexState, one entry per vertex index."""

    def __init__(self, size: int):
        self._states: List[VertexState] = [
            VertexState(None, None, None, None, False, False, 0, 0) for _ in range(size)
        ]

    def __len__(self) -> int:
        return len(self._states)

    def __getitem__(self, index: int) -> VertexState:
        return self._states[index]

    def __iter__(self) -> Iterator[VertexState]:
        return iter(self._states)

    def seed(self, index: int, key: float = 0.0) -> VertexState:
        """Mark ``index`` as a search root at distance zero."""
        state = self._states[index]
        state.distance = 0.0
        state.key = key
        return state

    def relax(
        self, index: int, distance: float, predecessor: int, edge: Edge, key: float
    ) -> VertexState:
        """Record a shorter tentative path to ``index``."""
        state = self._states[index]
        state.distance = distance
        state.predecessor = predecessor
        state.predecessor_edge = edge
        state.key = key
        return state

    def settled_count(self) -> int:
        """Number of vertices extracted from the queue."""
        return sum(1 for state in self._states if state.visited)

    def reached_indices(self) -> Iterator[int]:
        """Indices that received a tentative distance."""
        return (i for i, state in enumerate(self._states) if state.distance is not None)
