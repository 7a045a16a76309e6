import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Set

from ..exceptions import UnknownVertexError
from .models import PathResult
from .queue import IndexedPriorityQueue
from .state import StateTable
from .utils import CancellationToken, MemoryManager, is_better_cost

logger = logging.getLogger(__name__)

# Priority of a vertex given its tentative distance and dense index
KeyFunc = Callable[[float, int], float]


class PathFinder(ABC):
    """Abstract base class for point-to-point search algorithms."""

    def __init__(self, graph: Any, max_memory_mb: Optional[float] = None):
        """Initialize finder with graph and optional memory limit."""
        self.graph = graph
        if max_memory_mb is None and getattr(graph, "config", None) is not None:
            max_memory_mb = graph.config.max_memory_mb
        self.memory_manager = MemoryManager(max_memory_mb)

    @abstractmethod
    def find_path(
        self,
        origin: int,
        dest: int,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PathResult:
        """Find the route between two vertex ids."""
        pass

    def validate_vertices(self, origin: int, dest: int) -> None:
        """Validate that both endpoints exist in the graph."""
        for label, vertex_id in (("Origin", origin), ("Destination", dest)):
            if not self.graph.has_vertex(vertex_id):
                logger.error("%s vertex %s not found", label, vertex_id)
                raise UnknownVertexError(vertex_id, f"{label} vertex '{vertex_id}' not found")

    def _step(self, cancel_token: Optional[CancellationToken]) -> None:
        """Per-extraction housekeeping."""
        if cancel_token is not None:
            cancel_token.check()
        self.memory_manager.check_memory()

    def _relax_from(
        self,
        index: int,
        table: StateTable,
        queue: IndexedPriorityQueue,
        key_func: KeyFunc,
        inspected: Set[int],
        backward: bool = False,
        on_relax: Optional[Callable[[int], None]] = None,
    ) -> None:
        """
        Relax every edge incident to a freshly settled vertex.

        Edges are traversable in both directions. The forward side visits
        outgoing edges first, the backward side incoming edges first.
        Already-settled neighbours are skipped.
        """
        base = table[index].distance
        for edge, neighbour in self.graph.incident(index, backward=backward):
            state = table[neighbour]
            if state.visited:
                continue
            inspected.add(edge.id)

            new_dist = base + edge.weight
            if is_better_cost(new_dist, state.distance):
                table.relax(neighbour, new_dist, index, edge, key_func(new_dist, neighbour))
                queue.push_or_decrease(neighbour)
                if on_relax is not None:
                    on_relax(neighbour)
