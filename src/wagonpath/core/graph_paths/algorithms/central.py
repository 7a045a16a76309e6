"""
One-to-all search from the central depot vertex.

Runs Dijkstra over the whole graph without a destination, so every later
"distance from the depot" query is a dictionary read instead of a new
search.
"""

import logging
from time import time
from typing import Any, Dict, Optional, Tuple

from ...exceptions import UnknownVertexError
from ...models import Edge
from ..models import CentralResult, PerformanceMetrics
from ..queue import IndexedPriorityQueue
from ..state import StateTable
from ..utils import CancellationToken, MemoryManager, is_better_cost

logger = logging.getLogger(__name__)


class CentralSearch:
    """Dijkstra from one anchor to every reachable vertex."""

    def __init__(self, graph: Any, max_memory_mb: Optional[float] = None):
        self.graph = graph
        if max_memory_mb is None and getattr(graph, "config", None) is not None:
            max_memory_mb = graph.config.max_memory_mb
        self.memory_manager = MemoryManager(max_memory_mb)

    def run(self, central: int, cancel_token: Optional[CancellationToken] = None) -> CentralResult:
        """
        Compute shortest distances from ``central`` to all reachable vertices.

        Args:
            central: Id of the depot vertex
            cancel_token: Optional cooperative cancellation flag

        Returns:
            CentralResult bound to the current topology version

        Raises:
            UnknownVertexError: If the anchor is not in the graph
        """
        with self.graph.lock:
            if not self.graph.has_vertex(central):
                logger.error("Central vertex %s not found", central)
                raise UnknownVertexError(central, f"Central vertex '{central}' not found")

            metrics = PerformanceMetrics(operation="central", start_time=time())
            vertices = self.graph.vertices
            start = self.graph.index_of(central)

            table = StateTable(len(vertices))
            queue = IndexedPriorityQueue(table)
            table.seed(start)
            queue.insert(start)

            while not queue.empty():
                if cancel_token is not None:
                    cancel_token.check()
                self.memory_manager.check_memory()

                current = queue.extract_min()
                table[current].visited = True
                metrics.iterations += 1

                base = table[current].distance
                for edge, neighbour in self.graph.incident(current):
                    state = table[neighbour]
                    if state.visited:
                        continue
                    new_dist = base + edge.weight
                    if is_better_cost(new_dist, state.distance):
                        table.relax(neighbour, new_dist, current, edge, new_dist)
                        queue.push_or_decrease(neighbour)

            distances: Dict[int, float] = {}
            predecessors: Dict[int, Tuple[int, Edge]] = {}
            for index in table.reached_indices():
                state = table[index]
                vertex_id = vertices[index].id
                distances[vertex_id] = state.distance
                if state.predecessor is not None:
                    predecessors[vertex_id] = (vertices[state.predecessor].id, state.predecessor_edge)

            metrics.end_time = time()
            logger.info(
                "Central search from %s reached %d of %d vertices in %.1fms",
                central,
                len(distances),
                len(vertices),
                metrics.duration,
            )
            return CentralResult(
                central=central,
                version=self.graph.version,
                distances=distances,
                predecessors=predecessors,
            )
