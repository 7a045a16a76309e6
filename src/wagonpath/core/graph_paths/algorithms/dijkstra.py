"""
Point-to-point Dijkstra and A* (oriented) search.

Both searches settle vertices in non-decreasing key order and stop as soon as
the destination is extracted. Plain Dijkstra keys vertices by tentative
distance; the oriented search adds the straight-line distance to the
destination, which never overestimates the remaining road distance because
edge weights are Euclidean lengths.
"""

import logging
from time import time
from typing import Optional, Set

from ...exceptions import NoPathFoundError
from ..base import PathFinder
from ..models import PathResult, PerformanceMetrics
from ..queue import IndexedPriorityQueue
from ..state import StateTable
from ..types import SearchMode
from ..utils import CancellationToken, reconstruct_path

logger = logging.getLogger(__name__)


class DijkstraFinder(PathFinder):
    """Dijkstra search with early exit at the destination."""

    mode = SearchMode.PLAIN

    def _heuristic(self, index: int, target: int) -> float:
        """Lower bound on the remaining cost from ``index`` to ``target``."""
        return 0.0

    def find_path(
        self,
        origin: int,
        dest: int,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PathResult:
        """Find the cheapest route from ``origin`` to ``dest``."""
        with self.graph.lock:
            self.validate_vertices(origin, dest)
            metrics = PerformanceMetrics(operation=self.mode.value, start_time=time())
            try:
                return self._search(origin, dest, cancel_token, metrics)
            finally:
                metrics.end_time = time()
                if self.memory_manager.max_memory:
                    metrics.max_memory_used = int(self.memory_manager.peak_memory_mb * 1024 * 1024)
                    self.memory_manager.reset_peak_memory()
                logger.debug("%s search took %.1fms", self.mode.value, metrics.duration)

    def _search(
        self,
        origin: int,
        dest: int,
        cancel_token: Optional[CancellationToken],
        metrics: PerformanceMetrics,
    ) -> PathResult:
        vertices = self.graph.vertices
        start = self.graph.index_of(origin)
        target = self.graph.index_of(dest)

        table = StateTable(len(vertices))
        queue = IndexedPriorityQueue(table)
        inspected: Set[int] = set()

        def key_func(distance: float, index: int) -> float:
            return distance + self._heuristic(index, target)

        table.seed(start, key_func(0.0, start))
        queue.insert(start)

        while not queue.empty():
            self._step(cancel_token)
            current = queue.extract_min()
            table[current].visited = True

            if current == target:
                break

            metrics.iterations += 1
            self._relax_from(current, table, queue, key_func, inspected)

        if not table[target].visited:
            logger.debug(
                "%s search from %s exhausted after %d iterations without reaching %s",
                self.mode.value,
                origin,
                metrics.iterations,
                dest,
            )
            raise NoPathFoundError(origin, dest)

        edges, vertex_ids = reconstruct_path(vertices, table, start, target)
        cost = table[target].distance
        logger.info("%s iterations: %d", self.mode.value, metrics.iterations)
        logger.info("%s path cost: %s", self.mode.value, cost)

        return PathResult(
            origin=origin,
            dest=dest,
            cost=cost,
            path=edges,
            vertices=vertex_ids,
            mode=self.mode,
            inspected_edges=frozenset(inspected),
            settled=table.settled_count(),
        )


class OrientedSearchFinder(DijkstraFinder):
    """A* search guided by the straight-line distance to the destination."""

    mode = SearchMode.ORIENTED

    def _heuristic(self, index: int, target: int) -> float:
        vertices = self.graph.vertices
        return vertices[index].heuristic_distance(vertices[target])
