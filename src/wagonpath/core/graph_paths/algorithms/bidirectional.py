"""
Bidirectional A* search.

A forward frontier grows from the origin, keyed by distance plus the
straight-line distance to the destination, and a backward frontier grows from
the destination, keyed by distance plus the straight-line distance to the
origin. The two frontiers alternate in strict lock-step, one extraction each.

Two meeting criteria are supported (see MeetingCriterion):

DISTANCE_SUM
    Tracks ``mu = min(forward distance + backward distance)`` over every vertex
    labelled by both frontiers and stops once either queue's minimum key
    reaches ``mu``. With a consistent heuristic no unexplored route can beat
    ``mu`` at that point, so the route is optimal.

HEURISTIC_SUM
    Stops at the first vertex settled by both frontiers, then drains both
    queues and adopts the vertex minimising the sum of its forward and
    backward keys. This explores fewer vertices but is not guaranteed to
    find the cheapest route.

Once a meeting vertex is chosen, the backward half-path is stitched onto the
forward predecessor chain so the route is read back exactly like a
unidirectional search.
"""

import logging
from dataclasses import dataclass, field
from time import time
from typing import Any, Callable, List, Optional, Set

from ...exceptions import NoPathFoundError
from ..base import PathFinder
from ..models import PathResult, PerformanceMetrics
from ..queue import IndexedPriorityQueue
from ..state import StateTable
from ..types import MeetingCriterion, SearchMode
from ..utils import CancellationToken, reconstruct_path

logger = logging.getLogger(__name__)


@dataclass
class Frontier:
    """State of one search direction."""

    name: str
    table: StateTable
    queue: IndexedPriorityQueue
    goal: int  # Dense index the heuristic aims at
    backward: bool
    inspected: Set[int] = field(default_factory=set)


class BidirectionalFinder(PathFinder):
    """Bidirectional A* with configurable meeting vertex selection."""

    mode = SearchMode.BIDIRECTIONAL

    def __init__(
        self,
        graph: Any,
        max_memory_mb: Optional[float] = None,
        criterion: Optional[MeetingCriterion] = None,
    ):
        """Initialize finder; the criterion defaults to the graph configuration."""
        super().__init__(graph, max_memory_mb)
        if criterion is None:
            config = getattr(graph, "config", None)
            criterion = config.meeting_criterion if config else MeetingCriterion.DISTANCE_SUM
        self.criterion = criterion
        logger.debug("BidirectionalFinder initialized with criterion: %s", criterion.value)

    def find_path(
        self,
        origin: int,
        dest: int,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PathResult:
        """Find a route using bidirectional A*."""
        with self.graph.lock:
            self.validate_vertices(origin, dest)
            metrics = PerformanceMetrics(operation=self.mode.value, start_time=time())
            try:
                return self._run(origin, dest, cancel_token, metrics)
            finally:
                metrics.end_time = time()
                if self.memory_manager.max_memory:
                    metrics.max_memory_used = int(self.memory_manager.peak_memory_mb * 1024 * 1024)
                    self.memory_manager.reset_peak_memory()
                logger.debug("%s search took %.1fms", self.mode.value, metrics.duration)

    def _run(
        self,
        origin: int,
        dest: int,
        cancel_token: Optional[CancellationToken],
        metrics: PerformanceMetrics,
    ) -> PathResult:
        vertices = self.graph.vertices
        start = self.graph.index_of(origin)
        target = self.graph.index_of(dest)

        forward = self._make_frontier("forward", len(vertices), start, goal=target, backward=False)
        backward = self._make_frontier("backward", len(vertices), target, goal=start, backward=True)

        if self.criterion is MeetingCriterion.DISTANCE_SUM:
            meeting = self._search_distance_sum(forward, backward, cancel_token, metrics)
        else:
            meeting = self._search_heuristic_sum(forward, backward, cancel_token, metrics)

        if meeting is None:
            logger.debug("Frontiers from %s and %s never met", origin, dest)
            raise NoPathFoundError(origin, dest)

        logger.debug("Meeting vertex: %s", vertices[meeting].id)
        self._stitch(forward, backward, start, meeting)
        edges, vertex_ids = reconstruct_path(vertices, forward.table, start, target)
        cost = sum(edge.weight for edge in edges)

        logger.info("Bidirectional A* iterations: %d", metrics.iterations)
        logger.info("Bidirectional A* path cost: %s", cost)

        return PathResult(
            origin=origin,
            dest=dest,
            cost=cost,
            path=edges,
            vertices=vertex_ids,
            mode=self.mode,
            inspected_edges=frozenset(forward.inspected),
            inspected_edges_backward=frozenset(backward.inspected),
            settled=forward.table.settled_count() + backward.table.settled_count(),
        )

    def _make_frontier(
        self, name: str, size: int, root: int, goal: int, backward: bool
    ) -> Frontier:
        table = StateTable(size)
        queue = IndexedPriorityQueue(table)
        table.seed(root, self._key(0.0, root, goal))
        queue.insert(root)
        return Frontier(name=name, table=table, queue=queue, goal=goal, backward=backward)

    def _key(self, distance: float, index: int, goal: int) -> float:
        vertices = self.graph.vertices
        return distance + vertices[index].heuristic_distance(vertices[goal])

    def _settle_next(
        self,
        side: Frontier,
        cancel_token: Optional[CancellationToken],
        metrics: PerformanceMetrics,
        on_relax: Optional[Callable[[int], None]] = None,
    ) -> int:
        """Extract one vertex from ``side`` and relax its edges."""
        self._step(cancel_token)
        current = side.queue.extract_min()
        side.table[current].visited = True
        metrics.iterations += 1

        def key_func(distance: float, index: int) -> float:
            return self._key(distance, index, side.goal)

        self._relax_from(
            current,
            side.table,
            side.queue,
            key_func,
            side.inspected,
            backward=side.backward,
            on_relax=on_relax,
        )
        return current

    def _search_distance_sum(
        self,
        forward: Frontier,
        backward: Frontier,
        cancel_token: Optional[CancellationToken],
        metrics: PerformanceMetrics,
    ) -> Optional[int]:
        """Alternate until no queued key can improve the best meeting distance."""
        best: List[Optional[float]] = [None]
        meeting: List[Optional[int]] = [None]

        def consider(index: int) -> None:
            f_dist = forward.table[index].distance
            b_dist = backward.table[index].distance
            if f_dist is None or b_dist is None:
                return
            total = f_dist + b_dist
            if best[0] is None or total < best[0]:
                best[0] = total
                meeting[0] = index

        # Labelled by both sides only when origin and destination coincide
        consider(forward.goal)

        while not forward.queue.empty() and not backward.queue.empty():
            for side, other in ((forward, backward), (backward, forward)):
                if side.queue.empty():
                    break
                if best[0] is not None and side.queue.peek_key() >= best[0]:
                    logger.debug(
                        "%s queue key %s cannot improve meeting distance %s",
                        side.name,
                        side.queue.peek_key(),
                        best[0],
                    )
                    return meeting[0]

                current = self._settle_next(side, cancel_token, metrics, on_relax=consider)
                consider(current)
                if other.table[current].visited:
                    logger.debug(
                        "Frontiers touch at vertex %s", self.graph.vertices[current].id
                    )

        return meeting[0]

    def _search_heuristic_sum(
        self,
        forward: Frontier,
        backward: Frontier,
        cancel_token: Optional[CancellationToken],
        metrics: PerformanceMetrics,
    ) -> Optional[int]:
        """Stop at the first shared vertex, then pick the best key sum among queued vertices."""
        candidate: Optional[int] = None

        while candidate is None and not forward.queue.empty() and not backward.queue.empty():
            for side, other in ((forward, backward), (backward, forward)):
                if side.queue.empty():
                    break
                current = self._settle_next(side, cancel_token, metrics)
                if other.table[current].visited:
                    candidate = current
                    break

        if candidate is None:
            return None

        logger.debug("Candidate meeting vertex: %s", self.graph.vertices[candidate].id)
        best_index = candidate
        best_sum = forward.table[candidate].key + backward.table[candidate].key

        # The first shared vertex need not lie on the cheapest route
        for side in (forward, backward):
            while not side.queue.empty():
                self._step(cancel_token)
                index = side.queue.extract_min()
                f_key = forward.table[index].key
                b_key = backward.table[index].key
                if f_key is None or b_key is None:
                    continue
                if f_key + b_key < best_sum:
                    best_sum = f_key + b_key
                    best_index = index

        return best_index

    def _stitch(self, forward: Frontier, backward: Frontier, start: int, meeting: int) -> None:
        """
        Rewrite forward predecessors along the backward half-path.

        Walks backward predecessor links from the meeting vertex toward the
        destination, pointing each vertex's forward predecessor back at the
        vertex it was reached from.
        """
        on_forward_chain = set()
        current = meeting
        while current != start:
            on_forward_chain.add(current)
            current = forward.table[current].predecessor
            assert current is not None, "Meeting vertex not reachable on forward chain"
        on_forward_chain.add(start)

        current = meeting
        while backward.table[current].predecessor is not None:
            nxt = backward.table[current].predecessor
            edge = backward.table[current].predecessor_edge
            # Zero-length edges can put a vertex on both half-paths
            if nxt not in on_forward_chain:
                state = forward.table[nxt]
                state.predecessor = current
                state.predecessor_edge = edge
                state.distance = forward.table[current].distance + edge.weight
            current = nxt
