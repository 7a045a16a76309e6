"""Reachability analysis and pruning of disconnected islands."""

import logging
from typing import Any, List, Set, Tuple

from ..exceptions import UnknownVertexError
from ..models import Vertex

logger = logging.getLogger(__name__)


class ReachabilityPruner:
    """
    Removes every vertex that cannot be reached from an anchor.

    Reachability ignores edge direction: a vertex survives if some walk over
    outgoing and incoming edges connects it to the anchor.
    """

    def __init__(self, graph: Any):
        """Initialize pruner with the graph it mutates."""
        self.graph = graph

    def reachable_indices(self, anchor: int) -> Set[int]:
        """Dense indices connected to ``anchor`` by an undirected walk."""
        with self.graph.lock:
            if not self.graph.has_vertex(anchor):
                raise UnknownVertexError(anchor, f"Anchor vertex '{anchor}' not found")

            start = self.graph.index_of(anchor)
            seen = {start}
            stack = [start]
            while stack:
                current = stack.pop()
                for _, neighbour in self.graph.incident(current):
                    if neighbour not in seen:
                        seen.add(neighbour)
                        stack.append(neighbour)
            return seen

    def prune(self, anchor: int) -> Tuple[int, int]:
        """
        Delete vertices unreachable from ``anchor``.

        Edges touching a deleted vertex are removed from the outgoing and
        incoming lists of the surviving vertices, and the graph is reindexed.

        Returns:
            Vertex counts before and after pruning

        Raises:
            UnknownVertexError: If the anchor is not in the graph
        """
        with self.graph.lock:
            keep = self.reachable_indices(anchor)
            vertices = self.graph.vertices
            before = len(vertices)

            if len(keep) == before:
                logger.info("Vertices before preprocessing: %d", before)
                logger.info("Vertices after preprocessing: %d", before)
                return before, before

            survivors: List[Vertex] = [v for i, v in enumerate(vertices) if i in keep]
            kept_ids = {v.id for v in survivors}
            for vertex in survivors:
                # No-op on a consistent arena
                vertex.outgoing = [e for e in vertex.outgoing if e.dest in kept_ids]
                vertex.incoming = [e for e in vertex.incoming if e.origin in kept_ids]

            removed = before - len(survivors)
            logger.debug("Removing %d unreachable vertices", removed)
            self.graph._install_arena(survivors)

            after = len(survivors)
            logger.info("Vertices before preprocessing: %d", before)
            logger.info("Vertices after preprocessing: %d", after)
            return before, after
