"""
All-pairs shortest paths with Floyd-Warshall.

Builds dense distance and next-hop matrices indexed by the graph's dense
vertex indices. O(V^3) time and O(V^2) memory, meant as a one-time
precomputation on small pruned graphs rather than a per-query tool.
"""

import logging
from time import time
from typing import Any, List, Optional

from ...exceptions import NoPathFoundError, StaleMatrixError, UnknownVertexError
from ..utils import SENTINEL_INFINITE, CancellationToken

logger = logging.getLogger(__name__)


class AllPairsTable:
    """
    Floyd-Warshall distance and next-hop matrices.

    Attributes:
        vertex_ids: Vertex id per dense index at computation time
        version: Graph topology version at computation time
        distances: ``distances[i][j]`` is the shortest cost from i to j
        next_hop: ``next_hop[i][j]`` is the index after i on the route to j
    """

    def __init__(
        self,
        vertex_ids: List[int],
        version: int,
        distances: List[List[float]],
        next_hop: List[List[Optional[int]]],
    ):
        self.vertex_ids = vertex_ids
        self.version = version
        self.distances = distances
        self.next_hop = next_hop
        self._index = {vertex_id: i for i, vertex_id in enumerate(vertex_ids)}

    @classmethod
    def compute(
        cls, graph: Any, cancel_token: Optional[CancellationToken] = None
    ) -> "AllPairsTable":
        """
        Run Floyd-Warshall over the current topology of ``graph``.

        Every edge seeds both directions, matching how the point-to-point
        searches traverse the road graph.
        """
        with graph.lock:
            start_time = time()
            vertices = graph.vertices
            size = len(vertices)
            logger.info("Computing all-pairs matrices for %d vertices", size)

            dist = [[SENTINEL_INFINITE] * size for _ in range(size)]
            next_hop: List[List[Optional[int]]] = [[None] * size for _ in range(size)]

            for i in range(size):
                for edge, j in graph.incident(i):
                    if edge.weight < dist[i][j]:
                        dist[i][j] = edge.weight
                        next_hop[i][j] = j

            for i in range(size):
                dist[i][i] = 0.0
                next_hop[i][i] = i

            for k in range(size):
                if cancel_token is not None:
                    cancel_token.check()
                dist_k = dist[k]
                for i in range(size):
                    dist_ik = dist[i][k]
                    if dist_ik >= SENTINEL_INFINITE:
                        continue
                    dist_i = dist[i]
                    next_i = next_hop[i]
                    next_ik = next_i[k]
                    for j in range(size):
                        candidate = dist_ik + dist_k[j]
                        if candidate < dist_i[j]:
                            dist_i[j] = candidate
                            next_i[j] = next_ik

            logger.info(
                "All-pairs matrices computed in %.1fms", (time() - start_time) * 1000
            )
            return cls(
                vertex_ids=[vertex.id for vertex in vertices],
                version=graph.version,
                distances=dist,
                next_hop=next_hop,
            )

    def ensure_current(self, version: int) -> None:
        """Raise StaleMatrixError if the topology changed since computation."""
        if version != self.version:
            raise StaleMatrixError(
                f"All-pairs matrices were computed for topology version {self.version}, "
                f"graph is at version {version}"
            )

    def _lookup(self, vertex_id: int) -> int:
        try:
            return self._index[vertex_id]
        except KeyError:
            raise UnknownVertexError(vertex_id) from None

    def distance(self, origin: int, dest: int) -> float:
        """Shortest cost between two vertex ids."""
        i, j = self._lookup(origin), self._lookup(dest)
        if self.next_hop[i][j] is None:
            raise NoPathFoundError(origin, dest)
        return self.distances[i][j]

    def get_path(self, origin: int, dest: int) -> List[int]:
        """Vertex ids on the shortest route, origin and destination included."""
        i, j = self._lookup(origin), self._lookup(dest)
        if self.next_hop[i][j] is None:
            raise NoPathFoundError(origin, dest)

        route = [self.vertex_ids[i]]
        while i != j:
            i = self.next_hop[i][j]
            route.append(self.vertex_ids[i])
            assert len(route) <= len(self.vertex_ids), "Next-hop cycle detected"
        return route
