"""
Data models for road graph path finding.

This module provides the result containers returned by the search algorithms:
- PathResult: A point-to-point route with its cost and search instrumentation
- CentralResult: Distances and predecessors from the central depot vertex
- PerformanceMetrics: Timing and exploration counters for one search
- PathValidationError: Exception for inconsistent routes

Searches traverse the road graph in both directions, so an edge in a route
may be walked from its destination to its origin. Routes therefore carry the
explicit vertex sequence alongside the edges.

Example:
    >>> result = graph.shortest_path(SearchMode.PLAIN, 1, 3)
    >>> result.cost
    5.0
    >>> result.vertices
    [1, 3]
"""

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from ..exceptions import NoPathFoundError
from ..models import Edge
from .types import SearchMode


class PathValidationError(Exception):
    """
    Raised when a route fails validation checks.

    This exception indicates issues such as:
    - Vertex and edge sequences of mismatched length
    - An edge that does not join two consecutive vertices
    - A stored cost that differs from the sum of edge weights
    """

    pass


@dataclass
class PathResult:
    """
    Container for point-to-point search results.

    Attributes:
        origin: Id of the first vertex
        dest: Id of the last vertex
        cost: Total weight of the route
        path: Edges in travel order
        vertices: Vertex ids in travel order (one more than edges)
        mode: Strategy that produced the route
        inspected_edges: Ids of edges relaxed by the (forward) search
        inspected_edges_backward: Ids of edges relaxed by the backward search
        settled: Number of vertices extracted from the queue(s)
    """

    origin: int
    dest: int
    cost: float
    path: List[Edge]
    vertices: List[int]
    mode: Optional[SearchMode] = None
    inspected_edges: FrozenSet[int] = field(default_factory=frozenset)
    inspected_edges_backward: FrozenSet[int] = field(default_factory=frozenset)
    settled: int = 0

    def __post_init__(self):
        """Validate initialization parameters."""
        if not isinstance(self.path, list):
            raise TypeError("path must be a list")
        if not all(isinstance(edge, Edge) for edge in self.path):
            raise TypeError("path must contain only Edge objects")
        if not isinstance(self.cost, (int, float)):
            raise TypeError("cost must be a numeric value")
        if len(self.vertices) != len(self.path) + 1:
            raise PathValidationError(
                f"Route with {len(self.path)} edges must visit {len(self.path) + 1} vertices, "
                f"got {len(self.vertices)}"
            )

    def __len__(self) -> int:
        """Return the number of edges in the route."""
        return len(self.path)

    def __getitem__(self, index: int) -> Edge:
        """Get an edge from the route by index."""
        return self.path[index]

    def __iter__(self):
        """Return an iterator over the route edges."""
        return iter(self.path)

    def copy(self) -> "PathResult":
        """Return a result with its own edge and vertex lists."""
        return replace(self, path=list(self.path), vertices=list(self.vertices))

    @property
    def length(self) -> int:
        """Number of edges in the route."""
        return len(self.path)

    @property
    def all_inspected_edges(self) -> FrozenSet[int]:
        """Union of forward and backward inspected edge ids."""
        return self.inspected_edges | self.inspected_edges_backward

    def validate(self, weight_epsilon: float = 1e-9) -> None:
        """
        Validate the route's consistency.

        Checks that every edge joins the two vertices around it (in either
        direction), that the route starts and ends at origin and dest, and
        that the stored cost matches the sum of edge weights.

        Raises:
            PathValidationError: If any validation check fails
        """
        if weight_epsilon <= 0:
            raise ValueError("weight_epsilon must be positive")

        if self.vertices[0] != self.origin or self.vertices[-1] != self.dest:
            raise PathValidationError(
                f"Route runs {self.vertices[0]} -> {self.vertices[-1]}, "
                f"expected {self.origin} -> {self.dest}"
            )

        for i, edge in enumerate(self.path):
            ends = {edge.origin, edge.dest}
            if {self.vertices[i], self.vertices[i + 1]} != ends:
                raise PathValidationError(
                    f"Edge {edge.id} ({edge.origin}->{edge.dest}) does not join "
                    f"{self.vertices[i]} and {self.vertices[i + 1]}"
                )

        calculated = sum(edge.weight for edge in self.path)
        if abs(calculated - self.cost) > weight_epsilon * max(1.0, abs(calculated)):
            raise PathValidationError(
                f"Weight mismatch: calculated {calculated} != stored {self.cost}"
            )


@dataclass(frozen=True)
class CentralResult:
    """
    One-to-all distances from the central depot vertex.

    Entries are keyed by vertex id. The result is bound to the topology
    version it was computed for.

    Attributes:
        central: Id of the anchor vertex
        version: Graph topology version at computation time
        distances: Shortest distance from the central vertex, per reached vertex
        predecessors: Previous vertex id and edge on the shortest route
    """

    central: int
    version: int
    distances: Dict[int, float]
    predecessors: Dict[int, Tuple[int, Edge]]

    def distance_to(self, vertex_id: int) -> float:
        """O(1) distance lookup."""
        try:
            return self.distances[vertex_id]
        except KeyError:
            raise NoPathFoundError(self.central, vertex_id) from None

    def path_to(self, vertex_id: int) -> PathResult:
        """Walk the central predecessors back from ``vertex_id``."""
        if vertex_id not in self.distances:
            raise NoPathFoundError(self.central, vertex_id)

        edges: List[Edge] = []
        vertices = [vertex_id]
        current = vertex_id
        while current != self.central:
            prev, edge = self.predecessors[current]
            edges.append(edge)
            vertices.append(prev)
            current = prev
            assert len(edges) <= len(self.distances), "Predecessor cycle in central result"
        edges.reverse()
        vertices.reverse()
        return PathResult(
            origin=self.central,
            dest=vertex_id,
            cost=self.distances[vertex_id],
            path=edges,
            vertices=vertices,
        )

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self.distances

    def __len__(self) -> int:
        return len(self.distances)


@dataclass
class PerformanceMetrics:
    """
    Container for path finding performance metrics.

    Attributes:
        operation: Name of the path finding operation
        start_time: Operation start timestamp
        end_time: Operation end timestamp (0.0 if not completed)
        iterations: Number of queue extractions
        max_memory_used: Peak resident memory during the operation (bytes)

    Example:
        >>> metrics = PerformanceMetrics(operation="dijkstra", start_time=time())
        >>> # ... perform operation ...
        >>> metrics.end_time = time()
        >>> print(f"Operation took {metrics.duration:.2f}ms")
    """

    operation: str
    start_time: float
    end_time: float = 0.0
    iterations: int = 0
    max_memory_used: Optional[int] = None

    def __post_init__(self):
        """Validate metrics after initialization."""
        if not isinstance(self.operation, str) or not self.operation.strip():
            raise ValueError("operation must be a non-empty string")
        if self.end_time and self.end_time < self.start_time:
            raise ValueError("end_time cannot be before start_time")
        if self.iterations < 0:
            raise ValueError("iterations cannot be negative")

    @property
    def duration(self) -> float:
        """Operation duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000 if self.end_time else 0.0

    def to_dict(self) -> Dict[str, Union[str, float, int, None]]:
        """Convert metrics to dictionary format."""
        return {
            "operation": self.operation,
            "duration_ms": self.duration,
            "iterations": self.iterations,
            "max_memory_used": self.max_memory_used,
        }


__all__ = [
    "CentralResult",
    "PathResult",
    "PathValidationError",
    "PerformanceMetrics",
]
