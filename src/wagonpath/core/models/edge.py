"""
Edge model for the road graph.

An edge is a directed road segment between two vertices. Its weight is the
Euclidean distance between the endpoint positions, fixed when the edge is
created.
"""

import math
from dataclasses import dataclass

from .position import Position


@dataclass(frozen=True)
class Edge:
    """
    Directed, weighted arc between two vertices.

    The same Edge object is referenced from the outgoing list of its origin
    vertex and the incoming list of its destination vertex.

    Attributes:
        id (int): Stable edge identifier
        origin (int): Id of the vertex the edge leaves
        dest (int): Id of the vertex the edge enters
        weight (float): Non-negative traversal cost
    """

    id: int
    origin: int
    dest: int
    weight: float

    def __post_init__(self):
        """Validate edge after initialization."""
        if isinstance(self.weight, bool) or not isinstance(self.weight, (int, float)):
            raise TypeError("weight must be a numeric value")
        if math.isnan(self.weight) or math.isinf(self.weight):
            raise ValueError("Edge weight must be finite number")
        if self.weight < 0:
            raise ValueError("Edge weight must be non-negative")

    @classmethod
    def between(
        cls, edge_id: int, origin: int, dest: int, origin_pos: Position, dest_pos: Position
    ) -> "Edge":
        """Create an edge weighted by the distance between two positions."""
        return cls(edge_id, origin, dest, origin_pos.euclidean_distance(dest_pos))

    def other_end(self, vertex_id: int) -> int:
        """Return the endpoint opposite to ``vertex_id``."""
        if vertex_id == self.origin:
            return self.dest
        if vertex_id == self.dest:
            return self.origin
        raise ValueError(f"Vertex {vertex_id} is not an endpoint of edge {self.id}")
