"""
Vertex model for the road graph.

Vertices own their outgoing edges and index their incoming edges. Search
bookkeeping (distances, predecessors, heap positions) is not stored here;
every search allocates its own state tables keyed by the vertex's dense
index.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from .edge import Edge
from .position import Position


class VertexTag(Enum):
    """Role of a vertex in the dispatch application."""

    CENTRAL = auto()
    INTEREST_POINT = auto()
    DEFAULT = auto()


@dataclass(eq=False)
class Vertex:
    """
    Road graph vertex.

    Attributes:
        id (int): Vertex identifier from the ingested dataset
        position (Position): Planar coordinates
        tag (VertexTag): Dispatch role of the vertex
        outgoing (List[Edge]): Edges whose origin is this vertex
        incoming (List[Edge]): Edges whose destination is this vertex
        index (int): Dense position in the graph arena, reassigned on pruning
    """

    id: int
    position: Position
    tag: VertexTag = VertexTag.DEFAULT
    outgoing: List[Edge] = field(default_factory=list)
    incoming: List[Edge] = field(default_factory=list)
    index: int = -1

    def __post_init__(self):
        """Validate vertex after initialization."""
        if not isinstance(self.position, Position):
            raise TypeError("position must be a Position instance")
        if not isinstance(self.tag, VertexTag):
            raise TypeError("tag must be a VertexTag enum")

    def __repr__(self) -> str:
        return (
            f"Vertex(id={self.id!r}, position=({self.position.x}, {self.position.y}), "
            f"out={len(self.outgoing)}, in={len(self.incoming)})"
        )

    def heuristic_distance(self, other: "Vertex") -> float:
        """Admissible straight-line estimate of the road distance to ``other``."""
        return self.position.euclidean_distance(other.position)

    @property
    def degree(self) -> int:
        """Number of incident edges in either direction."""
        return len(self.outgoing) + len(self.incoming)
