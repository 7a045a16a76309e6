"""
Core domain models package for the road graph.

This package provides the fundamental data structures that represent
positions, vertices and edges of the road network.
"""

from .edge import Edge
from .position import Position
from .vertex import Vertex, VertexTag

__all__ = [
    "Edge",
    "Position",
    "Vertex",
    "VertexTag",
]
