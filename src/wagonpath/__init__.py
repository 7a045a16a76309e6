"""
Wagonpath - Shortest Path Engine for Fleet Dispatch Road Graphs

This package computes shortest paths over geographically embedded road graphs
used by a fleet dispatch application. It includes:

- Vertex, edge and position models with Euclidean edge weights
- Reachability pruning of disconnected islands
- One-to-all search from a central depot vertex
- Point-to-point Dijkstra, A* (oriented) and bidirectional A* search
- Floyd-Warshall all-pairs precomputation with path reconstruction
"""

__version__ = "0.1.0"
__author__ = "Wagonpath Team"

# Version compatibility check
import sys

if sys.version_info < (3, 12):
    raise RuntimeError("Wagonpath requires Python 3.12 or higher")

# Import commonly used components for easier access
from .core.graph import RoadGraph
from .core.graph_paths import PathFinding, PathResult, SearchMode
from .core.models import Edge, Position, Vertex

__all__ = [
    "RoadGraph",
    "PathFinding",
    "PathResult",
    "SearchMode",
    "Edge",
    "Position",
    "Vertex",
]
