"""Core road graph model, search engine and error hierarchy."""

from .config import EngineConfig
from .exceptions import (
    DuplicateEdgeError,
    DuplicateResourceError,
    DuplicateVertexError,
    EmptyQueueError,
    GraphOperationError,
    NoPathFoundError,
    ResourceNotFoundError,
    SearchCancelledError,
    StaleMatrixError,
    StalePrecomputationError,
    UnknownVertexError,
    ValidationError,
)
from .graph import GraphEvent, GraphStateListener, GraphStats, RoadGraph
from .graph_operations import GraphLoader, ReachabilityPruner
from .models import Edge, Position, Vertex, VertexTag

__all__ = [
    "DuplicateEdgeError",
    "DuplicateResourceError",
    "DuplicateVertexError",
    "Edge",
    "EmptyQueueError",
    "EngineConfig",
    "GraphEvent",
    "GraphLoader",
    "GraphOperationError",
    "GraphStateListener",
    "GraphStats",
    "NoPathFoundError",
    "Position",
    "ReachabilityPruner",
    "ResourceNotFoundError",
    "RoadGraph",
    "SearchCancelledError",
    "StaleMatrixError",
    "StalePrecomputationError",
    "UnknownVertexError",
    "ValidationError",
    "Vertex",
    "VertexTag",
]
