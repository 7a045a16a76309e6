"""
Custom exceptions for the road graph search engine.

This module defines the hierarchy of exceptions raised by graph construction,
preprocessing and the path finding algorithms. Lookup failures and missing
paths are recoverable outcomes that callers are expected to handle; queue
exhaustion is an internal invariant violation and signals a bug.
"""

from typing import Any, Optional


class ValidationError(Exception):
    """
    Raised when input records fail validation.

    Examples:
        * Vertex record without coordinates
        * Edge record referencing an unknown vertex
        * Non-numeric coordinates
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class GraphOperationError(Exception):
    """
    Raised when graph operations fail.

    This is the base class for failures of search and precomputation
    operations on the road graph.

    Examples:
        * Destination unreachable from origin
        * Query against a stale precomputation
        * Cancelled search
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class ResourceNotFoundError(Exception):
    """
    Raised when a requested resource is not found.

    Examples:
        * Vertex not found
        * Edge not found
    """


class UnknownVertexError(ResourceNotFoundError):
    """
    Raised when a vertex id is not present in the graph lookup table.

    Examples:
        * Search origin or destination never loaded
        * Vertex removed by reachability pruning
        * Preprocessing anchored at a missing vertex
    """

    def __init__(self, vertex_id: Any, message: Optional[str] = None):
        self.vertex_id = vertex_id
        super().__init__(message or f"Vertex '{vertex_id}' not found")


class DuplicateResourceError(Exception):
    """
    Raised when attempting to create a duplicate resource.

    Examples:
        * Two vertex records with the same id
        * Two edge records with the same id
    """


class DuplicateVertexError(DuplicateResourceError):
    """Raised when a vertex id is already present in the graph."""


class DuplicateEdgeError(DuplicateResourceError):
    """Raised when an edge id is already present in the graph."""


class EmptyQueueError(GraphOperationError):
    """
    Raised when extracting from an empty priority queue.

    Correct callers always check the queue before extracting, so this
    indicates a bug in the search loop rather than a property of the graph.
    """


class NoPathFoundError(GraphOperationError):
    """
    Raised when a search completes without reaching the destination.

    This is a valid outcome on graphs that were not pruned to a single
    component, not a crash.
    """

    def __init__(self, origin: Any, dest: Any, message: Optional[str] = None):
        self.origin = origin
        self.dest = dest
        super().__init__(message or f"No path exists between {origin} and {dest}")


class StalePrecomputationError(GraphOperationError):
    """
    Raised when a precomputed table is queried after it became invalid.

    Precomputations are bound to the topology version of the graph at the
    time they were computed. Any insertion or pruning invalidates them.
    """


class StaleMatrixError(StalePrecomputationError):
    """Raised when all-pairs matrices are queried before computation or after a topology change."""


class SearchCancelledError(GraphOperationError):
    """Raised when a running search observes a cancellation request."""
