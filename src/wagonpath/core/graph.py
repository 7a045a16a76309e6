"""
Road graph with a dense vertex arena.

Vertices live in a list and are addressed by their dense index (their
position in the list); an ``id -> index`` table translates the ids used by
callers. Edges are directed and stored twice by reference: in the outgoing
list of their origin and the incoming list of their destination.

Every search allocates its own state tables, so the graph itself holds no
per-search state. Topology changes (adding vertices or edges, pruning) bump a
version counter that precomputations are bound to, and clear the path cache.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from threading import RLock
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, Set, Tuple, Union

from .config import EngineConfig
from .exceptions import (
    DuplicateEdgeError,
    DuplicateVertexError,
    StaleMatrixError,
    StalePrecomputationError,
    UnknownVertexError,
)
from .graph_operations.components import ReachabilityPruner
from .graph_paths import (
    AllPairsTable,
    CancellationToken,
    CentralResult,
    CentralSearch,
    MeetingCriterion,
    PathCache,
    PathFinding,
    PathResult,
    SearchMode,
)
from .models import Edge, Position, Vertex, VertexTag

logger = logging.getLogger(__name__)


class GraphEvent(Enum):
    """Events that can occur in the graph."""

    VERTEX_ADDED = auto()
    EDGE_ADDED = auto()
    GRAPH_PRUNED = auto()
    CENTRAL_CHANGED = auto()


class GraphStateListener(Protocol):
    """Protocol for objects that listen to graph state changes."""

    def on_state_change(self, change_type: GraphEvent, details: dict) -> None:
        """Called when the graph state changes."""


@dataclass
class GraphStats:
    """Snapshot of graph size and precomputation status."""

    vertex_count: int
    edge_count: int
    version: int
    central: Optional[int]
    central_current: bool
    all_pairs_current: bool


class RoadGraph:
    """
    Geographically embedded road graph and entry point for searches.

    Attributes:
        config (EngineConfig): Engine tunables
        path_cache (PathCache): Cached point-to-point results for this graph
        lock (RLock): Guards topology and precomputations; searches hold it
            while they read the topology
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """Create an empty graph."""
        self.config = config or EngineConfig()
        self.lock = RLock()
        self.path_cache = PathCache(self.config.path_cache_size)
        self._vertices: List[Vertex] = []
        self._index: Dict[int, int] = {}
        self._edge_ids: Set[int] = set()
        self._version = 0
        self._central: Optional[int] = None
        self._central_result: Optional[CentralResult] = None
        self._all_pairs: Optional[AllPairsTable] = None
        self._listeners: List[GraphStateListener] = []

    @classmethod
    def from_records(
        cls,
        vertices: Iterable[Any],
        edges: Iterable[Any],
        config: Optional[EngineConfig] = None,
    ) -> "RoadGraph":
        """Build a graph from vertex and edge records (see GraphLoader)."""
        from .graph_operations.loading import GraphLoader

        return GraphLoader(config).load(vertices, edges)

    # Listeners

    def add_state_listener(self, listener: GraphStateListener) -> None:
        """Add a listener for state changes."""
        self._listeners.append(listener)

    def remove_state_listener(self, listener: GraphStateListener) -> None:
        """Remove a state change listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_state_change(self, change_type: GraphEvent, details: dict) -> None:
        for listener in self._listeners:
            listener.on_state_change(change_type, details)

    def _topology_changed(self) -> None:
        """Invalidate everything bound to the previous topology."""
        self._version += 1
        self.path_cache.clear()
        logger.debug("Topology version is now %d", self._version)

    # Construction

    def add_vertex(
        self, vertex_id: int, x: float, y: float, tag: VertexTag = VertexTag.DEFAULT
    ) -> Vertex:
        """
        Add a vertex at ``(x, y)``.

        Raises:
            DuplicateVertexError: If the id is already present
            TypeError, ValueError: If the coordinates are not finite numbers
        """
        with self.lock:
            if vertex_id in self._index:
                raise DuplicateVertexError(f"Vertex '{vertex_id}' already exists")
            vertex = Vertex(vertex_id, Position(x, y), tag=tag, index=len(self._vertices))
            self._vertices.append(vertex)
            self._index[vertex_id] = vertex.index
            if tag is VertexTag.CENTRAL:
                self._retag_central(vertex_id)
            self._topology_changed()
        self._notify_state_change(GraphEvent.VERTEX_ADDED, {"vertex_id": vertex_id})
        return vertex

    def add_edge(self, edge_id: int, origin: int, dest: int) -> Edge:
        """
        Add a directed edge weighted by the distance between its endpoints.

        Raises:
            UnknownVertexError: If either endpoint is missing
            DuplicateEdgeError: If the edge id is already present
        """
        with self.lock:
            if edge_id in self._edge_ids:
                raise DuplicateEdgeError(f"Edge '{edge_id}' already exists")
            source = self.get_vertex(origin)
            target = self.get_vertex(dest)
            edge = Edge.between(edge_id, origin, dest, source.position, target.position)
            source.outgoing.append(edge)
            target.incoming.append(edge)
            self._edge_ids.add(edge_id)
            self._topology_changed()
        self._notify_state_change(
            GraphEvent.EDGE_ADDED, {"edge_id": edge_id, "origin": origin, "dest": dest}
        )
        return edge

    def _install_arena(self, vertices: List[Vertex]) -> None:
        """Replace the arena with ``vertices`` and reassign dense indices."""
        with self.lock:
            for index, vertex in enumerate(vertices):
                vertex.index = index
            self._vertices = vertices
            self._index = {vertex.id: vertex.index for vertex in vertices}
            self._edge_ids = {edge.id for vertex in vertices for edge in vertex.outgoing}
            if self._central is not None and self._central not in self._index:
                logger.warning("Central vertex %s was removed", self._central)
                self._central = None
            self._topology_changed()

    # Lookup

    @property
    def version(self) -> int:
        """Topology version; changes on every insertion or pruning."""
        return self._version

    @property
    def vertices(self) -> List[Vertex]:
        """Vertex arena in dense index order. Callers must not mutate it."""
        return self._vertices

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        return len(self._edge_ids)

    @property
    def central(self) -> Optional[int]:
        """Id of the vertex tagged CENTRAL, if any."""
        return self._central

    def has_vertex(self, vertex_id: int) -> bool:
        return vertex_id in self._index

    def index_of(self, vertex_id: int) -> int:
        """Dense index of a vertex id."""
        try:
            return self._index[vertex_id]
        except KeyError:
            raise UnknownVertexError(vertex_id) from None

    def get_vertex(self, vertex_id: int) -> Vertex:
        """Get a vertex by id."""
        return self._vertices[self.index_of(vertex_id)]

    def get_vertices(self) -> List[Vertex]:
        """Copy of all vertices in dense index order."""
        with self.lock:
            return list(self._vertices)

    def get_edges(self) -> List[Edge]:
        """All edges, each listed once."""
        with self.lock:
            return [edge for vertex in self._vertices for edge in vertex.outgoing]

    def incident(self, index: int, backward: bool = False) -> Iterator[Tuple[Edge, int]]:
        """
        Yield ``(edge, neighbour_index)`` for every edge touching a vertex.

        Outgoing edges come first, then incoming; ``backward`` reverses that
        order.
        """
        vertex = self._vertices[index]
        outgoing = ((edge, self._index[edge.dest]) for edge in vertex.outgoing)
        incoming = ((edge, self._index[edge.origin]) for edge in vertex.incoming)
        if backward:
            yield from incoming
            yield from outgoing
        else:
            yield from outgoing
            yield from incoming

    def get_stats(self) -> GraphStats:
        with self.lock:
            return GraphStats(
                vertex_count=self.vertex_count,
                edge_count=self.edge_count,
                version=self._version,
                central=self._central,
                central_current=self._central_result is not None
                and self._central_result.version == self._version,
                all_pairs_current=self._all_pairs is not None
                and self._all_pairs.version == self._version,
            )

    # Preprocessing

    def preprocess(self, anchor_id: int) -> Tuple[int, int]:
        """
        Remove every vertex not connected to ``anchor_id``.

        Returns:
            Vertex counts before and after

        Raises:
            UnknownVertexError: If the anchor is not in the graph
        """
        with self.lock:
            before, after = ReachabilityPruner(self).prune(anchor_id)
        if after != before:
            self._notify_state_change(
                GraphEvent.GRAPH_PRUNED, {"anchor": anchor_id, "before": before, "after": after}
            )
        return before, after

    # Point-to-point search

    def shortest_path(
        self,
        mode: Union[SearchMode, str],
        origin: int,
        dest: int,
        cancel_token: Optional[CancellationToken] = None,
        criterion: Optional[MeetingCriterion] = None,
    ) -> PathResult:
        """
        Find the shortest route between two vertex ids.

        Raises:
            UnknownVertexError: If an endpoint is not in the graph
            NoPathFoundError: If the destination is unreachable
        """
        return PathFinding.shortest_path(self, mode, origin, dest, cancel_token, criterion)

    # Central depot

    def _retag_central(self, vertex_id: int) -> None:
        if self._central is not None and self._central != vertex_id and self.has_vertex(self._central):
            old = self.get_vertex(self._central)
            if old.tag is VertexTag.CENTRAL:
                old.tag = VertexTag.DEFAULT
        self.get_vertex(vertex_id).tag = VertexTag.CENTRAL
        self._central = vertex_id

    def set_central(
        self, vertex_id: int, cancel_token: Optional[CancellationToken] = None
    ) -> CentralResult:
        """Tag ``vertex_id`` as the depot and run the central search from it."""
        with self.lock:
            self.index_of(vertex_id)
            previous = self._central
            self._retag_central(vertex_id)
            result = self.run_central_search(vertex_id, cancel_token)
        if previous != vertex_id:
            self._notify_state_change(
                GraphEvent.CENTRAL_CHANGED, {"previous": previous, "central": vertex_id}
            )
        return result

    def run_central_search(
        self, anchor_id: int, cancel_token: Optional[CancellationToken] = None
    ) -> CentralResult:
        """
        Compute distances from ``anchor_id`` to every reachable vertex.

        The result replaces any earlier central search.
        """
        with self.lock:
            result = CentralSearch(self).run(anchor_id, cancel_token)
            self._central_result = result
            return result

    def _current_central(self) -> CentralResult:
        result = self._central_result
        if result is None:
            raise StalePrecomputationError("No central search has been run")
        if result.version != self._version:
            raise StalePrecomputationError(
                f"Central search was run for topology version {result.version}, "
                f"graph is at version {self._version}"
            )
        return result

    def distance_from_central(self, vertex_id: int) -> float:
        """
        Distance from the last central search anchor to ``vertex_id``.

        Raises:
            UnknownVertexError: If the vertex is not in the graph
            StalePrecomputationError: If no central search ran on this topology
            NoPathFoundError: If the vertex was not reached
        """
        with self.lock:
            self.index_of(vertex_id)
            return self._current_central().distance_to(vertex_id)

    def path_from_central(self, vertex_id: int) -> PathResult:
        """Route from the last central search anchor to ``vertex_id``."""
        with self.lock:
            self.index_of(vertex_id)
            return self._current_central().path_to(vertex_id)

    def mark_point_of_interest(self, vertex_id: int) -> Vertex:
        """Tag a vertex as a delivery point of interest."""
        with self.lock:
            vertex = self.get_vertex(vertex_id)
            if vertex.tag is VertexTag.CENTRAL:
                raise ValueError(f"Vertex '{vertex_id}' is the central vertex")
            vertex.tag = VertexTag.INTEREST_POINT
            return vertex

    def points_of_interest(self) -> List[int]:
        """Ids of vertices tagged as points of interest."""
        with self.lock:
            return [v.id for v in self._vertices if v.tag is VertexTag.INTEREST_POINT]

    # All-pairs

    def compute_all_pairs(
        self, cancel_token: Optional[CancellationToken] = None
    ) -> AllPairsTable:
        """Run Floyd-Warshall over the current topology."""
        with self.lock:
            self._all_pairs = AllPairsTable.compute(self, cancel_token)
            return self._all_pairs

    def _current_all_pairs(self) -> AllPairsTable:
        table = self._all_pairs
        if table is None:
            raise StaleMatrixError("All-pairs matrices have not been computed")
        table.ensure_current(self._version)
        return table

    def all_pairs_path(self, origin: int, dest: int) -> List[int]:
        """
        Vertex ids on the precomputed shortest route.

        Raises:
            StaleMatrixError: Before compute_all_pairs or after a topology change
            UnknownVertexError: If an endpoint is not in the graph
            NoPathFoundError: If no route exists
        """
        with self.lock:
            return self._current_all_pairs().get_path(origin, dest)

    def all_pairs_distance(self, origin: int, dest: int) -> float:
        """Precomputed shortest cost between two vertex ids."""
        with self.lock:
            return self._current_all_pairs().distance(origin, dest)

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self._index

    def __repr__(self) -> str:
        return f"RoadGraph(vertices={self.vertex_count}, edges={self.edge_count}, version={self._version})"
