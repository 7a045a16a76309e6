"""Shared test fixtures."""

from typing import List, Tuple

import pytest

from wagonpath.core.config import EngineConfig
from wagonpath.core.graph import GraphEvent, RoadGraph


def build_graph(vertices, edges, config=None) -> RoadGraph:
    """Build a graph from ``(id, x, y)`` and ``(id, origin, dest)`` tuples."""
    graph = RoadGraph(config)
    for vertex_id, x, y in vertices:
        graph.add_vertex(vertex_id, x, y)
    for edge_id, origin, dest in edges:
        graph.add_edge(edge_id, origin, dest)
    return graph


@pytest.fixture
def diamond_graph() -> RoadGraph:
    """
    Fixture providing the 4-vertex diamond 1->2, 2->3, 1->3, 3->4.

    Positions (0,0), (3,0), (3,4), (0,4); weights 3, 4, 5, 3.
    """
    return build_graph(
        vertices=[(1, 0, 0), (2, 3, 0), (3, 3, 4), (4, 0, 4)],
        edges=[(10, 1, 2), (11, 2, 3), (12, 1, 3), (13, 3, 4)],
    )


@pytest.fixture
def path_graph() -> RoadGraph:
    """Fixture providing the chain 1 - 2 - 3 - 4 - 5 with unit weights."""
    return build_graph(
        vertices=[(i, i - 1, 0) for i in range(1, 6)],
        edges=[(100 + i, i, i + 1) for i in range(1, 5)],
    )


@pytest.fixture
def island_graph() -> RoadGraph:
    """
    Fixture providing a main component 1..4 and detached islands:

    - vertex 9 with no edges at all
    - vertices 7 -> 8 connected only to each other
    """
    return build_graph(
        vertices=[(1, 0, 0), (2, 1, 0), (3, 1, 1), (4, 0, 1), (7, 10, 10), (8, 11, 10), (9, 5, 5)],
        edges=[(1, 1, 2), (2, 2, 3), (3, 4, 3), (4, 7, 8)],
    )


GRID_SIZE = 5


def _grid_records() -> Tuple[List[Tuple[int, float, float]], List[Tuple[int, int, int]]]:
    vertices = []
    edges = []
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            vertex_id = row * GRID_SIZE + col + 1
            # Irregular spacing so that routes have distinct costs
            x = col * 2.0 + (row % 3) * 0.35
            y = row * 1.5 + (col % 2) * 0.4
            vertices.append((vertex_id, x, y))

    edge_id = 1
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            vertex_id = row * GRID_SIZE + col + 1
            if col + 1 < GRID_SIZE:
                # Alternate directions; searches walk edges both ways
                if row % 2 == 0:
                    edges.append((edge_id, vertex_id, vertex_id + 1))
                else:
                    edges.append((edge_id, vertex_id + 1, vertex_id))
                edge_id += 1
            if row + 1 < GRID_SIZE and (row + col) % 3 != 1:
                edges.append((edge_id, vertex_id, vertex_id + GRID_SIZE))
                edge_id += 1
            if row + 1 < GRID_SIZE and col + 1 < GRID_SIZE and (row * col) % 4 == 1:
                edges.append((edge_id, vertex_id + GRID_SIZE + 1, vertex_id))
                edge_id += 1
    return vertices, edges


@pytest.fixture
def grid_records():
    """Fixture providing vertex and edge tuples of an irregular 5x5 grid."""
    return _grid_records()


@pytest.fixture
def grid_graph(grid_records) -> RoadGraph:
    """Fixture providing an irregular 5x5 grid with a few diagonals."""
    vertices, edges = grid_records
    return build_graph(vertices, edges)


@pytest.fixture
def uncached_config() -> EngineConfig:
    """Fixture providing a configuration with the path cache disabled."""
    return EngineConfig(use_path_cache=False)


class RecordingListener:
    """Listener collecting every graph event it receives."""

    def __init__(self):
        self.events: List[Tuple[GraphEvent, dict]] = []

    def on_state_change(self, change_type: GraphEvent, details: dict) -> None:
        self.events.append((change_type, details))

    def kinds(self) -> List[GraphEvent]:
        return [kind for kind, _ in self.events]


@pytest.fixture
def recording_listener() -> RecordingListener:
    """Fixture providing a listener that records graph events."""
    return RecordingListener()


@pytest.fixture
def graph_builder():
    """Fixture providing the tuple-based graph builder."""
    return build_graph
