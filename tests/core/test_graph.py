"""
Tests for the road graph container.
"""

import threading

import pytest

from wagonpath.core.config import EngineConfig
from wagonpath.core.exceptions import (
    DuplicateEdgeError,
    DuplicateVertexError,
    UnknownVertexError,
)
from wagonpath.core.graph import GraphEvent, RoadGraph
from wagonpath.core.models import VertexTag


def test_empty_graph():
    graph = RoadGraph()

    assert graph.vertex_count == 0
    assert graph.edge_count == 0
    assert graph.version == 0
    assert graph.get_vertices() == []
    assert graph.get_edges() == []
    assert isinstance(graph.config, EngineConfig)


def test_add_vertex_assigns_dense_indices():
    graph = RoadGraph()
    for vertex_id in (40, 10, 30):
        graph.add_vertex(vertex_id, 0, 0)

    assert [v.index for v in graph.vertices] == [0, 1, 2]
    assert graph.index_of(10) == 1
    assert graph.get_vertex(30).index == 2


def test_add_duplicate_vertex():
    graph = RoadGraph()
    graph.add_vertex(1, 0, 0)
    with pytest.raises(DuplicateVertexError, match="already exists"):
        graph.add_vertex(1, 5, 5)
    assert graph.vertex_count == 1


def test_add_edge_links_both_endpoints(diamond_graph):
    """Test that one edge object sits in the origin's outgoing and the destination's incoming list."""
    origin = diamond_graph.get_vertex(1)
    dest = diamond_graph.get_vertex(3)
    diagonal = next(e for e in origin.outgoing if e.dest == 3)

    assert diagonal.weight == pytest.approx(5.0)
    assert any(e is diagonal for e in dest.incoming)


def test_edge_weights_are_euclidean(diamond_graph):
    weights = {edge.id: edge.weight for edge in diamond_graph.get_edges()}
    assert weights == pytest.approx({10: 3.0, 11: 4.0, 12: 5.0, 13: 3.0})


def test_add_edge_unknown_endpoint():
    graph = RoadGraph()
    graph.add_vertex(1, 0, 0)
    with pytest.raises(UnknownVertexError) as exc_info:
        graph.add_edge(1, 1, 2)
    assert exc_info.value.vertex_id == 2
    assert graph.edge_count == 0


def test_add_duplicate_edge(diamond_graph):
    with pytest.raises(DuplicateEdgeError, match="Edge '10'"):
        diamond_graph.add_edge(10, 2, 4)


def test_lookup_unknown_vertex(diamond_graph):
    assert not diamond_graph.has_vertex(99)
    assert 99 not in diamond_graph
    with pytest.raises(UnknownVertexError):
        diamond_graph.get_vertex(99)
    with pytest.raises(UnknownVertexError):
        diamond_graph.index_of(99)


def test_counts(diamond_graph):
    assert diamond_graph.vertex_count == 4
    assert len(diamond_graph) == 4
    assert diamond_graph.edge_count == 4
    assert len(diamond_graph.get_edges()) == 4


def test_incident_order(diamond_graph):
    """Test that forward walks take outgoing edges first, backward walks incoming first."""
    index = diamond_graph.index_of(3)
    vertices = diamond_graph.vertices

    forward = [(e.id, vertices[n].id) for e, n in diamond_graph.incident(index)]
    backward = [(e.id, vertices[n].id) for e, n in diamond_graph.incident(index, backward=True)]

    assert forward == [(13, 4), (11, 2), (12, 1)]
    assert backward == [(11, 2), (12, 1), (13, 4)]


def test_version_bumps_on_topology_change():
    graph = RoadGraph()
    graph.add_vertex(1, 0, 0)
    graph.add_vertex(2, 1, 0)
    before = graph.version
    graph.add_edge(1, 1, 2)

    assert graph.version == before + 1


def test_topology_change_clears_path_cache(diamond_graph):
    diamond_graph.shortest_path("plain", 1, 3)
    assert len(diamond_graph.path_cache) == 1

    diamond_graph.add_vertex(5, 9, 9)
    assert len(diamond_graph.path_cache) == 0


def test_state_listener_events(recording_listener):
    graph = RoadGraph()
    graph.add_state_listener(recording_listener)
    graph.add_vertex(1, 0, 0)
    graph.add_vertex(2, 0, 1)
    graph.add_edge(5, 1, 2)

    assert recording_listener.kinds() == [
        GraphEvent.VERTEX_ADDED,
        GraphEvent.VERTEX_ADDED,
        GraphEvent.EDGE_ADDED,
    ]
    assert recording_listener.events[-1][1] == {"edge_id": 5, "origin": 1, "dest": 2}

    graph.remove_state_listener(recording_listener)
    graph.add_vertex(3, 1, 1)
    assert len(recording_listener.events) == 3


def test_mark_point_of_interest(diamond_graph):
    vertex = diamond_graph.mark_point_of_interest(4)

    assert vertex.tag is VertexTag.INTEREST_POINT
    assert diamond_graph.points_of_interest() == [4]


def test_mark_point_of_interest_unknown(diamond_graph):
    with pytest.raises(UnknownVertexError):
        diamond_graph.mark_point_of_interest(42)


def test_central_cannot_become_point_of_interest(diamond_graph):
    diamond_graph.set_central(1)
    with pytest.raises(ValueError, match="central"):
        diamond_graph.mark_point_of_interest(1)


def test_add_central_vertex_sets_central():
    graph = RoadGraph()
    graph.add_vertex(1, 0, 0, tag=VertexTag.CENTRAL)
    graph.add_vertex(2, 1, 0, tag=VertexTag.CENTRAL)

    assert graph.central == 2
    assert graph.get_vertex(1).tag is VertexTag.DEFAULT


def test_stats(diamond_graph):
    stats = diamond_graph.get_stats()
    assert (stats.vertex_count, stats.edge_count) == (4, 4)
    assert not stats.central_current
    assert not stats.all_pairs_current

    diamond_graph.set_central(1)
    diamond_graph.compute_all_pairs()
    stats = diamond_graph.get_stats()
    assert stats.central == 1
    assert stats.central_current
    assert stats.all_pairs_current


def test_concurrent_searches_share_graph(grid_graph):
    """Test that parallel searches on one graph agree with a sequential run."""
    graph = grid_graph
    graph.path_cache.clear()
    expected = graph.shortest_path("plain", 1, 25).cost
    results = []
    errors = []

    def worker(mode):
        try:
            for _ in range(10):
                results.append(graph.shortest_path(mode, 1, 25).cost)
                graph.path_cache.clear()
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(m,)) for m in ("plain", "oriented", "bidirectional")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(results) == 30
    assert all(cost == pytest.approx(expected) for cost in results)


def test_repr(diamond_graph):
    assert repr(diamond_graph).startswith("RoadGraph(vertices=4, edges=4")
