"""
Tests for vertex models.
"""

import pytest

from wagonpath.core.models import Edge, Position, Vertex, VertexTag


def test_vertex_defaults():
    """Test a freshly created vertex."""
    vertex = Vertex(1, Position(0, 0))

    assert vertex.tag is VertexTag.DEFAULT
    assert vertex.outgoing == []
    assert vertex.incoming == []
    assert vertex.degree == 0


def test_vertex_edge_lists_are_independent():
    """Test that default edge lists are not shared between vertices."""
    a = Vertex(1, Position(0, 0))
    b = Vertex(2, Position(1, 0))
    a.outgoing.append(Edge(1, 1, 2, 1.0))

    assert b.outgoing == []


def test_degree_counts_both_directions():
    vertex = Vertex(1, Position(0, 0))
    vertex.outgoing.append(Edge(1, 1, 2, 1.0))
    vertex.incoming.extend([Edge(2, 3, 1, 1.0), Edge(3, 4, 1, 1.0)])

    assert vertex.degree == 3


def test_heuristic_distance():
    """Test the straight-line estimate between vertices."""
    a = Vertex(1, Position(0, 0))
    b = Vertex(2, Position(6, 8))

    assert a.heuristic_distance(b) == pytest.approx(10.0)


def test_vertex_validation():
    with pytest.raises(TypeError, match="Position"):
        Vertex(1, (0, 0))  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="VertexTag"):
        Vertex(1, Position(0, 0), tag="central")  # type: ignore[arg-type]


def test_vertex_repr():
    vertex = Vertex(5, Position(1.0, 2.0), tag=VertexTag.CENTRAL)
    assert repr(vertex) == "Vertex(id=5, position=(1.0, 2.0), out=0, in=0)"
