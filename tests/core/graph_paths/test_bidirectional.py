"""
Tests for bidirectional A* search.
"""

import pytest

from wagonpath.core.config import EngineConfig
from wagonpath.core.exceptions import NoPathFoundError, SearchCancelledError, UnknownVertexError
from wagonpath.core.graph_paths.algorithms.bidirectional import BidirectionalFinder
from wagonpath.core.graph_paths.algorithms.dijkstra import DijkstraFinder
from wagonpath.core.graph_paths.types import MeetingCriterion, SearchMode
from wagonpath.core.graph_paths.utils import CancellationToken

CRITERIA = [MeetingCriterion.DISTANCE_SUM, MeetingCriterion.HEURISTIC_SUM]


def test_path_graph_settles_fewer_vertices(path_graph):
    """Test that 1 -> 5 costs 4 and both frontiers together settle less than plain Dijkstra."""
    result = BidirectionalFinder(path_graph).find_path(1, 5)
    plain = DijkstraFinder(path_graph).find_path(1, 5)

    assert result.cost == pytest.approx(4.0)
    assert result.vertices == [1, 2, 3, 4, 5]
    assert result.mode is SearchMode.BIDIRECTIONAL
    assert plain.settled == 5
    assert result.settled == 4
    assert result.settled < plain.settled
    result.validate()


@pytest.mark.parametrize("criterion", CRITERIA)
def test_path_graph_route(path_graph, criterion):
    result = BidirectionalFinder(path_graph, criterion=criterion).find_path(1, 5)

    assert result.cost == pytest.approx(4.0)
    assert [edge.id for edge in result.path] == [101, 102, 103, 104]


def test_frontiers_record_separate_inspected_edges(path_graph):
    result = BidirectionalFinder(path_graph).find_path(1, 5)

    assert result.inspected_edges == frozenset({101, 102})
    assert result.inspected_edges_backward == frozenset({103, 104})
    assert result.all_inspected_edges == frozenset({101, 102, 103, 104})


@pytest.mark.parametrize("criterion", CRITERIA)
def test_diamond(diamond_graph, criterion):
    result = BidirectionalFinder(diamond_graph, criterion=criterion).find_path(1, 3)

    assert result.cost == pytest.approx(5.0)
    assert result.vertices == [1, 3]
    result.validate()


@pytest.mark.parametrize("criterion", CRITERIA)
def test_origin_equals_destination(diamond_graph, criterion):
    result = BidirectionalFinder(diamond_graph, criterion=criterion).find_path(4, 4)

    assert result.cost == 0.0
    assert result.vertices == [4]
    assert result.path == []


@pytest.mark.parametrize("criterion", CRITERIA)
def test_adjacent_endpoints(diamond_graph, criterion):
    result = BidirectionalFinder(diamond_graph, criterion=criterion).find_path(3, 4)

    assert result.cost == pytest.approx(3.0)
    assert result.vertices == [3, 4]


@pytest.mark.parametrize("criterion", CRITERIA)
def test_unreachable(island_graph, criterion):
    with pytest.raises(NoPathFoundError):
        BidirectionalFinder(island_graph, criterion=criterion).find_path(1, 8)


def test_unknown_endpoint(diamond_graph):
    with pytest.raises(UnknownVertexError, match="Destination vertex '77' not found"):
        BidirectionalFinder(diamond_graph).find_path(1, 77)


def test_distance_sum_is_optimal_on_grid(grid_graph):
    finder = BidirectionalFinder(grid_graph, criterion=MeetingCriterion.DISTANCE_SUM)
    plain = DijkstraFinder(grid_graph)
    ids = [v.id for v in grid_graph.get_vertices()]

    for origin in ids[::3]:
        for dest in ids[::4]:
            expected = plain.find_path(origin, dest).cost
            result = finder.find_path(origin, dest)
            assert result.cost == pytest.approx(expected), (origin, dest)
            result.validate()


def test_heuristic_sum_returns_valid_route(grid_graph):
    """Test that the heuristic-sum criterion returns a connected route no cheaper than optimal."""
    finder = BidirectionalFinder(grid_graph, criterion=MeetingCriterion.HEURISTIC_SUM)
    plain = DijkstraFinder(grid_graph)

    for origin, dest in [(1, 25), (5, 21), (3, 18), (12, 14)]:
        result = finder.find_path(origin, dest)
        result.validate()
        assert result.vertices[0] == origin and result.vertices[-1] == dest
        assert result.cost >= plain.find_path(origin, dest).cost - 1e-9


def test_criterion_defaults_to_graph_config(graph_builder):
    graph = graph_builder(
        vertices=[(1, 0, 0), (2, 1, 0)],
        edges=[(1, 1, 2)],
        config=EngineConfig(meeting_criterion=MeetingCriterion.HEURISTIC_SUM),
    )
    assert BidirectionalFinder(graph).criterion is MeetingCriterion.HEURISTIC_SUM
    assert (
        BidirectionalFinder(graph, criterion=MeetingCriterion.DISTANCE_SUM).criterion
        is MeetingCriterion.DISTANCE_SUM
    )


def test_cancelled(grid_graph):
    token = CancellationToken()
    token.cancel()
    with pytest.raises(SearchCancelledError):
        BidirectionalFinder(grid_graph).find_path(1, 25, cancel_token=token)


def test_zero_length_edges_are_not_revisited(graph_builder):
    """Test stitching when coincident vertices sit on both half-paths."""
    graph = graph_builder(
        vertices=[(1, 0, 0), (2, 1, 0), (3, 1, 0), (4, 1, 0), (5, 2, 0)],
        edges=[(1, 1, 2), (2, 2, 3), (3, 3, 4), (4, 4, 5)],
    )
    result = BidirectionalFinder(graph).find_path(1, 5)

    assert result.cost == pytest.approx(2.0)
    assert result.vertices[0] == 1 and result.vertices[-1] == 5
    assert len(set(result.vertices)) == len(result.vertices)
    result.validate()
