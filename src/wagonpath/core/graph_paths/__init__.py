"""Graph path finding functionality."""

import logging
from typing import Any, Dict, Optional, Type, Union

from .algorithms.all_pairs import AllPairsTable
from .algorithms.bidirectional import BidirectionalFinder
from .algorithms.central import CentralSearch
from .algorithms.dijkstra import DijkstraFinder, OrientedSearchFinder
from .base import PathFinder
from .cache import PathCache
from .models import CentralResult, PathResult, PathValidationError, PerformanceMetrics
from .types import MeetingCriterion, SearchMode
from .utils import EPSILON, SENTINEL_INFINITE, CancellationToken

logger = logging.getLogger(__name__)

__all__ = [
    "AllPairsTable",
    "CancellationToken",
    "CentralResult",
    "CentralSearch",
    "EPSILON",
    "MeetingCriterion",
    "PathCache",
    "PathFinder",
    "PathFinding",
    "PathResult",
    "PathValidationError",
    "PerformanceMetrics",
    "SENTINEL_INFINITE",
    "SearchMode",
]


class PathFinding:
    """Static interface for point-to-point searches."""

    _FINDERS: Dict[SearchMode, Type[PathFinder]] = {
        SearchMode.PLAIN: DijkstraFinder,
        SearchMode.ORIENTED: OrientedSearchFinder,
        SearchMode.BIDIRECTIONAL: BidirectionalFinder,
    }

    @classmethod
    def finder_for(cls, mode: Union[SearchMode, str]) -> Type[PathFinder]:
        """Return the finder class implementing ``mode``."""
        return cls._FINDERS[SearchMode.parse(mode)]

    @classmethod
    def shortest_path(
        cls,
        graph: Any,
        mode: Union[SearchMode, str],
        origin: int,
        dest: int,
        cancel_token: Optional[CancellationToken] = None,
        criterion: Optional[MeetingCriterion] = None,
    ) -> PathResult:
        """
        Find the shortest route between two vertex ids.

        Consults the graph's path cache first when caching is enabled.

        Args:
            graph: RoadGraph to search
            mode: SearchMode or its string value
            origin: Id of the origin vertex
            dest: Id of the destination vertex
            cancel_token: Optional cooperative cancellation flag
            criterion: Meeting criterion override for bidirectional search

        Raises:
            ValueError: If the mode is unknown
            UnknownVertexError: If an endpoint is not in the graph
            NoPathFoundError: If the destination is unreachable
            SearchCancelledError: If the token fires mid-search
        """
        mode = SearchMode.parse(mode)
        finder_cls = cls._FINDERS[mode]

        with graph.lock:
            if criterion is None:
                criterion = graph.config.meeting_criterion
            cache: Optional[PathCache] = graph.path_cache if graph.config.use_path_cache else None

            cache_key = PathCache.get_cache_key(mode, origin, dest, criterion)
            if cache is not None:
                cached_result = cache.get(cache_key)
                if cached_result is not None:
                    logger.debug("Path cache hit for %s", cache_key)
                    return cached_result

            if mode is SearchMode.BIDIRECTIONAL:
                finder = BidirectionalFinder(graph, criterion=criterion)
            else:
                finder = finder_cls(graph)
            result = finder.find_path(origin, dest, cancel_token)

            if cache is not None:
                cache.put(cache_key, result)
            return result
