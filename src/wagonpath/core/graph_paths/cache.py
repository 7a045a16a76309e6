"""
Caching of point-to-point search results.

Each RoadGraph owns one PathCache. Results are only valid for the topology
they were computed on, so the graph clears its cache on every topology change
instead of relying on expiry.

Example:
    >>> key = PathCache.get_cache_key(SearchMode.PLAIN, 1, 3)
    >>> if (result := cache.get(key)) is not None:
    ...     return result  # Cache hit
    >>> result = finder.find_path(1, 3)
    >>> cache.put(key, result)
"""

from typing import Dict, Hashable, Optional, Tuple

from ...infrastructure.cache import LRUCache
from .models import PathResult
from .types import MeetingCriterion, SearchMode

# Constants
PATH_CACHE_SIZE = 1000  # Default maximum number of cached results

CacheKey = Tuple[str, int, int, Optional[str]]


class PathCache:
    """
    LRU cache of PathResult objects for a single graph.

    Results go in and come out as copies, so a caller editing its route
    never changes what later queries see.
    """

    def __init__(self, max_size: int = PATH_CACHE_SIZE):
        self.cache = LRUCache[PathResult](max_size=max_size)

    @staticmethod
    def get_cache_key(
        mode: SearchMode,
        origin: int,
        dest: int,
        criterion: Optional[MeetingCriterion] = None,
    ) -> CacheKey:
        """
        Generate a cache key for a search.

        The meeting criterion only takes part in the key for bidirectional
        searches, the other modes ignore it.
        """
        if mode is not SearchMode.BIDIRECTIONAL:
            criterion = None
        return (mode.value, origin, dest, criterion.value if criterion else None)

    def get(self, key: Hashable) -> Optional[PathResult]:
        """Get a copy of the cached result."""
        result = self.cache.get(key)
        return result.copy() if result is not None else None

    def put(self, key: Hashable, result: PathResult) -> None:
        """Cache a copy of a search result."""
        self.cache.put(key, result.copy())

    def clear(self) -> None:
        """Drop every cached result."""
        self.cache.clear()

    def get_metrics(self) -> Dict[str, float]:
        """Get cache performance metrics."""
        return self.cache.get_metrics()

    def __len__(self) -> int:
        return len(self.cache)
