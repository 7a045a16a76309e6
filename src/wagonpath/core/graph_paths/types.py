"""Type definitions for road graph path finding."""

from enum import Enum
from typing import Union


class SearchMode(Enum):
    """Enumeration of point-to-point search strategies."""

    PLAIN = "plain"  # Dijkstra with early exit at the destination
    ORIENTED = "oriented"  # A* with Euclidean heuristic
    BIDIRECTIONAL = "bidirectional"  # Bidirectional A*

    @classmethod
    def parse(cls, mode: Union["SearchMode", str]) -> "SearchMode":
        """Accept a SearchMode or its string value."""
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown search mode '{mode}', expected one of: {valid}") from None


class MeetingCriterion(Enum):
    """
    How bidirectional search selects the vertex joining both half-paths.

    DISTANCE_SUM minimises the sum of settled forward and backward distances
    and keeps searching until no queued key can improve on it, which makes the
    result optimal. HEURISTIC_SUM stops at the first vertex settled by both
    frontiers and then picks the vertex minimising the sum of both priority
    keys among the remaining queued vertices; it explores less but is not
    guaranteed to return the cheapest path.
    """

    DISTANCE_SUM = "distance_sum"
    HEURISTIC_SUM = "heuristic_sum"
