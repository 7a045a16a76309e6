"""Planar coordinates of road graph vertices."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """
    Immutable 2D coordinate.

    Attributes:
        x (float): Horizontal coordinate
        y (float): Vertical coordinate
    """

    x: float
    y: float

    def __post_init__(self):
        """Validate coordinates after initialization."""
        for name in ("x", "y"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{name} must be a numeric value")
            if math.isnan(value) or math.isinf(value):
                raise ValueError(f"{name} must be a finite number")

    def euclidean_distance(self, other: "Position") -> float:
        """Straight-line distance to another position."""
        return math.hypot(other.x - self.x, other.y - self.y)
