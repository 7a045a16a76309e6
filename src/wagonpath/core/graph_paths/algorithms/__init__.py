"""Path finding algorithm implementations."""

from .all_pairs import AllPairsTable
from .bidirectional import BidirectionalFinder
from .central import CentralSearch
from .dijkstra import DijkstraFinder, OrientedSearchFinder

__all__ = [
    "AllPairsTable",
    "BidirectionalFinder",
    "CentralSearch",
    "DijkstraFinder",
    "OrientedSearchFinder",
]
