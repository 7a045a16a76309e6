"""Infrastructure components shared by the search engine."""

from .cache import LRUCache

__all__ = ["LRUCache"]
