"""Whole-graph operations: loading and reachability pruning."""

from .components import ReachabilityPruner
from .loading import EDGE_SCHEMA, VERTEX_SCHEMA, GraphLoader

__all__ = ["EDGE_SCHEMA", "GraphLoader", "ReachabilityPruner", "VERTEX_SCHEMA"]
