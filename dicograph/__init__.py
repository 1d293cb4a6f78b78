"""Reduce word-dependency graphs to their essential words."""

from dicograph.errors import EmptyGraphError, GraphError
from dicograph.graph import Graph

__all__ = ["EmptyGraphError", "Graph", "GraphError"]
