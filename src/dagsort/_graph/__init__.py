"""Graph module providing the weighted graph store and topological sort.

This module contains:
- WeightedGraph[T]: A mutable, lock-guarded directed weighted graph
- topological_sort: Depth-first ordering with cycle detection
"""

from ._algorithms import Color, GraphReader, SortResult, topological_sort
from ._weighted_graph import WeightedGraph

__all__ = ["Color", "GraphReader", "SortResult", "WeightedGraph", "topological_sort"]
