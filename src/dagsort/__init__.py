"""Directed weighted graphs and depth-first topological sorting."""

__all__ = [
    "Color",
    "CycleDetectedError",
    "EdgeNotFoundError",
    "GraphDefinitionError",
    "GraphError",
    "GraphInvariantError",
    "GraphReader",
    "SortResult",
    "VertexNotFoundError",
    "WeightedGraph",
    "build_graph",
    "export_result",
    "load_graph",
    "load_graphs",
    "parse_graph_definitions",
    "render_edges",
    "topological_sort",
]

from ._errors import (
    CycleDetectedError,
    EdgeNotFoundError,
    GraphDefinitionError,
    GraphError,
    GraphInvariantError,
    VertexNotFoundError,
)
from ._graph import Color, GraphReader, SortResult, WeightedGraph, topological_sort
from ._io import build_graph, export_result, load_graph, load_graphs, parse_graph_definitions
from ._render import render_edges
