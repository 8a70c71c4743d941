"""Plain-text rendering of graph edges."""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dagsort._graph import WeightedGraph


def format_weight(weight: float) -> str:
    """Format a weight without a trailing ``.0`` for whole numbers."""
    return repr(float(weight)).removesuffix(".0")


def format_edge(source: Hashable, target: Hashable, weight: float) -> str:
    """Format a single edge as ``source -- weight --> target``."""
    return f"{source} -- {format_weight(weight)} --> {target}"


def render_edges(graph: WeightedGraph) -> str:
    """Render every edge of the graph, one per line.

    Lines follow the graph's internal iteration order, which is not
    guaranteed to be stable.
    """
    return "\n".join(format_edge(source, target, weight) for source, target, weight in graph.edges())
