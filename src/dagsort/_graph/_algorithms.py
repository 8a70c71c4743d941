"""Depth-first topological sort with three-color cycle detection."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Protocol

from dagsort._errors import CycleDetectedError, GraphInvariantError, VertexNotFoundError

logger = logging.getLogger(__name__)


class Color(StrEnum):
    """Traversal state of a vertex during one sort."""

    UNVISITED = auto()
    IN_PROGRESS = auto()  # On the current DFS path
    FINISHED = auto()


class GraphReader[T: Hashable](Protocol):
    """The read interface the sorter needs from a graph store."""

    def get_vertices(self) -> frozenset[T]: ...

    def get_children(self, vertex: T) -> frozenset[T]: ...


@dataclass(frozen=True, slots=True)
class SortResult[T: Hashable]:
    """Outcome of a topological sort.

    Attributes:
        order: Vertices in reverse postorder. Only a valid topological order
            when ``acyclic`` is true; otherwise it is a partial traversal
            with no ordering guarantee.
        acyclic: False if a back-edge (directed cycle) was found.

    """

    order: tuple[T, ...]
    acyclic: bool

    def raise_for_cycle(self) -> SortResult[T]:
        """Return this result, or raise if the graph had a cycle.

        Raises:
            CycleDetectedError: If ``acyclic`` is false.

        """
        if not self.acyclic:
            msg = "Graph contains a cycle; no topological order exists"
            raise CycleDetectedError(msg)
        return self


def topological_sort[T: Hashable](graph: GraphReader[T]) -> SortResult[T]:
    """Sort a graph topologically (every edge points forward in the order).

    Runs a depth-first search from every unvisited vertex. A vertex is
    prepended to the order once all of its children are finished, which
    yields reverse postorder. Meeting a vertex that is still in progress
    means the current path loops back on itself; the sort records the cycle
    in ``SortResult.acyclic`` and keeps going.

    The traversal uses an explicit stack, so deep graphs do not hit the
    interpreter recursion limit. The graph is only read, never modified,
    and must not be mutated while the sort runs.

    Args:
        graph: Any object providing ``get_vertices`` and ``get_children``.

    Returns:
        The order and the acyclic flag.

    Raises:
        GraphInvariantError: If the graph reports a vertex as missing that
            it previously listed.

    Example:
        >>> from dagsort import WeightedGraph
        >>> graph = WeightedGraph.from_adjacency({"a": {"b": 1}, "b": {"c": 1}})
        >>> topological_sort(graph)
        SortResult(order=('a', 'b', 'c'), acyclic=True)

    """
    vertices = graph.get_vertices()
    color: dict[T, Color] = dict.fromkeys(vertices, Color.UNVISITED)
    order: deque[T] = deque()
    acyclic = True

    def children_of(vertex: T) -> Iterator[T]:
        try:
            return iter(graph.get_children(vertex))
        except VertexNotFoundError as e:
            msg = f"Vertex {vertex!r} was listed by the graph but could not be queried"
            raise GraphInvariantError(msg) from e

    for start in vertices:
        if color[start] is not Color.UNVISITED:
            continue
        color[start] = Color.IN_PROGRESS
        stack: list[tuple[T, Iterator[T]]] = [(start, children_of(start))]
        while stack:
            vertex, children = stack[-1]
            for child in children:
                state = color.get(child, Color.UNVISITED)
                if state is Color.IN_PROGRESS:
                    logger.debug("Back-edge %r -> %r closes a cycle", vertex, child)
                    acyclic = False
                elif state is Color.UNVISITED:
                    color[child] = Color.IN_PROGRESS
                    stack.append((child, children_of(child)))
                    break
            else:
                # All children done: finish and prepend
                stack.pop()
                color[vertex] = Color.FINISHED
                order.appendleft(vertex)

    logger.debug("Sorted %d vertices (acyclic=%s)", len(order), acyclic)
    return SortResult(order=tuple(order), acyclic=acyclic)
