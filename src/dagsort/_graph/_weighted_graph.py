"""Mutable directed, weighted graph with mirrored adjacency maps."""

from __future__ import annotations

import threading
from collections.abc import Hashable, Mapping

from dagsort._errors import EdgeNotFoundError, VertexNotFoundError
from dagsort._render import render_edges


class WeightedGraph[T: Hashable]:
    """A directed graph whose edges carry a float weight.

    The graph keeps three maps in sync:

    - ``_vertices``: the set of known vertices.
    - ``_children``: forward adjacency, ``source -> {target: weight}``.
    - ``_parents``: reverse adjacency, ``target -> {source: weight}``.

    Every edge stored under ``_children[u][v]`` is mirrored under
    ``_parents[v][u]`` with the same weight. Edges may only connect vertices
    that are already in the vertex set.

    Each public method holds the graph lock for its whole duration, so
    single operations are atomic with respect to other threads. Sequences of
    calls are not; the caller has to coordinate those.

    Example:
        >>> graph = WeightedGraph()
        >>> graph.add_vertex("a")
        True
        >>> graph.add_vertex("b")
        True
        >>> graph.add_edge("a", "b", 2.0)
        >>> graph.get_children("a")
        frozenset({'b'})

    """

    __slots__ = ("_children", "_lock", "_parents", "_vertices")

    def __init__(self) -> None:
        self._vertices: set[T] = set()
        self._children: dict[T, dict[T, float]] = {}
        self._parents: dict[T, dict[T, float]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_adjacency(cls, adjacency: Mapping[T, Mapping[T, float]]) -> WeightedGraph[T]:
        """Build a graph from a ``source -> {target: weight}`` mapping.

        Sources and targets are added as vertices when first seen. Edges are
        set with :meth:`replace_edge`, so a mapping that is a complete
        description of the graph is never double counted.

        Args:
            adjacency: Mapping from source vertex to its weighted targets.

        Returns:
            A new WeightedGraph instance.

        Example:
            >>> graph = WeightedGraph.from_adjacency({"A": {"B": 5}, "B": {}})
            >>> graph.get_weight("A", "B")
            5.0

        """
        graph: WeightedGraph[T] = cls()
        for source, targets in adjacency.items():
            graph.add_vertex(source)
            for target, weight in targets.items():
                graph.add_vertex(target)
                graph.replace_edge(source, target, weight)
        return graph

    # -- vertices -----------------------------------------------------------

    def add_vertex(self, vertex: T) -> bool:
        """Add a vertex if it is not already present.

        Returns:
            True if the vertex was inserted, False if it already existed.

        """
        with self._lock:
            if vertex in self._vertices:
                return False
            self._vertices.add(vertex)
            return True

    def find_vertex(self, vertex: T) -> bool:
        """Return whether the vertex is in the graph."""
        with self._lock:
            return vertex in self._vertices

    def delete_vertex(self, vertex: T) -> bool:
        """Remove a vertex together with every edge touching it.

        Returns:
            True if the vertex was removed, False if it was not present.

        """
        with self._lock:
            if vertex not in self._vertices:
                return False
            self._vertices.remove(vertex)
            self._children.pop(vertex, None)
            self._parents.pop(vertex, None)
            # Every remaining map may still mention the vertex on the far side
            for adjacency in (self._children, self._parents):
                for other in list(adjacency):
                    neighbours = adjacency[other]
                    neighbours.pop(vertex, None)
                    if not neighbours:
                        del adjacency[other]
            return True

    def get_vertices(self) -> frozenset[T]:
        """Return a snapshot of all vertices."""
        with self._lock:
            return frozenset(self._vertices)

    # -- edges --------------------------------------------------------------

    def add_edge(self, source: T, target: T, weight: float) -> None:
        """Add ``weight`` to the edge ``source -> target``, creating it if needed.

        Raises:
            VertexNotFoundError: If either vertex is not in the graph.

        """
        with self._lock:
            self._require(source, target)
            total = self._children.get(source, {}).get(target, 0.0) + weight
            self._set_edge(source, target, total)

    def replace_edge(self, source: T, target: T, weight: float) -> None:
        """Set the weight of ``source -> target``, overwriting any previous value.

        Raises:
            VertexNotFoundError: If either vertex is not in the graph.

        """
        with self._lock:
            self._require(source, target)
            self._set_edge(source, target, float(weight))

    def delete_edge(self, source: T, target: T) -> None:
        """Remove the edge ``source -> target``. Missing edges are ignored.

        Raises:
            VertexNotFoundError: If either vertex is not in the graph.

        """
        with self._lock:
            self._require(source, target)
            targets = self._children.get(source)
            if targets is None or target not in targets:
                return
            del targets[target]
            if not targets:
                del self._children[source]
            sources = self._parents[target]
            del sources[source]
            if not sources:
                del self._parents[target]

    def get_weight(self, source: T, target: T) -> float:
        """Get the weight of the edge ``source -> target``.

        Raises:
            VertexNotFoundError: If either vertex is not in the graph.
            EdgeNotFoundError: If the vertices exist but are not connected.

        """
        with self._lock:
            self._require(source, target)
            try:
                return self._children[source][target]
            except KeyError:
                raise EdgeNotFoundError(source, target) from None

    def get_parents(self, vertex: T) -> frozenset[T]:
        """Get the vertices that have an edge into ``vertex``.

        Raises:
            VertexNotFoundError: If the vertex is not in the graph.

        """
        with self._lock:
            self._require(vertex)
            return frozenset(self._parents.get(vertex, ()))

    def get_children(self, vertex: T) -> frozenset[T]:
        """Get the vertices that ``vertex`` has an edge to.

        Raises:
            VertexNotFoundError: If the vertex is not in the graph.

        """
        with self._lock:
            self._require(vertex)
            return frozenset(self._children.get(vertex, ()))

    def edges(self) -> list[tuple[T, T, float]]:
        """Return a snapshot of every edge as ``(source, target, weight)``."""
        with self._lock:
            return [
                (source, target, weight)
                for source, targets in self._children.items()
                for target, weight in targets.items()
            ]

    # -- internals ----------------------------------------------------------

    def _require(self, *vertices: T) -> None:
        for vertex in vertices:
            if vertex not in self._vertices:
                raise VertexNotFoundError(vertex)

    def _set_edge(self, source: T, target: T, weight: float) -> None:
        # Caller holds the lock and has checked both endpoints
        self._children.setdefault(source, {})[target] = weight
        self._parents.setdefault(target, {})[source] = weight

    def __len__(self) -> int:
        """Return the number of vertices in the graph."""
        with self._lock:
            return len(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        """Check if a vertex is in the graph."""
        with self._lock:
            return vertex in self._vertices

    def __str__(self) -> str:
        """Render every edge as ``source -- weight --> target``."""
        return render_edges(self)
