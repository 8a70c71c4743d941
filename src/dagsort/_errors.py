"""Exceptions raised by the graph store, the sorter and the loaders."""

from collections.abc import Hashable


class GraphError(Exception):
    """Base class for all dagsort errors."""


class VertexNotFoundError(GraphError):
    """Raised when an operation references a vertex that is not in the graph."""

    def __init__(self, vertex: Hashable) -> None:
        self.vertex = vertex
        super().__init__(f"Vertex not found: {vertex!r}")


class EdgeNotFoundError(GraphError):
    """Raised when both vertices exist but no edge connects them."""

    def __init__(self, source: Hashable, target: Hashable) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Edge not found: {source!r} -> {target!r}")


class CycleDetectedError(GraphError):
    """Raised on request when a sort result reports a cycle.

    The sorter itself never raises this; see ``SortResult.raise_for_cycle``.
    """


class GraphInvariantError(GraphError):
    """Raised when the graph store contradicts itself during a sort.

    This means a vertex enumerated by the store was later reported as
    missing, which can only happen if the graph was mutated mid-sort or the
    store is broken. It is never a normal outcome.
    """


class GraphDefinitionError(GraphError):
    """Raised when a serialized graph definition cannot be loaded."""
