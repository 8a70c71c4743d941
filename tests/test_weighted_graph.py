"""Tests for the WeightedGraph store."""

import threading

import pytest

from dagsort import EdgeNotFoundError, VertexNotFoundError, WeightedGraph


@pytest.fixture
def graph() -> WeightedGraph[str]:
    """a -> b -> c, a -> c."""
    g: WeightedGraph[str] = WeightedGraph()
    for vertex in ("a", "b", "c"):
        g.add_vertex(vertex)
    g.add_edge("a", "b", 1.0)
    g.add_edge("b", "c", 2.0)
    g.add_edge("a", "c", 3.0)
    return g


def _snapshot(g: WeightedGraph[str]) -> tuple[frozenset[str], set[tuple[str, str, float]]]:
    return g.get_vertices(), set(g.edges())


class TestVertices:
    """Tests for vertex operations."""

    def test_empty_graph(self) -> None:
        g: WeightedGraph[str] = WeightedGraph()
        assert g.get_vertices() == frozenset()
        assert len(g) == 0
        assert g.edges() == []

    def test_add_vertex_reports_insertion(self) -> None:
        g: WeightedGraph[str] = WeightedGraph()
        assert g.add_vertex("a") is True
        assert g.add_vertex("a") is False
        assert g.get_vertices() == frozenset({"a"})

    def test_find_vertex(self, graph: WeightedGraph[str]) -> None:
        assert graph.find_vertex("a") is True
        assert graph.find_vertex("z") is False

    def test_contains_and_len(self, graph: WeightedGraph[str]) -> None:
        assert "b" in graph
        assert "z" not in graph
        assert len(graph) == 3

    def test_isolated_vertex_has_no_neighbours(self) -> None:
        g: WeightedGraph[str] = WeightedGraph()
        g.add_vertex("lonely")
        assert g.get_children("lonely") == frozenset()
        assert g.get_parents("lonely") == frozenset()

    def test_get_vertices_is_a_snapshot(self, graph: WeightedGraph[str]) -> None:
        vertices = graph.get_vertices()
        graph.add_vertex("d")
        assert "d" not in vertices

    def test_delete_missing_vertex_returns_false(self, graph: WeightedGraph[str]) -> None:
        before = _snapshot(graph)
        assert graph.delete_vertex("z") is False
        assert _snapshot(graph) == before

    def test_delete_vertex_removes_all_references(self, graph: WeightedGraph[str]) -> None:
        assert graph.delete_vertex("b") is True

        assert graph.find_vertex("b") is False
        for vertex in graph.get_vertices():
            assert "b" not in graph.get_children(vertex)
            assert "b" not in graph.get_parents(vertex)
        assert graph.get_children("a") == frozenset({"c"})
        assert graph.get_parents("c") == frozenset({"a"})
        assert all("b" not in (source, target) for source, target, _ in graph.edges())

    def test_delete_vertex_with_self_loop(self) -> None:
        g: WeightedGraph[str] = WeightedGraph()
        g.add_vertex("a")
        g.add_vertex("b")
        g.add_edge("a", "a", 1.0)
        g.add_edge("b", "a", 1.0)
        assert g.delete_vertex("a") is True
        assert g.edges() == []
        assert g.get_children("b") == frozenset()

    def test_deleted_vertex_can_be_added_back_clean(self, graph: WeightedGraph[str]) -> None:
        graph.delete_vertex("c")
        graph.add_vertex("c")
        assert graph.get_parents("c") == frozenset()
        assert graph.get_children("b") == frozenset()


class TestEdges:
    """Tests for edge operations."""

    def test_add_edge_updates_both_directions(self, graph: WeightedGraph[str]) -> None:
        assert graph.get_children("a") == frozenset({"b", "c"})
        assert graph.get_parents("c") == frozenset({"a", "b"})
        assert graph.get_parents("a") == frozenset()
        assert graph.get_children("c") == frozenset()

    def test_add_edge_accumulates_weight(self) -> None:
        g: WeightedGraph[str] = WeightedGraph()
        g.add_vertex("u")
        g.add_vertex("v")
        g.add_edge("u", "v", 1.5)
        g.add_edge("u", "v", 2.0)
        assert g.get_weight("u", "v") == pytest.approx(3.5)
        assert len(g.edges()) == 1

    def test_replace_edge_overwrites_weight(self) -> None:
        g: WeightedGraph[str] = WeightedGraph()
        g.add_vertex("u")
        g.add_vertex("v")
        g.add_edge("u", "v", 1.5)
        g.add_edge("u", "v", 2.0)
        g.replace_edge("u", "v", 2.0)
        assert g.get_weight("u", "v") == 2.0

    def test_replace_edge_creates_missing_edge(self, graph: WeightedGraph[str]) -> None:
        graph.replace_edge("c", "a", 7)
        assert graph.get_weight("c", "a") == 7.0
        assert graph.get_parents("a") == frozenset({"c"})

    def test_edges_are_directed(self, graph: WeightedGraph[str]) -> None:
        with pytest.raises(EdgeNotFoundError):
            graph.get_weight("b", "a")

    def test_delete_edge(self, graph: WeightedGraph[str]) -> None:
        graph.delete_edge("a", "c")
        assert graph.get_children("a") == frozenset({"b"})
        assert graph.get_parents("c") == frozenset({"b"})
        with pytest.raises(EdgeNotFoundError):
            graph.get_weight("a", "c")

    def test_delete_missing_edge_is_noop(self, graph: WeightedGraph[str]) -> None:
        before = _snapshot(graph)
        graph.delete_edge("c", "a")
        assert _snapshot(graph) == before

    def test_get_weight_missing_edge(self, graph: WeightedGraph[str]) -> None:
        with pytest.raises(EdgeNotFoundError) as exc_info:
            graph.get_weight("c", "b")
        assert exc_info.value.source == "c"
        assert exc_info.value.target == "b"

    def test_edges_snapshot(self, graph: WeightedGraph[str]) -> None:
        assert set(graph.edges()) == {("a", "b", 1.0), ("b", "c", 2.0), ("a", "c", 3.0)}


class TestMissingVertices:
    """Edge-level operations on unknown vertices fail and change nothing."""

    @pytest.mark.parametrize(
        ("operation", "args"),
        [
            ("add_edge", ("a", "z", 1.0)),
            ("add_edge", ("z", "a", 1.0)),
            ("replace_edge", ("a", "z", 1.0)),
            ("replace_edge", ("z", "a", 1.0)),
            ("delete_edge", ("a", "z")),
            ("delete_edge", ("z", "a")),
            ("get_weight", ("a", "z")),
            ("get_weight", ("z", "a")),
            ("get_parents", ("z",)),
            ("get_children", ("z",)),
        ],
    )
    def test_raises_vertex_not_found(self, graph: WeightedGraph[str], operation: str, args: tuple) -> None:
        before = _snapshot(graph)
        with pytest.raises(VertexNotFoundError) as exc_info:
            getattr(graph, operation)(*args)
        assert exc_info.value.vertex == "z"
        assert _snapshot(graph) == before

    def test_error_message_names_vertex(self, graph: WeightedGraph[str]) -> None:
        with pytest.raises(VertexNotFoundError, match="'ghost'"):
            graph.add_edge("a", "ghost", 1.0)


class TestFromAdjacency:
    """Tests for building a graph from an adjacency mapping."""

    def test_round_trip(self) -> None:
        g = WeightedGraph.from_adjacency({"A": {"B": 5}, "B": {}})
        assert g.get_vertices() == frozenset({"A", "B"})
        assert g.get_children("A") == frozenset({"B"})
        assert g.get_weight("A", "B") == 5.0
        assert g.get_parents("B") == frozenset({"A"})

    def test_targets_become_vertices(self) -> None:
        g = WeightedGraph.from_adjacency({"A": {"B": 1, "C": 2}})
        assert g.get_vertices() == frozenset({"A", "B", "C"})

    def test_empty_mapping(self) -> None:
        assert len(WeightedGraph.from_adjacency({})) == 0


class TestConcurrency:
    """Single operations stay consistent under concurrent callers."""

    def test_concurrent_add_edge_accumulates_every_call(self) -> None:
        g: WeightedGraph[str] = WeightedGraph()
        g.add_vertex("u")
        g.add_vertex("v")

        def worker() -> None:
            for _ in range(500):
                g.add_edge("u", "v", 1.0)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert g.get_weight("u", "v") == 4000.0

    def test_concurrent_add_and_delete_keep_maps_mirrored(self) -> None:
        g: WeightedGraph[int] = WeightedGraph()
        for vertex in range(20):
            g.add_vertex(vertex)

        def adder() -> None:
            for source in range(20):
                for target in range(20):
                    if source != target and source in g and target in g:
                        try:
                            g.add_edge(source, target, 1.0)
                        except VertexNotFoundError:
                            pass

        def deleter() -> None:
            for vertex in range(0, 20, 2):
                g.delete_vertex(vertex)

        threads = [threading.Thread(target=adder), threading.Thread(target=deleter)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        vertices = g.get_vertices()
        for source, target, _ in g.edges():
            assert source in vertices
            assert target in vertices
            assert source in g.get_parents(target)
        for vertex in vertices:
            for parent in g.get_parents(vertex):
                assert vertex in g.get_children(parent)
