"""Rich rendering utilities for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from dagsort._render import format_weight

if TYPE_CHECKING:
    from rich.console import Console

    from dagsort._graph import SortResult, WeightedGraph


def render_order_table(result: SortResult[str], console: Console) -> None:
    """Render a topological order as a numbered Rich table.

    Args:
        result: An acyclic SortResult.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Vertex", style="bold")

    for index, vertex in enumerate(result.order, start=1):
        table.add_row(str(index), escape(str(vertex)))

    console.print(table)
    console.print(f"\n[dim]Total: {len(result.order)} vertices[/dim]")


def render_edge_table(graph: WeightedGraph[str], console: Console) -> None:
    """Render every edge of a graph as a Rich table.

    Args:
        graph: Graph to render.
        console: Rich Console to output to.

    """
    edges = graph.edges()
    if not edges:
        console.print("[dim]Graph has no edges[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Source", style="bold")
    table.add_column("Weight", justify="right", style="yellow")
    table.add_column("Target", style="bold")

    for source, target, weight in sorted(edges, key=lambda edge: (str(edge[0]), str(edge[1]))):
        table.add_row(escape(str(source)), format_weight(weight), escape(str(target)))

    console.print(table)
