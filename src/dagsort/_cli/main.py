import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dagsort._errors import GraphError
from dagsort._graph import WeightedGraph, topological_sort
from dagsort._io import export_result, load_graph
from dagsort._render import render_edges

from .config import ConfigError, get_config
from .render import render_edge_table, render_order_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Dagsort CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]✗ {escape(message)}[/red]")
    return typer.Exit(code=1)


def _load_graph(file: Path | None, graph_id: str | None) -> WeightedGraph[str]:
    """Load a graph, filling missing arguments from [tool.dagsort] config.

    Args:
        file: Graph definitions file given on the command line, if any.
        graph_id: Graph id given on the command line, if any.

    Returns:
        The loaded graph.

    Raises:
        typer.Exit: If the source cannot be determined or loading fails.

    """
    if file is None or graph_id is None:
        try:
            config = get_config()
        except ConfigError as e:
            raise _fail(str(e)) from e
        file = file or config.input
        graph_id = graph_id or config.graph
        logger.debug(f"Resolved source from config: file={file}, graph={graph_id}")

    if file is None:
        msg = "No graph file given. Pass FILE or set [tool.dagsort].input in pyproject.toml"
        raise _fail(msg)
    if graph_id is None:
        msg = "No graph id given. Pass --graph or set [tool.dagsort].graph in pyproject.toml"
        raise _fail(msg)

    err_console.print(f"[cyan]Loading graph[/cyan] [bold]{escape(graph_id)}[/bold] [cyan]from:[/cyan] {file}")
    try:
        return load_graph(file, graph_id)
    except GraphError as e:
        raise _fail(str(e)) from e


FileArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to a JSON or TOML graph definitions file"),
]
GraphOption = Annotated[
    str | None,
    typer.Option("-g", "--graph", help="Id of the graph inside the definitions file"),
]


@app.command()
def sort(
    file: FileArgument = None,
    *,
    graph_id: GraphOption = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the result to a TOML or JSON file"),
    ] = None,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Print one vertex per line instead of a table"),
    ] = False,
) -> None:
    """Print a topological order of the graph (exit non-zero on a cycle)."""
    graph = _load_graph(file, graph_id)

    result = topological_sort(graph)

    if output is not None:
        err_console.print(f"[cyan]Exporting result to:[/cyan] {output}")
        try:
            export_result(result, output)
        except GraphError as e:
            raise _fail(str(e)) from e

    if not result.acyclic:
        raise _fail("Graph contains a cycle; no topological order exists")

    if plain:
        for vertex in result.order:
            out_console.print(vertex, markup=False, highlight=False)
    else:
        render_order_table(result, out_console)

    err_console.print("[green]✓ Topological sort complete[/green]")


@app.command()
def show(
    file: FileArgument = None,
    *,
    graph_id: GraphOption = None,
    table: Annotated[
        bool,
        typer.Option("--table", help="Render edges as a table"),
    ] = False,
) -> None:
    """Print every edge of the graph as ``source -- weight --> target``."""
    graph = _load_graph(file, graph_id)

    if table:
        render_edge_table(graph, out_console)
        return

    dump = render_edges(graph)
    if dump:
        out_console.print(dump, markup=False, highlight=False)


@app.command()
def check(
    file: FileArgument = None,
    *,
    graph_id: GraphOption = None,
) -> None:
    """Report graph size and whether it is a DAG (exit non-zero if not)."""
    graph = _load_graph(file, graph_id)
    result = topological_sort(graph)

    summary = Table(show_header=False, box=None)
    summary.add_column("Property", style="cyan")
    summary.add_column("Value", justify="right")
    summary.add_row("Vertices", str(len(graph)))
    summary.add_row("Edges", str(len(graph.edges())))
    summary.add_row("Acyclic", "[green]yes[/green]" if result.acyclic else "[red]no[/red]")
    err_console.print(Panel(summary, title="[bold]Graph[/bold]", border_style="cyan"))

    if not result.acyclic:
        raise _fail("Graph contains a cycle")

    err_console.print("[green]✓ Graph is a DAG[/green]")


def main() -> None:
    app()
