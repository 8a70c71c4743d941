"""Loading graph definitions from files and exporting sort results."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import ConfigDict, TypeAdapter, ValidationError

from ._errors import GraphDefinitionError
from ._graph import WeightedGraph

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ._graph import SortResult

logger = logging.getLogger(__name__)

# source -> {target: weight} for a single graph
type Adjacency = dict[str, dict[str, float]]
# graph id -> adjacency, as stored in a definitions file
type GraphDefinitions = dict[str, Adjacency]

# Strict: numeric strings and booleans are not weights
_definitions_adapter: TypeAdapter[GraphDefinitions] = TypeAdapter(
    dict[str, dict[str, dict[str, float]]],
    config=ConfigDict(strict=True),
)

SUPPORTED_SUFFIXES = (".json", ".toml")


def _read_document(path: Path) -> Any:
    """Parse a JSON or TOML file, chosen by suffix."""
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        msg = f"Unsupported graph file type '{path.suffix}' for {path}. Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
        raise GraphDefinitionError(msg)

    try:
        if suffix == ".toml":
            with path.open("rb") as f:
                return tomllib.load(f)
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        msg = f"Graph file not found: {path}"
        raise GraphDefinitionError(msg) from e
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        msg = f"Invalid {suffix[1:].upper()} in {path}: {e}"
        raise GraphDefinitionError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"Graph file {path} is not valid UTF-8: {e}"
        raise GraphDefinitionError(msg) from e
    except OSError as e:
        msg = f"Cannot read graph file {path}: {e}"
        raise GraphDefinitionError(msg) from e


def parse_graph_definitions(contents: Any) -> GraphDefinitions:
    """Validate raw decoded contents as graph definitions.

    This is a pure function: it does no I/O and is shared by every file
    format.

    Args:
        contents: Decoded JSON or TOML document.

    Returns:
        Mapping from graph id to its adjacency mapping.

    Raises:
        GraphDefinitionError: If the contents do not have the shape
            ``{graph_id: {source: {target: weight}}}``.

    """
    try:
        return _definitions_adapter.validate_python(contents)
    except ValidationError as e:
        msg = f"Invalid graph definitions: {e}"
        raise GraphDefinitionError(msg) from e


def load_graphs(path: Path | str) -> GraphDefinitions:
    """Load every graph definition from a JSON or TOML file.

    Args:
        path: Path to a ``.json`` or ``.toml`` file.

    Returns:
        Mapping from graph id to its adjacency mapping.

    Raises:
        GraphDefinitionError: If the file is missing, unsupported or malformed.

    """
    path = Path(path)
    definitions = parse_graph_definitions(_read_document(path))
    logger.debug(f"Loaded {len(definitions)} graph definition(s) from {path}")
    return definitions


def build_graph(definitions: Mapping[str, Adjacency], graph_id: str) -> WeightedGraph[str]:
    """Build the graph stored under ``graph_id``.

    Raises:
        GraphDefinitionError: If no graph with that id exists.

    """
    if graph_id not in definitions:
        available = ", ".join(sorted(definitions)) or "(none)"
        msg = f"Graph '{graph_id}' not found. Available graphs: {available}"
        raise GraphDefinitionError(msg)

    graph = WeightedGraph.from_adjacency(definitions[graph_id])
    logger.debug(f"Built graph '{graph_id}' with {len(graph)} vertices")
    return graph


def load_graph(path: Path | str, graph_id: str) -> WeightedGraph[str]:
    """Load a single graph from a definitions file.

    Args:
        path: Path to a ``.json`` or ``.toml`` file.
        graph_id: Key of the graph inside the file.

    Returns:
        A populated WeightedGraph.

    Raises:
        GraphDefinitionError: If the file cannot be loaded or lacks the graph.

    """
    return build_graph(load_graphs(path), graph_id)


def result_to_dict(result: SortResult[str]) -> dict[str, Any]:
    """Convert a sort result to a serializable dictionary."""
    return {"acyclic": result.acyclic, "order": [str(vertex) for vertex in result.order]}


def export_result(result: SortResult[str], output_path: Path | str) -> None:
    """Write a sort result to a TOML or JSON file, chosen by suffix.

    Args:
        result: The result of ``topological_sort``.
        output_path: Destination ``.toml`` or ``.json`` file.

    Raises:
        GraphDefinitionError: If the suffix is not supported or the file
            cannot be written.

    """
    output_path = Path(output_path)
    data = result_to_dict(result)
    suffix = output_path.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        msg = f"Unsupported output file type '{output_path.suffix}'. Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
        raise GraphDefinitionError(msg)

    try:
        if suffix == ".toml":
            with output_path.open("wb") as f:
                tomli_w.dump(data, f)
        else:
            with output_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
    except OSError as e:
        msg = f"Cannot write result to {output_path}: {e}"
        raise GraphDefinitionError(msg) from e

    logger.debug(f"Exported sort result to {output_path}")
