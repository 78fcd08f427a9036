import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from ._graph import Graph, GraphBuilder, GraphFileError, SolveReport
from ._models import GraphDocument

logger = logging.getLogger(__name__)


def graph_from_document(document: GraphDocument) -> Graph[str]:
    """Build a graph whose payloads are the node names of a document.

    Dependencies on nodes declared earlier are passed to ``add_node``; those on
    nodes declared later are attached with ``add_deps`` once every node exists.
    """
    builder: GraphBuilder[str] = GraphBuilder()
    indices: dict[str, int] = {}
    deferred: list[tuple[int, list[str]]] = []

    for entry in document.nodes:
        known = [indices[dep] for dep in entry.depends if dep in indices]
        later = [dep for dep in entry.depends if dep not in indices]
        index = builder.add_node(entry.name, known)
        indices[entry.name] = index
        if later:
            deferred.append((index, later))

    # Self-loops land here too, since a node is registered after add_node
    for index, names in deferred:
        builder.add_deps(index, [indices[name] for name in names])

    return builder.build()


def load_graph_from_toml(input_path: Path) -> Graph[str]:
    """Load a graph document from a TOML file.

    Args:
        input_path: Path to the TOML file.

    Returns:
        The graph described by the file.

    Raises:
        GraphFileError: If the file is not valid TOML or not a valid graph document.

    """
    with input_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise GraphFileError(msg) from e

    try:
        document = GraphDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid graph document {input_path}: {e}"
        raise GraphFileError(msg) from e

    graph = graph_from_document(document)
    logger.debug(f"Loaded graph with {len(graph)} nodes from {input_path}")
    return graph


def solution_to_dict(graph: Graph[Any], report: SolveReport) -> dict[str, Any]:
    """Convert a solve report to a TOML-compatible dictionary of payload names."""
    return {
        "order": [str(value) for value in graph.values(report.order)],
        "acyclic": report.is_acyclic,
        "repairs": [
            {
                "node": str(graph[step.node]),
                "remaining_inbound": step.remaining_inbound,
                "cleared_from": [str(value) for value in graph.values(step.cleared_from)],
            }
            for step in report.repairs
        ],
    }


def export_solution_to_toml(graph: Graph[Any], report: SolveReport, output_path: Path) -> None:
    """Write a solve report to a TOML file."""
    data = solution_to_dict(graph, report)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(data, f)
    logger.debug(f"Exported solution to {output_path}")
