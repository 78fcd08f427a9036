"""Dependency graph scheduler with cycle repair."""

__all__ = [
    "BuilderConsumedError",
    "CycleDetectedError",
    "DepsolveError",
    "Graph",
    "GraphBuilder",
    "GraphDocument",
    "GraphFileError",
    "InvalidDependencyIndexError",
    "InvalidNodeIndexError",
    "NodeEntry",
    "RepairStep",
    "SolveReport",
    "export_solution_to_toml",
    "graph_from_document",
    "load_graph_from_toml",
    "select_repair_node",
    "solution_to_dict",
    "solve_order",
]

from ._graph import (
    BuilderConsumedError,
    CycleDetectedError,
    DepsolveError,
    Graph,
    GraphBuilder,
    GraphFileError,
    InvalidDependencyIndexError,
    InvalidNodeIndexError,
    RepairStep,
    SolveReport,
    select_repair_node,
    solve_order,
)
from ._io import export_solution_to_toml, graph_from_document, load_graph_from_toml, solution_to_dict
from ._models import GraphDocument, NodeEntry
