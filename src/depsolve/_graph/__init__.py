"""Graph module providing the dependency graph and its solver.

This module contains:
- GraphBuilder[T]: Mutable staging of nodes and dependency indices
- Graph[T]: An immutable index-based graph with a cycle-breaking solver
- solve_order: Kahn's algorithm with cycle repair
"""

from ._algorithms import RepairStep, SolveReport, select_repair_node, solve_order
from ._builder import GraphBuilder
from ._errors import (
    BuilderConsumedError,
    CycleDetectedError,
    DepsolveError,
    GraphFileError,
    InvalidDependencyIndexError,
    InvalidNodeIndexError,
)
from ._graph import Graph

__all__ = [
    "BuilderConsumedError",
    "CycleDetectedError",
    "DepsolveError",
    "Graph",
    "GraphBuilder",
    "GraphFileError",
    "InvalidDependencyIndexError",
    "InvalidNodeIndexError",
    "RepairStep",
    "SolveReport",
    "select_repair_node",
    "solve_order",
]
