"""Exceptions raised while building or solving dependency graphs."""


class DepsolveError(Exception):
    """Base class for all depsolve errors."""


class InvalidDependencyIndexError(DepsolveError, IndexError):
    """Raised when a dependency refers to a node that does not exist yet."""

    def __init__(self, index: int, node_count: int) -> None:
        self.index = index
        self.node_count = node_count
        super().__init__(f"Invalid dependency index {index} (graph has {node_count} nodes)")


class InvalidNodeIndexError(DepsolveError, IndexError):
    """Raised when extending the dependencies of a node that does not exist."""

    def __init__(self, index: int, node_count: int) -> None:
        self.index = index
        self.node_count = node_count
        super().__init__(f"Invalid node index {index} (graph has {node_count} nodes)")


class BuilderConsumedError(DepsolveError, RuntimeError):
    """Raised when a GraphBuilder is used after build() was called."""

    def __init__(self) -> None:
        super().__init__("GraphBuilder has already been consumed by build()")


class CycleDetectedError(DepsolveError, ValueError):
    """Raised by strict solving when the dependency relation contains a cycle.

    Attributes:
        remaining: Indices of the nodes that could not be scheduled.

    """

    def __init__(self, remaining: tuple[int, ...]) -> None:
        self.remaining = remaining
        super().__init__(f"Cycle detected in graph ({len(remaining)} nodes could not be scheduled)")


class GraphFileError(DepsolveError):
    """Raised when a graph document cannot be read or is invalid."""
