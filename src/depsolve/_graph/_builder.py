"""Mutable staging area for constructing a Graph."""

import logging
from collections.abc import Iterable

from ._errors import BuilderConsumedError, InvalidDependencyIndexError, InvalidNodeIndexError
from ._graph import Graph

logger = logging.getLogger(__name__)


class GraphBuilder[T]:
    """Accumulate nodes and dependencies, then freeze them into a Graph.

    Dependencies are given as indices of nodes that already exist. A node that
    is created later can still become a dependency of an earlier one through
    ``add_deps``.

    Example:
        >>> builder = GraphBuilder()
        >>> boot = builder.add_node("boot")
        >>> net = builder.add_node("net", [boot])
        >>> graph = builder.build()
        >>> graph.values(graph.solve())
        ['boot', 'net']

    """

    def __init__(self) -> None:
        self._nodes: list[T] = []
        self._deps: list[list[int]] = []
        self._consumed = False

    def add_node(self, value: T, dependencies: Iterable[int] = ()) -> int:
        """Add a node and return its index.

        Args:
            value: Payload of the new node.
            dependencies: Indices of existing nodes the new node depends on.

        Returns:
            Index of the new node.

        Raises:
            InvalidDependencyIndexError: If a dependency does not exist yet.

        """
        self._check_not_consumed()
        index = len(self._nodes)
        deps = self._checked_deps(dependencies, index)
        self._nodes.append(value)
        self._deps.append(deps)
        return index

    def add_deps(self, index: int, deps: Iterable[int]) -> None:
        """Append dependencies to an already created node.

        Raises:
            InvalidNodeIndexError: If ``index`` does not refer to a node.
            InvalidDependencyIndexError: If a dependency does not exist.

        """
        self._check_not_consumed()
        if not 0 <= index < len(self._nodes):
            raise InvalidNodeIndexError(index, len(self._nodes))
        checked = self._checked_deps(deps, len(self._nodes))
        if index in checked:
            logger.debug("Node %d depends on itself", index)
        self._deps[index].extend(checked)

    def build(self) -> Graph[T]:
        """Freeze the builder into a Graph, deriving the dependent lists.

        The builder cannot be used afterwards.
        """
        self._check_not_consumed()
        self._consumed = True

        outbound: list[list[int]] = [[] for _ in self._nodes]
        for node, deps in enumerate(self._deps):
            for dep in deps:
                outbound[dep].append(node)

        graph = Graph(
            nodes=tuple(self._nodes),
            inbound=tuple(tuple(deps) for deps in self._deps),
            outbound=tuple(tuple(dependents) for dependents in outbound),
        )
        self._nodes = []
        self._deps = []
        return graph

    def __len__(self) -> int:
        """Return the number of nodes added so far."""
        return len(self._nodes)

    def _check_not_consumed(self) -> None:
        if self._consumed:
            raise BuilderConsumedError

    @staticmethod
    def _checked_deps(deps: Iterable[int], node_count: int) -> list[int]:
        checked = list(deps)
        for dep in checked:
            if not 0 <= dep < node_count:
                raise InvalidDependencyIndexError(dep, node_count)
        return checked
