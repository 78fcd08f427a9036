"""Immutable index-based dependency graph."""

from collections.abc import Iterable
from dataclasses import dataclass

from ._algorithms import SolveReport, solve_order
from ._errors import CycleDetectedError


@dataclass(frozen=True, slots=True)
class Graph[T]:
    """A directed graph of payloads identified by their creation index.

    Edges are stored as integer indices into ``nodes``:
    - inbound[b] = (a,) means "b depends on a"
    - outbound[a] = (b,) means "a is depended on by b"

    ``outbound`` is always the transpose of ``inbound``. Instances are normally
    created with GraphBuilder, which derives ``outbound`` for you.

    Attributes:
        nodes: Node payloads, index = identity.
        inbound: Per node, the indices it depends on.
        outbound: Per node, the indices that depend on it.

    """

    nodes: tuple[T, ...] = ()
    inbound: tuple[tuple[int, ...], ...] = ()
    outbound: tuple[tuple[int, ...], ...] = ()

    def solve(self, *, strict: bool = False) -> list[int]:
        """Return node indices in execution order (dependencies first).

        Cycles are broken by clearing the inbound edges of the node with the
        most remaining dependencies whenever ordering stalls.

        Args:
            strict: Raise instead of breaking cycles.

        Returns:
            A permutation of ``range(len(self))``.

        Raises:
            CycleDetectedError: If ``strict`` is set and the graph has a cycle.

        """
        return list(self.solve_report(strict=strict).order)

    def solve_report(self, *, strict: bool = False) -> SolveReport:
        """Solve the graph and also return the cycle repairs that were needed."""
        return solve_order(self.inbound, self.outbound, strict=strict)

    def values(self, order: Iterable[int]) -> list[T]:
        """Map node indices to their payloads."""
        return [self.nodes[i] for i in order]

    def dependencies(self, index: int) -> tuple[int, ...]:
        """Get direct dependencies of a node (nodes it depends on)."""
        return self.inbound[index]

    def dependents(self, index: int) -> tuple[int, ...]:
        """Get direct dependents of a node (nodes that depend on it)."""
        return self.outbound[index]

    def roots(self) -> tuple[int, ...]:
        """Get nodes with no dependencies."""
        return tuple(i for i, deps in enumerate(self.inbound) if not deps)

    def leaves(self) -> tuple[int, ...]:
        """Get nodes that nothing depends on."""
        return tuple(i for i, deps in enumerate(self.outbound) if not deps)

    def self_loops(self) -> tuple[int, ...]:
        """Get nodes that list themselves as a dependency."""
        return tuple(i for i, deps in enumerate(self.inbound) if i in deps)

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle.

        Returns:
            True if the graph has a cycle, False otherwise.

        """
        try:
            self.solve(strict=True)
        except CycleDetectedError:
            return True
        return False

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self.nodes)

    def __getitem__(self, index: int) -> T:
        """Return the payload of a node."""
        return self.nodes[index]
