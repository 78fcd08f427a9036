"""Graph algorithms for ordering index-based dependency graphs."""

import logging
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass

from ._errors import CycleDetectedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RepairStep:
    """A single cycle repair performed while solving.

    Attributes:
        node: Index of the node whose inbound edges were cleared.
        remaining_inbound: Inbound edges the node still had when the solver stalled.
        cleared_from: Source indices of the cleared edges, in scan order.

    """

    node: int
    remaining_inbound: int
    cleared_from: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class SolveReport:
    """Result of solving a graph.

    Attributes:
        order: Node indices in execution order.
        repairs: Repair steps taken to break cycles, in the order they happened.

    """

    order: tuple[int, ...]
    repairs: tuple[RepairStep, ...] = ()

    @property
    def is_acyclic(self) -> bool:
        """True when the order respects every dependency."""
        return not self.repairs


def select_repair_node(remaining_inbound: Sequence[int]) -> int:
    """Pick the node to force-ready when the solver stalls.

    The node with the strictly largest remaining inbound count wins; ties go
    to the lowest index.

    Args:
        remaining_inbound: Remaining inbound edge count per node.

    Returns:
        Index of the chosen node.

    Raises:
        ValueError: If there are no nodes.

    Example:
        >>> select_repair_node([0, 2, 1, 2])
        1

    """
    if not remaining_inbound:
        msg = "Cannot select a repair node from an empty graph"
        raise ValueError(msg)
    return max(range(len(remaining_inbound)), key=remaining_inbound.__getitem__)


def solve_order(
    inbound: Sequence[Sequence[int]],
    outbound: Sequence[Sequence[int]],
    *,
    strict: bool = False,
) -> SolveReport:
    """Order nodes so that dependencies come before dependents.

    This is Kahn's algorithm with cycle repair. Whenever a drain of the ready
    queue leaves the total number of remaining inbound edges unchanged from the
    previous drain, the node with the most remaining inbound edges has all of
    them cleared and is scheduled next.

    Args:
        inbound: inbound[i] lists the nodes that node i depends on.
        outbound: outbound[i] lists the nodes that depend on node i. Must be the
            transpose of ``inbound``.
        strict: Raise on the first stall instead of repairing the cycle.

    Returns:
        SolveReport with the order and any repairs performed.

    Raises:
        CycleDetectedError: If ``strict`` is set and the graph has a cycle.

    Example:
        >>> # 1 and 2 depend on 0
        >>> solve_order([[], [0], [0]], [[1, 2], [], []]).order
        (0, 1, 2)

    """
    if not inbound:
        return SolveReport(order=())

    remaining_inbound = [len(deps) for deps in inbound]
    disabled = [[False] * len(targets) for targets in outbound]

    ready = deque(i for i, count in enumerate(remaining_inbound) if count == 0)
    logger.debug("Seeded ready queue with %d of %d nodes", len(ready), len(inbound))

    solution: list[int] = []
    repairs: list[RepairStep] = []
    last_total: int | None = None

    while True:
        while ready:
            node = ready.popleft()
            solution.append(node)
            for j, target in enumerate(outbound[node]):
                if disabled[node][j]:
                    continue
                disabled[node][j] = True
                remaining_inbound[target] -= 1
                if remaining_inbound[target] == 0:
                    ready.append(target)

        current_total = sum(remaining_inbound)
        if current_total == 0:
            break

        if strict:
            remaining = tuple(i for i, count in enumerate(remaining_inbound) if count > 0)
            raise CycleDetectedError(remaining)

        if current_total == last_total:
            logger.debug("Stalled with %d inbound edges remaining", current_total)
            step = _repair(outbound, disabled, remaining_inbound)
            repairs.append(step)
            ready.append(step.node)

        last_total = current_total

    return SolveReport(order=tuple(solution), repairs=tuple(repairs))


def _repair(
    outbound: Sequence[Sequence[int]],
    disabled: list[list[bool]],
    remaining_inbound: list[int],
) -> RepairStep:
    """Clear every enabled edge into the selected node and return the step taken."""
    chosen = select_repair_node(remaining_inbound)
    before = remaining_inbound[chosen]

    cleared_from: list[int] = []
    for source, targets in enumerate(outbound):
        for j, target in enumerate(targets):
            if target != chosen or disabled[source][j]:
                continue
            disabled[source][j] = True
            remaining_inbound[chosen] -= 1
            cleared_from.append(source)

    logger.debug("Broke cycle at node %d by clearing edges from %s", chosen, cleared_from)
    return RepairStep(node=chosen, remaining_inbound=before, cleared_from=tuple(cleared_from))
