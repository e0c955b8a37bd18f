"""Accept or reject a proposed dependency edge before it is emitted.

Validation is pure: the graph is never mutated. An accepted decision only
allows the caller to emit an ``AddDependency`` command.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from loguru import logger

from ..constants import CYCLE_GUARD_LEGACY, CYCLE_GUARD_MODES, DEFAULT_CYCLE_GUARD_MODE

if TYPE_CHECKING:
    from .builder import Graph


class RejectReason(str, Enum):
    SELF_LOOP = "self_loop"
    DUPLICATE = "duplicate"
    CYCLE = "cycle"


@dataclass(frozen=True)
class EdgeDecision:
    source_id: int
    target_id: int
    reason: Optional[RejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source_id,
            "target": self.target_id,
            "accepted": self.accepted,
            "reason": self.reason.value if self.reason else None,
        }


def _has_cycle(adj: list[list[int]], from_index: int, to_index: int) -> bool:
    """Return True if adding ``from_index -> to_index`` would close a cycle.

    The candidate edge is inserted into a scratch copy of ``adj``; the edge
    closes a cycle when the target then reaches the source.
    """
    scratch = [list(children) for children in adj]
    scratch[from_index].append(to_index)
    visited: set[int] = set()
    stack = [to_index]
    while stack:
        node = stack.pop()
        if node == from_index:
            return True
        if node in visited:
            continue
        visited.add(node)
        stack.extend(scratch[node])
    return False


def _has_existing_cycle(graph: Graph) -> bool:
    """Depth-first walk from every layer-0 node over the current edges.

    Reports a cycle only if one already exists and is reachable from a
    layer-0 node; the candidate edge is not considered. Visit states are
    shared across roots (0 = unvisited, 1 = on the current path, 2 = done),
    so each node is expanded once.
    """
    state = [0] * len(graph.nodes)
    for root in graph.nodes:
        if root.layer != 0 or state[root.index]:
            continue
        state[root.index] = 1
        path = [root.index]
        stack = [iter(root.children)]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                state[path.pop()] = 2
                continue
            if state[child] == 1:
                return True
            if state[child] == 0:
                state[child] = 1
                path.append(child)
                stack.append(iter(graph.nodes[child].children))
    return False


def validate_edge(
    graph: Graph,
    source_id: int,
    target_id: int,
    mode: str = DEFAULT_CYCLE_GUARD_MODE,
) -> EdgeDecision:
    """Decide whether ``source_id -> target_id`` may be added.

    Rules, in order: self-loops are rejected; an existing identical edge is
    rejected silently; an edge that fails the cycle check is rejected.

    Args:
        graph: Graph built by :func:`todo_graph.graph.builder.build_graph`.
        source_id: Task id the new dependency starts from.
        target_id: Task id that would become a successor of ``source_id``.
        mode: ``"reachability"`` rejects edges whose target already reaches
            the source. ``"legacy"`` only scans for cycles among the existing
            edges.

    Raises:
        UnknownTaskError: If either id is not in the graph.
        ValueError: If ``mode`` is not a known cycle-guard mode.
    """
    if mode not in CYCLE_GUARD_MODES:
        raise ValueError(f"Unknown cycle guard mode: {mode!r}")

    if source_id == target_id:
        logger.warning("Rejected edge {}->{}: self-loop", source_id, target_id)
        return EdgeDecision(source_id, target_id, RejectReason.SELF_LOOP)

    from_index = graph.index_of(source_id)
    to_index = graph.index_of(target_id)

    if graph.has_edge(source_id, target_id):
        logger.debug("Ignored edge {}->{}: already present", source_id, target_id)
        return EdgeDecision(source_id, target_id, RejectReason.DUPLICATE)

    if mode == CYCLE_GUARD_LEGACY:
        cyclic = _has_existing_cycle(graph)
    else:
        cyclic = _has_cycle(graph.adjacency(), from_index, to_index)
    if cyclic:
        logger.warning("Rejected edge {}->{}: would create cycle", source_id, target_id)
        return EdgeDecision(source_id, target_id, RejectReason.CYCLE)

    return EdgeDecision(source_id, target_id)
