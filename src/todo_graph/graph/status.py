"""Classify nodes as done, actionable now, or blocked."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import NodeStatus

if TYPE_CHECKING:
    from .builder import Graph


def classify_statuses(graph: Graph) -> list[NodeStatus]:
    """Tag every node with its :class:`NodeStatus`.

    A completed task is DONE regardless of its parents. An incomplete task is
    ACTIONABLE when all of its parents are completed (or it has none), and
    BLOCKED otherwise.
    """
    statuses: list[NodeStatus] = []
    for node in graph.nodes:
        if node.task.completed:
            status = NodeStatus.DONE
        elif all(graph.nodes[p].task.completed for p in node.parents):
            status = NodeStatus.ACTIONABLE
        else:
            status = NodeStatus.BLOCKED
        node.status = status
        statuses.append(status)
    return statuses
