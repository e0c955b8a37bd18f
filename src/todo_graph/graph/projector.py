"""Project a laid-out graph onto render coordinates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..constants import (
    COLUMN_OFFSET,
    COLUMN_SPACING,
    EDGE_VISUAL_TYPE,
    LAYER_OFFSET,
    LAYER_SPACING,
)
from ..models import NodeStatus

if TYPE_CHECKING:
    from .builder import Graph


@dataclass(frozen=True)
class RenderNode:
    id: int
    title: str
    x: int
    y: int
    visual_type: NodeStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "x": self.x,
            "y": self.y,
            "visualType": self.visual_type.value,
        }


@dataclass(frozen=True)
class RenderEdge:
    source: int
    target: int
    visual_type: str = EDGE_VISUAL_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "visualType": self.visual_type}


@dataclass
class RenderModel:
    nodes: list[RenderNode] = field(default_factory=list)
    edges: list[RenderEdge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


def to_coordinates(layer: int, column: int) -> tuple[int, int]:
    """Map a (layer, column) slot to ``(x, y)``."""
    return column * COLUMN_SPACING + COLUMN_OFFSET, layer * LAYER_SPACING + LAYER_OFFSET


def project(graph: Graph) -> RenderModel:
    """Produce render records keyed by task id.

    The graph must already carry layers, columns and statuses
    (see :func:`todo_graph.graph.builder.build_graph`).
    """
    nodes: list[RenderNode] = []
    for node in graph.nodes:
        if node.status is None:
            raise ValueError(f"Task {node.task_id} has no status; build the graph with build_graph()")
        x, y = to_coordinates(node.layer, node.column)
        nodes.append(RenderNode(id=node.task_id, title=node.task.text, x=x, y=y, visual_type=node.status))

    edges = [RenderEdge(*graph.edge_ids(edge)) for edge in graph.edges]
    return RenderModel(nodes=nodes, edges=edges)
