"""Graph construction, layered layout and the cycle guard."""

from .builder import Graph, build_graph
from .layout import assign_columns, assign_layers
from .projector import RenderEdge, RenderModel, RenderNode, project, to_coordinates
from .status import classify_statuses
from .validator import EdgeDecision, RejectReason, validate_edge

__all__ = [
    "Graph",
    "build_graph",
    "assign_layers",
    "assign_columns",
    "classify_statuses",
    "project",
    "to_coordinates",
    "RenderNode",
    "RenderEdge",
    "RenderModel",
    "validate_edge",
    "EdgeDecision",
    "RejectReason",
]
