"""Provide the public `todo_graph` package exports."""

from __future__ import annotations

from typing import Iterable

from .errors import (
    DataIntegrityError,
    DependencyCycleError,
    MalformedPayloadError,
    TodoGraphError,
    UnknownTaskError,
)
from .filters import VisibilityFilter, filter_tasks
from .graph import EdgeDecision, Graph, RejectReason, RenderModel, build_graph, project, validate_edge
from .interaction import AddDependency, FocusTask, GraphInteractionController, RemoveDependency
from .models import NodeStatus, TaskRecord


def render_tasks(
    tasks: Iterable[TaskRecord],
    visibility: VisibilityFilter | str = VisibilityFilter.ALL,
) -> RenderModel:
    """Filter, build and project a task batch in one call."""
    return project(build_graph(filter_tasks(tasks, visibility)))


__all__ = [
    "TaskRecord",
    "NodeStatus",
    "Graph",
    "build_graph",
    "project",
    "render_tasks",
    "validate_edge",
    "EdgeDecision",
    "RejectReason",
    "RenderModel",
    "VisibilityFilter",
    "filter_tasks",
    "GraphInteractionController",
    "FocusTask",
    "RemoveDependency",
    "AddDependency",
    "TodoGraphError",
    "DataIntegrityError",
    "DependencyCycleError",
    "UnknownTaskError",
    "MalformedPayloadError",
]
