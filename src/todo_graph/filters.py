"""Visibility filters applied to a task batch before it is drawn."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Iterable

from loguru import logger

from .models import TaskRecord


class VisibilityFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


def _is_visible(task: TaskRecord, visibility: VisibilityFilter) -> bool:
    if visibility == VisibilityFilter.ACTIVE:
        return not task.completed
    if visibility == VisibilityFilter.COMPLETED:
        return task.completed
    return True


def filter_tasks(tasks: Iterable[TaskRecord], visibility: VisibilityFilter | str) -> list[TaskRecord]:
    """Return the visible subset of ``tasks``, input order preserved.

    Successor ids that point at tasks hidden by the filter are dropped from
    the visible copies. Ids that do not exist in ``tasks`` at all are kept so
    the builder still reports them.
    """
    visibility = VisibilityFilter(visibility)
    records = list(tasks)
    if visibility == VisibilityFilter.ALL:
        return records

    hidden = {task.id for task in records if not _is_visible(task, visibility)}
    visible: list[TaskRecord] = []
    for task in records:
        if task.id in hidden:
            continue
        kept = tuple(succ for succ in task.successor_ids if succ not in hidden)
        if len(kept) != len(task.successor_ids):
            logger.debug("Pruned {} hidden successor(s) from task {}", len(task.successor_ids) - len(kept), task.id)
            task = replace(task, successor_ids=kept)
        visible.append(task)
    return visible
