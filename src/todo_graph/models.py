"""Task records and the derived graph node/edge types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from .errors import MalformedPayloadError


class NodeStatus(str, Enum):
    """Visual state of a node."""

    DONE = "DONE"
    ACTIONABLE = "ACTIONABLE"
    BLOCKED = "BLOCKED"


def require_int(data: Mapping[str, Any], key: str, *, what: str = "payload") -> int:
    """Return ``data[key]`` if it is an int, raise otherwise.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if not isinstance(data, Mapping):
        raise MalformedPayloadError(f"{what} must be a mapping, got {type(data).__name__}")
    if key not in data:
        raise MalformedPayloadError(f"{what} is missing '{key}'")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedPayloadError(f"{what} '{key}' must be an int, got {value!r}")
    return value


@dataclass(frozen=True)
class TaskRecord:
    """One task as supplied by the surrounding application."""

    id: int
    text: str = ""
    completed: bool = False
    successor_ids: tuple[int, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "successorIds": list(self.successor_ids),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TaskRecord":
        task_id = require_int(data, "id", what="task record")
        text = data.get("text", "")
        if not isinstance(text, str):
            raise MalformedPayloadError(f"task record {task_id} 'text' must be a string")
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise MalformedPayloadError(f"task record {task_id} 'completed' must be a bool")

        raw = data.get("successorIds", data.get("successor_ids", []))
        if raw is None:
            raw = []
        if not isinstance(raw, (list, tuple)):
            raise MalformedPayloadError(f"task record {task_id} 'successorIds' must be a list")
        for succ in raw:
            if isinstance(succ, bool) or not isinstance(succ, int):
                raise MalformedPayloadError(
                    f"task record {task_id} has a non-integer successor id {succ!r}"
                )
        return cls(id=task_id, text=text, completed=completed, successor_ids=tuple(raw))


@dataclass
class Node:
    """A task placed in one build of the graph.

    ``parents`` and ``children`` hold indices into the owning graph's node list.
    """

    index: int
    task: TaskRecord
    parents: set[int] = field(default_factory=set)
    children: list[int] = field(default_factory=list)
    layer: int = 0
    column: int = 0
    status: Optional[NodeStatus] = None

    @property
    def task_id(self) -> int:
        return self.task.id

    @property
    def is_root(self) -> bool:
        return not self.parents


@dataclass(frozen=True)
class Edge:
    """A parent -> child dependency, as node indices."""

    source: int
    target: int
