"""Turn renderer interactions into dependency-mutation commands.

The renderer relays node clicks, edge clicks and drag-to-connect gestures as
plain payload mappings. The controller checks their shape, consults the cycle
guard where needed, and hands the resulting command to ``dispatch``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from loguru import logger

from .constants import DEFAULT_CYCLE_GUARD_MODE
from .graph.builder import Graph
from .graph.validator import EdgeDecision, validate_edge
from .models import require_int

FOCUS_TASK = "viewer/FOCUS_TODO"
REMOVE_DEPENDENCY = "todos/REMOVE_DEPENDENCE"
ADD_DEPENDENCY = "todos/ADD_DEPENDENCE"


@dataclass(frozen=True)
class FocusTask:
    id: int

    type = FOCUS_TASK

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": {"id": self.id}}


@dataclass(frozen=True)
class RemoveDependency:
    from_id: int
    to_id: int

    type = REMOVE_DEPENDENCY

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": {"fromId": self.from_id, "toId": self.to_id}}


@dataclass(frozen=True)
class AddDependency:
    from_id: int
    to_id: int

    type = ADD_DEPENDENCY

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": {"fromId": self.from_id, "toId": self.to_id}}


Command = Union[FocusTask, RemoveDependency, AddDependency]
Dispatch = Callable[[Command], Any]


class GraphInteractionController:
    """Handle selections and edge proposals against one graph snapshot."""

    def __init__(self, graph: Graph, dispatch: Dispatch, guard_mode: str = DEFAULT_CYCLE_GUARD_MODE):
        self.graph = graph
        self.dispatch = dispatch
        self.guard_mode = guard_mode

    def select_node(self, payload: Optional[Mapping[str, Any]]) -> Optional[FocusTask]:
        """Focus the selected task. A ``None`` selection (deselect) is ignored."""
        if payload is None:
            return None
        command = FocusTask(require_int(payload, "id", what="node payload"))
        self._emit(command)
        return command

    def select_edge(self, payload: Mapping[str, Any]) -> RemoveDependency:
        """Remove the clicked dependency."""
        command = RemoveDependency(
            from_id=require_int(payload, "source", what="edge payload"),
            to_id=require_int(payload, "target", what="edge payload"),
        )
        self._emit(command)
        return command

    def propose_edge(self, source: Mapping[str, Any], target: Mapping[str, Any]) -> EdgeDecision:
        """Add ``source -> target`` if the cycle guard accepts it."""
        source_id = require_int(source, "id", what="source node payload")
        target_id = require_int(target, "id", what="target node payload")
        decision = validate_edge(self.graph, source_id, target_id, mode=self.guard_mode)
        if decision.accepted:
            self._emit(AddDependency(from_id=source_id, to_id=target_id))
        return decision

    def _emit(self, command: Command) -> None:
        logger.info("Dispatching {}", command.to_dict())
        self.dispatch(command)
