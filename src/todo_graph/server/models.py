"""Pydantic models for API requests and responses."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr

from ..models import TaskRecord


class TaskRecordIn(BaseModel):
    """One task record as sent by the client."""

    id: StrictInt
    text: StrictStr = ""
    completed: StrictBool = False
    successorIds: list[StrictInt] = Field(default_factory=list)

    def to_record(self) -> TaskRecord:
        return TaskRecord(
            id=self.id,
            text=self.text,
            completed=self.completed,
            successor_ids=tuple(self.successorIds),
        )


class LayoutRequest(BaseModel):
    tasks: list[TaskRecordIn] = Field(default_factory=list)
    visibility: Optional[str] = None  # all | active | completed; config default when omitted


class LayoutResponse(BaseModel):
    nodes: list[dict[str, Any]] = Field(default_factory=list)
    edges: list[dict[str, Any]] = Field(default_factory=list)


class ValidateEdgeRequest(BaseModel):
    tasks: list[TaskRecordIn] = Field(default_factory=list)
    source: StrictInt
    target: StrictInt
    guard_mode: Optional[str] = None


class ValidateEdgeResponse(BaseModel):
    accepted: bool
    reason: Optional[str] = None
    command: Optional[dict[str, Any]] = None
