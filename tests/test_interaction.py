"""Tests for turning renderer interactions into commands."""

from __future__ import annotations

from typing import Any

import pytest

from todo_graph.errors import MalformedPayloadError
from todo_graph.graph.builder import build_graph
from todo_graph.graph.validator import RejectReason
from todo_graph.interaction import (
    AddDependency,
    FocusTask,
    GraphInteractionController,
    RemoveDependency,
)
from todo_graph.models import TaskRecord


@pytest.fixture
def dispatched() -> list[Any]:
    return []


@pytest.fixture
def controller(dispatched: list[Any]) -> GraphInteractionController:
    graph = build_graph(
        [
            TaskRecord(id=1, text="a", successor_ids=(2, 3)),
            TaskRecord(id=2, text="b", successor_ids=(4,)),
            TaskRecord(id=3, text="c", successor_ids=(4,)),
            TaskRecord(id=4, text="d"),
        ]
    )
    return GraphInteractionController(graph, dispatched.append)


class TestSelectNode:
    def test_focus_dispatched(self, controller: GraphInteractionController, dispatched: list[Any]) -> None:
        command = controller.select_node({"id": 3, "title": "c", "x": 400, "y": 500})

        assert command == FocusTask(3)
        assert dispatched == [FocusTask(3)]

    def test_deselect_ignored(self, controller: GraphInteractionController, dispatched: list[Any]) -> None:
        assert controller.select_node(None) is None
        assert dispatched == []

    @pytest.mark.parametrize("payload", [{"id": "3"}, {"id": True}, {"title": "c"}, ["id", 3]])
    def test_malformed_payload_fails_fast(
        self,
        controller: GraphInteractionController,
        dispatched: list[Any],
        payload: Any,
    ) -> None:
        with pytest.raises(MalformedPayloadError):
            controller.select_node(payload)
        assert dispatched == []

    def test_malformed_payload_is_type_error(self, controller: GraphInteractionController) -> None:
        with pytest.raises(TypeError):
            controller.select_node({"id": 3.0})


class TestSelectEdge:
    def test_remove_dispatched(self, controller: GraphInteractionController, dispatched: list[Any]) -> None:
        command = controller.select_edge({"source": 1, "target": 2, "visualType": "NORMAL"})

        assert command == RemoveDependency(from_id=1, to_id=2)
        assert dispatched == [command]

    def test_string_ids_rejected(self, controller: GraphInteractionController, dispatched: list[Any]) -> None:
        with pytest.raises(MalformedPayloadError, match="'source' must be an int"):
            controller.select_edge({"source": "1", "target": "2"})
        assert dispatched == []


class TestProposeEdge:
    def test_accepted_edge_dispatches_add(self, controller: GraphInteractionController, dispatched: list[Any]) -> None:
        decision = controller.propose_edge({"id": 2}, {"id": 3})

        assert decision.accepted
        assert dispatched == [AddDependency(from_id=2, to_id=3)]

    @pytest.mark.parametrize(
        ("source", "target", "reason"),
        [
            (2, 2, RejectReason.SELF_LOOP),
            (1, 2, RejectReason.DUPLICATE),
            (4, 1, RejectReason.CYCLE),
        ],
    )
    def test_rejected_edge_dispatches_nothing(
        self,
        controller: GraphInteractionController,
        dispatched: list[Any],
        source: int,
        target: int,
        reason: RejectReason,
    ) -> None:
        decision = controller.propose_edge({"id": source}, {"id": target})

        assert decision.reason == reason
        assert dispatched == []

    def test_legacy_guard_mode(self, dispatched: list[Any]) -> None:
        graph = build_graph([TaskRecord(id=1, successor_ids=(2,)), TaskRecord(id=2)])
        controller = GraphInteractionController(graph, dispatched.append, guard_mode="legacy")

        assert controller.propose_edge({"id": 2}, {"id": 1}).accepted
        assert dispatched == [AddDependency(from_id=2, to_id=1)]

    def test_malformed_target(self, controller: GraphInteractionController, dispatched: list[Any]) -> None:
        with pytest.raises(MalformedPayloadError):
            controller.propose_edge({"id": 2}, {"id": None})
        assert dispatched == []


def test_command_serialization() -> None:
    assert FocusTask(5).to_dict() == {"type": "viewer/FOCUS_TODO", "payload": {"id": 5}}
    assert RemoveDependency(1, 2).to_dict() == {
        "type": "todos/REMOVE_DEPENDENCE",
        "payload": {"fromId": 1, "toId": 2},
    }
    assert AddDependency(3, 4).to_dict() == {
        "type": "todos/ADD_DEPENDENCE",
        "payload": {"fromId": 3, "toId": 4},
    }
