"""Tests for layer and column assignment."""

from __future__ import annotations

import pytest

from todo_graph.errors import DependencyCycleError
from todo_graph.graph.builder import Graph, build_graph
from todo_graph.graph.layout import _find_cycle, assign_layers
from todo_graph.models import TaskRecord


def _t(task_id: int, *succ: int, completed: bool = False) -> TaskRecord:
    return TaskRecord(id=task_id, text=f"task {task_id}", completed=completed, successor_ids=succ)


def _by_id(graph: Graph, attr: str) -> dict[int, int]:
    return {node.task_id: getattr(node, attr) for node in graph.nodes}


def _assert_layout_invariants(graph: Graph) -> None:
    for node in graph.nodes:
        if node.is_root:
            assert node.layer == 0
        else:
            assert node.layer == max(graph.nodes[p].layer for p in node.parents) + 1
        parent_max = max((graph.nodes[p].column for p in node.parents), default=0)
        assert node.column >= parent_max
    for layer_nodes in graph.layers():
        columns = [n.column for n in layer_nodes]
        assert len(set(columns)) == len(columns)


# ---------------------------------------------------------------------------
# Layers
# ---------------------------------------------------------------------------


def test_diamond_layers_and_columns() -> None:
    graph = build_graph([_t(1, 2, 3), _t(2, 4), _t(3, 4), _t(4)])

    assert _by_id(graph, "layer") == {1: 0, 2: 1, 3: 1, 4: 2}
    assert _by_id(graph, "column") == {1: 0, 2: 0, 3: 1, 4: 1}


def test_layer_is_longest_path_not_shortest() -> None:
    graph = build_graph([_t(1, 2, 3), _t(2, 3), _t(3)])

    assert _by_id(graph, "layer") == {1: 0, 2: 1, 3: 2}


def test_layers_independent_of_input_order() -> None:
    graph = build_graph([_t(3), _t(2, 3), _t(1, 2)])

    assert _by_id(graph, "layer") == {1: 0, 2: 1, 3: 2}


def test_disconnected_roots_share_layer_zero() -> None:
    graph = build_graph([_t(1), _t(2), _t(3)])

    assert _by_id(graph, "layer") == {1: 0, 2: 0, 3: 0}
    assert _by_id(graph, "column") == {1: 0, 2: 1, 3: 2}


def test_assign_layers_returns_index_list() -> None:
    graph = Graph.from_tasks([_t(1, 2), _t(2)])

    assert assign_layers(graph) == [0, 1]


def test_cycle_raises_with_offending_ids() -> None:
    with pytest.raises(DependencyCycleError) as excinfo:
        build_graph([_t(1, 2), _t(2, 1), _t(3)])

    assert excinfo.value.cycle == [1, 2, 1]
    assert "1 -> 2 -> 1" in str(excinfo.value)


def test_cycle_downstream_nodes_do_not_hide_cycle() -> None:
    with pytest.raises(DependencyCycleError) as excinfo:
        build_graph([_t(1, 2), _t(2, 3, 4), _t(3, 2), _t(4)])

    assert excinfo.value.cycle == [2, 3, 2]


def test_self_reference_in_input_is_a_cycle() -> None:
    with pytest.raises(DependencyCycleError) as excinfo:
        build_graph([_t(1, 1)])

    assert excinfo.value.cycle == [1, 1]


def test_cycle_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        build_graph([_t(1, 2), _t(2, 1)])


def test_find_cycle_without_cycle_is_an_internal_error() -> None:
    graph = Graph.from_tasks([_t(1, 2), _t(2)])

    with pytest.raises(RuntimeError, match="no cycle found"):
        _find_cycle(graph, {0, 1})


def test_long_chain_does_not_hit_recursion_limit() -> None:
    n = 5000
    tasks = [_t(i, i + 1) for i in range(1, n)] + [_t(n)]

    graph = build_graph(tasks)

    assert graph.node_for(n).layer == n - 1


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


def test_layer_sorted_by_rightmost_parent_column() -> None:
    # Layer 1 arrives as (3, 4) but 4 hangs under column 0, 3 under column 1.
    graph = build_graph([_t(1, 4), _t(2, 3), _t(3), _t(4)])

    assert _by_id(graph, "column") == {1: 0, 2: 1, 3: 1, 4: 0}


def test_column_jumps_to_parent_column() -> None:
    graph = build_graph([_t(1, 2, 3, 4), _t(2, 6), _t(3), _t(4, 5), _t(5), _t(6)])

    columns = _by_id(graph, "column")
    assert columns[2] == 0 and columns[3] == 1 and columns[4] == 2
    assert columns[6] == 0
    assert columns[5] == 2


def test_ties_keep_input_order() -> None:
    graph = build_graph([_t(1, 3, 2), _t(2), _t(3)])

    # Both children share parent column 0; input order puts 2 before 3.
    assert _by_id(graph, "column") == {1: 0, 2: 0, 3: 1}


def test_invariants_on_wider_graph() -> None:
    tasks = [
        _t(1, 4, 5),
        _t(2, 5, 6),
        _t(3, 7),
        _t(4, 8),
        _t(5, 8, 9),
        _t(6, 9),
        _t(7, 9),
        _t(8, 10),
        _t(9, 10),
        _t(10),
        _t(11, 10),
    ]
    graph = build_graph(tasks)

    _assert_layout_invariants(graph)
    assert graph.node_for(10).layer == 3
