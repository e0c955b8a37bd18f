"""Layered layout: longest-path layers and overlap-free columns."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from ..errors import DependencyCycleError

if TYPE_CHECKING:
    from .builder import Graph


def assign_layers(graph: Graph) -> list[int]:
    """Set each node's layer to its longest-path distance from any root.

    Roots get layer 0. Nodes are released in topological order (Kahn's
    algorithm, input order on ties) and each release relaxes its children.

    Returns:
        The layer of every node, by node index.

    Raises:
        DependencyCycleError: If some nodes are never released.
    """
    nodes = graph.nodes
    layers = [0] * len(nodes)
    in_degree = [len(node.parents) for node in nodes]
    queue = deque(node.index for node in nodes if in_degree[node.index] == 0)
    released = 0

    while queue:
        index = queue.popleft()
        released += 1
        for child in nodes[index].children:
            if layers[child] <= layers[index]:
                layers[child] = layers[index] + 1
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)

    if released != len(nodes):
        remaining = {i for i, degree in enumerate(in_degree) if degree > 0}
        raise DependencyCycleError(_find_cycle(graph, remaining))

    for node in nodes:
        node.layer = layers[node.index]
    return layers


def _find_cycle(graph: Graph, candidates: set[int]) -> list[int]:
    """Return one cycle among ``candidates`` as task ids.

    Iterative DFS with visit states: 0 = unvisited, 1 = visiting, 2 = visited.
    """
    state = {index: 0 for index in candidates}
    for start in sorted(candidates):
        if state[start]:
            continue
        path = [start]
        state[start] = 1
        stack = [iter(graph.nodes[start].children)]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                state[path.pop()] = 2
                continue
            if child not in state:
                continue
            if state[child] == 1:
                cycle = path[path.index(child):] + [child]
                return [graph.nodes[i].task_id for i in cycle]
            if state[child] == 0:
                state[child] = 1
                path.append(child)
                stack.append(iter(graph.nodes[child].children))
    # Nodes with leftover in-degree always contain a cycle.
    raise RuntimeError("no cycle found among unreleased nodes")


def assign_columns(graph: Graph) -> list[int]:
    """Place nodes left to right inside each layer.

    Within a layer, nodes are stably sorted by the rightmost column of their
    parents, then handed out columns from a running cursor that never moves
    left of that parent column. Columns in a layer are strictly increasing and
    a node is never left of any parent.

    Returns:
        The column of every node, by node index.
    """
    columns = [0] * len(graph.nodes)
    for layer_nodes in graph.layers():
        parent_max = {
            node.index: max((columns[p] for p in node.parents), default=0) for node in layer_nodes
        }
        cursor = 0
        for node in sorted(layer_nodes, key=lambda n: parent_max[n.index]):
            column = max(cursor, parent_max[node.index])
            columns[node.index] = column
            node.column = column
            cursor = column + 1
    return columns
