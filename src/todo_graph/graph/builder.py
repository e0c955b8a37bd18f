"""Build the node/edge graph for one task batch.

The graph is rebuilt from scratch on every task-list change. Nodes are stored
in a flat list in input order; parent/child relations are index collections
into that list.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Iterator

from loguru import logger

from ..errors import DataIntegrityError, UnknownTaskError
from ..models import Edge, Node, TaskRecord
from .layout import assign_columns, assign_layers
from .status import classify_statuses


class Graph:
    """Nodes and edges derived from an ordered task batch."""

    def __init__(self, nodes: list[Node], edges: list[Edge]):
        self.nodes = nodes
        self.edges = edges
        self._index_by_id = {node.task_id: node.index for node in nodes}
        self._edge_set = {(edge.source, edge.target) for edge in edges}

    @classmethod
    def from_tasks(cls, tasks: Iterable[TaskRecord]) -> "Graph":
        """Resolve successor ids into node indices.

        Raises:
            DataIntegrityError: If a successor id is absent from the batch or a
                task id appears twice. No graph is produced in that case.
        """
        records = list(tasks)
        index_by_id: dict[int, int] = {}
        for index, task in enumerate(records):
            if task.id in index_by_id:
                raise DataIntegrityError(f"Duplicate task id {task.id} in task batch")
            index_by_id[task.id] = index

        nodes = [Node(index=index, task=task) for index, task in enumerate(records)]
        edges: list[Edge] = []
        for node in nodes:
            for succ_id in node.task.successor_ids:
                child_index = index_by_id.get(succ_id)
                if child_index is None:
                    raise DataIntegrityError(
                        f"Task {node.task_id} depends on unknown task {succ_id}"
                    )
                if child_index in node.children:
                    logger.debug("Ignoring repeated successor {} on task {}", succ_id, node.task_id)
                    continue
                node.children.append(child_index)
                nodes[child_index].parents.add(node.index)
                edges.append(Edge(source=node.index, target=child_index))

        return cls(nodes, edges)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._index_by_id

    def index_of(self, task_id: int) -> int:
        try:
            return self._index_by_id[task_id]
        except KeyError:
            raise UnknownTaskError(f"Task {task_id} is not part of the graph") from None

    def node_for(self, task_id: int) -> Node:
        return self.nodes[self.index_of(task_id)]

    def has_edge(self, source_id: int, target_id: int) -> bool:
        """Return True if ``source_id -> target_id`` is already a dependency."""
        source = self._index_by_id.get(source_id)
        target = self._index_by_id.get(target_id)
        if source is None or target is None:
            return False
        return (source, target) in self._edge_set

    def roots(self) -> list[Node]:
        return [node for node in self.nodes if node.is_root]

    def layers(self) -> list[list[Node]]:
        """Group nodes by layer, input order preserved inside each layer."""
        if not self.nodes:
            return []
        buckets: dict[int, list[Node]] = defaultdict(list)
        for node in self.nodes:
            buckets[node.layer].append(node)
        return [buckets[layer] for layer in range(max(buckets) + 1)]

    def adjacency(self) -> list[list[int]]:
        """Copy of the child relation, one list per node index."""
        return [list(node.children) for node in self.nodes]

    def edge_ids(self, edge: Edge) -> tuple[int, int]:
        return self.nodes[edge.source].task_id, self.nodes[edge.target].task_id


def build_graph(tasks: Iterable[TaskRecord]) -> Graph:
    """Build and lay out the graph for a task batch.

    Runs the builder, then layer, column and status assignment.

    Raises:
        DataIntegrityError: On unresolved successor ids or duplicate task ids.
        DependencyCycleError: If the dependency relation contains a cycle.
    """
    graph = Graph.from_tasks(tasks)
    assign_layers(graph)
    assign_columns(graph)
    classify_statuses(graph)
    logger.debug(
        "Built graph: {} node(s), {} edge(s), {} layer(s)",
        len(graph.nodes),
        len(graph.edges),
        len(graph.layers()),
    )
    return graph
