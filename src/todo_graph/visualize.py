"""Text renderings of a laid-out graph for the terminal."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .graph.builder import Graph
from .graph.projector import to_coordinates
from .models import NodeStatus

_STATUS_STYLE = {
    NodeStatus.DONE: "[green]DONE[/green]",
    NodeStatus.ACTIONABLE: "[yellow]ACTIONABLE[/yellow]",
    NodeStatus.BLOCKED: "[red]BLOCKED[/red]",
}


def render_layout_table(graph: Graph) -> str:
    """Render every node's slot and status as a table.

    Returns:
        The table as plain text.
    """
    console = Console(record=True, width=100)

    table = Table(title="Task Graph Layout", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Layer", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Status", style="bold")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")

    for node in sorted(graph.nodes, key=lambda n: (n.layer, n.column)):
        x, y = to_coordinates(node.layer, node.column)
        status = _STATUS_STYLE.get(node.status, str(node.status)) if node.status else "-"
        table.add_row(
            str(node.task_id),
            escape(node.task.text[:40]),
            str(node.layer),
            str(node.column),
            status,
            str(x),
            str(y),
        )

    console.print(table)
    return console.export_text()


def render_layer_summary(graph: Graph) -> str:
    """List nodes layer by layer with their predecessors."""
    console = Console(record=True, width=100)

    layers = graph.layers()
    console.print("\n[bold]Task Graph[/bold]")
    console.print(f"Tasks: {len(graph.nodes)}")
    console.print(f"Dependencies: {len(graph.edges)}")
    console.print(f"Layers: {len(layers)}")
    console.print()

    for depth, layer_nodes in enumerate(layers):
        console.print(f"[bold cyan]Layer {depth}:[/bold cyan] ({len(layer_nodes)} task(s))")
        for node in sorted(layer_nodes, key=lambda n: n.column):
            parent_ids = sorted(graph.nodes[p].task_id for p in node.parents)
            if parent_ids:
                deps = ", ".join(str(p) for p in parent_ids)
                console.print(f"  • {node.task_id} [dim](after: {deps})[/dim]")
            else:
                console.print(f"  • {node.task_id}")
            console.print(f"    {escape(node.task.text[:80])}")
        console.print()

    return console.export_text()
