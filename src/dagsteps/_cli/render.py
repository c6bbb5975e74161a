"""Rich rendering utilities for ordering commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from dagsteps._models import TopologyOrder


def render_layers(layers: list[list[Any]], console: Console) -> None:
    """Render layered order as a Rich table.

    Args:
        layers: Layers as returned by ``Graph.layers()``.
        console: Rich Console to output to.

    """
    if not layers:
        console.print("[dim]Graph is empty[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Layer", justify="right", style="bold")
    table.add_column("Nodes")

    for index, layer in enumerate(layers):
        table.add_row(str(index), ", ".join(escape(str(node)) for node in layer))

    console.print(table)
    console.print(f"\n[dim]Total: {sum(len(layer) for layer in layers)} nodes in {len(layers)} layers[/dim]")


def render_steps(order: list[TopologyOrder[Any]], console: Console) -> None:
    """Render hierarchical steps as a Rich table, indented by branch level.

    Args:
        order: Records as returned by ``Graph.hierarchical_order()``.
        console: Rich Console to output to.

    """
    if not order:
        console.print("[dim]Graph is empty[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Step", style="bold")
    table.add_column("Level", justify="right", style="dim")
    table.add_column("Node")
    table.add_column("Label", style="yellow")

    for record in order:
        table.add_row(
            record.step,
            str(record.level),
            "  " * record.level + escape(str(record.node)),
            escape(record.from_link_label or ""),
        )

    console.print(table)
