"""Rich rendering utilities for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from depsolve._graph import Graph, SolveReport


def _names(graph: Graph[Any], indices: tuple[int, ...]) -> str:
    return ", ".join(escape(str(value)) for value in graph.values(indices))


def render_order_table(graph: Graph[Any], report: SolveReport, console: Console) -> None:
    """Render a solved order as a Rich table.

    Args:
        graph: The graph that was solved.
        report: The solve report to render.
        console: Rich Console to output to.

    """
    if not report.order:
        console.print("[dim]Graph has no nodes[/dim]")
        return

    repaired = {step.node for step in report.repairs}

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node", style="bold")
    table.add_column("Index", justify="right")
    table.add_column("Deps", justify="right")

    for position, index in enumerate(report.order, start=1):
        name = escape(str(graph[index]))
        if index in repaired:
            name = f"[yellow]{name}[/yellow]"
        table.add_row(str(position), name, str(index), str(len(graph.dependencies(index))))

    console.print(table)


def render_repairs(graph: Graph[Any], report: SolveReport, console: Console) -> None:
    """Render the cycle repairs of a solve report."""
    if report.is_acyclic:
        console.print("[green]✓ No cycles had to be broken[/green]")
        return

    console.print(f"[yellow]Broke {len(report.repairs)} cycle(s):[/yellow]")
    for step in report.repairs:
        node = escape(str(graph[step.node]))
        console.print(f"  [yellow]•[/yellow] {node} [dim]({step.remaining_inbound} inbound edge(s) cleared)[/dim]")
        console.print(f"    [dim]from: {_names(graph, step.cleared_from)}[/dim]")


def render_node_table(graph: Graph[Any], console: Console) -> None:
    """Render every node with its dependencies and dependents."""
    if not len(graph):
        console.print("[dim]Graph has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Index", justify="right", style="dim")
    table.add_column("Node", style="bold")
    table.add_column("Depends on")
    table.add_column("Dependents")

    for index in range(len(graph)):
        table.add_row(
            str(index),
            escape(str(graph[index])),
            _names(graph, graph.dependencies(index)) or "[dim]None[/dim]",
            _names(graph, graph.dependents(index)) or "[dim]None[/dim]",
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(graph)} nodes[/dim]")
