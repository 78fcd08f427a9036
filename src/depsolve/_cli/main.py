import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from depsolve._graph import CycleDetectedError, Graph, GraphFileError
from depsolve._io import export_solution_to_toml, load_graph_from_toml

from .config import ConfigError, DepsolveConfig, get_config
from .render import render_node_table, render_order_table, render_repairs

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

GraphArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to a TOML graph file (defaults to the graph entry in pyproject.toml)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Dependency graph solver CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> DepsolveConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_graph(path: Path | None, config: DepsolveConfig) -> Graph[str]:
    """Load the graph from the CLI path or the configured one."""
    effective_path = path if path is not None else config.graph
    if effective_path is None:
        err_console.print("[red]Error: Graph file required. Pass a path or configure \\[tool.depsolve].graph[/red]")
        raise typer.Exit(code=1)

    if not effective_path.is_file():
        err_console.print(f"[red]Error: Graph file not found: {effective_path}[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading graph from:[/cyan] {effective_path}")
    try:
        graph = load_graph_from_toml(effective_path)
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print(f"[cyan]Nodes:[/cyan] [bold]{len(graph)}[/bold]")
    return graph


@app.command()
def solve(
    path: GraphArgument = None,
    *,
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--no-strict", help="Fail on cycles instead of breaking them"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    show_repairs: Annotated[
        bool,
        typer.Option("--show-repairs", help="List the cycles that had to be broken"),
    ] = False,
) -> None:
    """Compute an execution order for a dependency graph."""
    config = _load_config()
    graph = _load_graph(path, config)

    effective_strict = strict if strict is not None else config.strict
    effective_output = output if output is not None else config.output

    try:
        report = graph.solve_report(strict=effective_strict)
    except CycleDetectedError as e:
        names = ", ".join(escape(str(graph[i])) for i in e.remaining)
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        err_console.print(f"  [dim]Unscheduled: {names}[/dim]")
        raise typer.Exit(code=1) from e

    if not report.is_acyclic:
        logger.warning(f"Broke {len(report.repairs)} cycle(s) to complete the order")

    err_console.print()
    render_order_table(graph, report, out_console)

    if show_repairs:
        out_console.print()
        render_repairs(graph, report, out_console)

    if effective_output is not None:
        export_solution_to_toml(graph, report, effective_output)
        err_console.print(f"[cyan]Solution written to:[/cyan] {effective_output}")


@app.command()
def check(path: GraphArgument = None) -> None:
    """Check whether a dependency graph is free of cycles."""
    config = _load_config()
    graph = _load_graph(path, config)
    err_console.print()

    self_loops = graph.self_loops()
    if self_loops:
        err_console.print("[yellow]⚠ Nodes depending on themselves:[/yellow]")
        for index in self_loops:
            err_console.print(f"  [yellow]•[/yellow] {escape(str(graph[index]))}")

    try:
        graph.solve(strict=True)
    except CycleDetectedError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        for index in e.remaining:
            err_console.print(f"  [red]•[/red] {escape(str(graph[index]))}")
        raise typer.Exit(code=1) from e

    err_console.print("[green]✓ Graph is acyclic[/green]")
    raise typer.Exit(code=0)


@app.command()
def show(path: GraphArgument = None) -> None:
    """List the nodes of a dependency graph with their edges."""
    config = _load_config()
    graph = _load_graph(path, config)
    err_console.print()
    render_node_table(graph, out_console)


def main() -> None:
    app()
