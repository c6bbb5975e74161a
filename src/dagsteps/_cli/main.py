import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dagsteps._errors import CycleError, GraphError
from dagsteps._graph import Graph
from dagsteps._io import GraphFileError, export_order_to_toml, load_graph_from_toml

from .config import ConfigError, DagstepsConfig, get_config
from .render import render_layers, render_steps

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Dagsteps CLI."""
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


GraphArgument = Annotated[
    Path,
    typer.Argument(help="Path to a TOML graph description", exists=True, dir_okay=False),
]
NoCycleCheckOption = Annotated[
    bool,
    typer.Option("--no-cycle-check", help="Accept cyclic edges while loading; orderings then report the cycle"),
]


def _load_config() -> DagstepsConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_graph(path: Path, config: DagstepsConfig, *, no_cycle_check: bool) -> Graph[str]:
    check_cycles = config.check_cycles and not no_cycle_check
    logger.debug(f"Loading graph from {path} (check_cycles={check_cycles})")
    try:
        return load_graph_from_toml(path, check_cycles=check_cycles)
    except (GraphFileError, GraphError) as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _report_cycle(e: CycleError) -> None:
    err_console.print(f"[red]✗ {escape(str(e))}[/red]")
    for node in e.nodes:
        err_console.print(f"  [red]•[/red] {escape(str(node))}")


@app.command()
def check(
    graph_path: GraphArgument,
    *,
    no_cycle_check: NoCycleCheckOption = False,
) -> None:
    """Check that a graph description loads and is acyclic."""
    config = _load_config()
    graph = _load_graph(graph_path, config, no_cycle_check=no_cycle_check)

    table = Table(show_header=False)
    table.add_column("", style="bold")
    table.add_column("", justify="right", style="yellow")
    table.add_row("Nodes", str(len(graph)))
    table.add_row("Edges", str(len(graph.edges())))
    table.add_row("Leaves", str(len(graph.leaves())))
    err_console.print(Panel(table, title=f"[bold]{escape(graph_path.name)}[/bold]", border_style="cyan"))

    stuck = graph.find_cycle_nodes()
    if stuck:
        _report_cycle(CycleError(nodes=stuck))
        raise typer.Exit(code=1)

    err_console.print("[green]✓ Graph is valid[/green]")


@app.command()
def layers(
    graph_path: GraphArgument,
    *,
    no_cycle_check: NoCycleCheckOption = False,
) -> None:
    """Show the layered topological order."""
    config = _load_config()
    graph = _load_graph(graph_path, config, no_cycle_check=no_cycle_check)
    try:
        result = graph.layers()
    except CycleError as e:
        _report_cycle(e)
        raise typer.Exit(code=1) from e
    render_layers(result, out_console)


@app.command()
def topo(
    graph_path: GraphArgument,
    *,
    no_cycle_check: NoCycleCheckOption = False,
) -> None:
    """Print the flattened topological order, one node per line."""
    config = _load_config()
    graph = _load_graph(graph_path, config, no_cycle_check=no_cycle_check)
    try:
        result = graph.topological_order()
    except CycleError as e:
        _report_cycle(e)
        raise typer.Exit(code=1) from e
    for node in result:
        typer.echo(node)


@app.command()
def order(
    graph_path: GraphArgument,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Also write the steps to this TOML file"),
    ] = None,
    step_width: Annotated[
        int | None,
        typer.Option("--step-width", min=1, help="Minimum padding width of sorted steps"),
    ] = None,
    no_cycle_check: NoCycleCheckOption = False,
) -> None:
    """Show the hierarchical step numbering."""
    config = _load_config()
    graph = _load_graph(graph_path, config, no_cycle_check=no_cycle_check)
    width = step_width if step_width is not None else config.step_width
    try:
        result = graph.hierarchical_order(step_width=width)
    except CycleError as e:
        _report_cycle(e)
        raise typer.Exit(code=1) from e

    render_steps(result, out_console)

    if output is not None:
        export_order_to_toml(result, output)
        err_console.print(f"[cyan]Steps written to:[/cyan] {escape(str(output))}")


def main() -> None:
    app()
