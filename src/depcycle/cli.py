"""Command-line interface for depcycle."""

from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import load_config
from .observability import configure_logging
from .parser import EdgeFileParser
from .utils.exceptions import ConfigurationError, CyclicDependencyError, EdgeFileError
from .validator import DependencyValidator

app = typer.Typer(
    name="depcycle",
    help="depcycle - Detect cycles in dependency edge lists",
    add_completion=False,
)

console = Console()
logger = structlog.get_logger(__name__)


@app.command()
def check(
    edges_file: Path = typer.Argument(
        ..., help="CSV edge list (source,target)", exists=True, dir_okay=False
    ),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    fail_fast: bool | None = typer.Option(
        None, "--fail-fast/--no-fail-fast", help="Stop at the first cycle-closing edge"
    ),
    strict: bool | None = typer.Option(
        None, "--strict/--no-strict", help="Fail on the first invalid row"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Logging level"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
    dot_file: Path | None = typer.Option(
        None, "--dot", help="Write the graph in Graphviz DOT format"
    ),
) -> None:
    """
    Insert every edge of a file in order and report the first cycle.

    Edges are read from a CSV file with 'source' and 'target' columns.
    Exits with code 1 if a cycle is found or the file is invalid.

    Examples:
        depcycle check deps.csv
        depcycle check deps.csv --fail-fast
        depcycle check deps.csv --dot deps.dot
    """
    try:
        config = load_config(config_file)
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[red]ERROR: Could not load configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    if fail_fast is None:
        fail_fast = config.validation.fail_fast
    if strict is None:
        strict = config.validation.strict

    configure_logging(
        level=log_level or config.logging.level,
        json_logs=json_logs or config.logging.format == "json",
        log_file=config.logging.file,
    )

    console.print(f"\n[bold blue]Checking dependencies:[/bold blue] {edges_file}\n")

    with structlog.contextvars.bound_contextvars(edge_file=str(edges_file)):
        try:
            parser = EdgeFileParser(edges_file)
            rows = parser.parse(strict=strict)
        except EdgeFileError as e:
            console.print(f"[red]ERROR: Invalid edge file:[/red] {escape(str(e))}")
            raise typer.Exit(code=1) from e

        if parser.errors:
            console.print(
                f"[yellow]WARNING: Skipped {len(parser.errors)} invalid rows:[/yellow]"
            )
            console.print(escape(parser.get_error_summary()))
            console.print()

        validator = DependencyValidator(fail_fast=fail_fast)
        try:
            report = validator.add_rows(rows)
        except CyclicDependencyError as e:
            console.print(f"[red]FAIL: {escape(str(e))}[/red]")
            _write_dot(validator, dot_file)
            raise typer.Exit(code=1) from e

    table = Table(title="Dependency Graph")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Nodes", str(report.node_count))
    table.add_row("Edges", str(report.edge_count))
    table.add_row("Cyclic nodes", str(len(report.cyclic_nodes)))
    console.print(table)

    _write_dot(validator, dot_file)

    if report.has_cycle:
        console.print(f"\n[red]FAIL: Cycle closed by edge {escape(str(report.first_cycle))}[/red]")
        console.print(f"  Affected nodes: {escape(', '.join(report.cyclic_nodes))}")
        raise typer.Exit(code=1)

    console.print("\n[green]PASS: No cycles detected[/green]")


def _write_dot(validator: DependencyValidator, dot_file: Path | None) -> None:
    if dot_file is None:
        return
    dot_file.parent.mkdir(parents=True, exist_ok=True)
    dot_file.write_text(validator.graph.to_dot() + "\n", encoding="utf-8")
    console.print(f"[dim]Graph written to {dot_file}[/dim]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel.fit(
            "[bold]depcycle[/bold]\n\n"
            f"Version: [cyan]{__version__}[/cyan]\n"
            "Python: 3.11+\n\n"
            "[bold]Features:[/bold]\n"
            "- Incremental edge insertion\n"
            "- Kahn in-degree cycle detection after every edge\n"
            "- CSV edge lists with per-row validation\n"
            "- Graphviz DOT export",
            title="About",
            border_style="blue",
        )
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
