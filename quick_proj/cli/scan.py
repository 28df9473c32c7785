"""Scan command — list discovered projects without launching anything."""

from __future__ import annotations

import time

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from quick_proj.cli.common import get_state, load_config_or_exit, print_scan_errors
from quick_proj.engine.scanner import scan as run_scan
from quick_proj.engine.search import filter_projects
from quick_proj.ui.selector import display_path, printable

console = Console()


@click.command()
@click.option(
    "--max-depth",
    "-d",
    type=click.IntRange(min=0),
    default=None,
    help="Override the configured depth bound for this scan.",
)
@click.option(
    "--filter",
    "query",
    default=None,
    help="Only show projects whose name or path contains every term.",
)
@click.pass_context
def scan(ctx: click.Context, max_depth: int | None, query: str | None) -> None:
    """Scan the registered paths and print the projects found."""
    state = get_state(ctx)
    config = load_config_or_exit(state)

    if not config.root_paths:
        console.print("[yellow]⚠ No root paths configured.[/yellow]")
        return

    depth = max_depth if max_depth is not None else state.max_depth

    started = time.perf_counter()
    result = run_scan(config.policy(max_depth=depth))
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    print_scan_errors(result)

    projects = filter_projects(result.projects, query) if query else list(result.projects)
    if not projects:
        console.print("[yellow]No projects found.[/yellow]")
        console.print(f"Scan completed in [green]{elapsed_ms}ms[/green]")
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 1))
    table.add_column("Name", min_width=16, no_wrap=True)
    table.add_column("Marker", width=14, style="dim")
    table.add_column("Path", overflow="fold")

    for project in projects:
        table.add_row(
            f"[bold]{escape(printable(project.name))}[/bold]",
            escape(printable(project.marker)),
            escape(display_path(project.path)),
        )

    console.print("\n[bold]Projects[/bold]\n")
    console.print(table)
    console.print()

    shown = f"{len(projects)} of {len(result.projects)}" if query else str(len(projects))
    console.print(f"Total: [cyan]{shown}[/cyan] project(s)")
    console.print(f"Scan completed in [green]{elapsed_ms}ms[/green]")
