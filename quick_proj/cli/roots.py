"""Root path commands for registering search directories."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from quick_proj.cli.common import get_state, load_config_or_exit, save_config_or_exit
from quick_proj.config.writer import add_root_path, remove_root_path
from quick_proj.ui.selector import display_path, printable

console = Console()


@click.command("add")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def add_cmd(ctx: click.Context, path: Path) -> None:
    """Register a directory to search for projects."""
    state = get_state(ctx)
    config = load_config_or_exit(state)

    try:
        config, added = add_root_path(config, path)
    except ValueError as err:
        console.print(f"[red]{escape(printable(str(err)))}[/red]", soft_wrap=True)
        raise SystemExit(1) from err

    if not added:
        console.print("[yellow]⚠ Path is already registered.[/yellow]")
        return

    save_config_or_exit(state, config)
    console.print(
        f"[bold green]✓[/bold green] Added: {escape(display_path(config.root_paths[-1]))}",
        soft_wrap=True,
    )


@click.command("remove")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def remove_cmd(ctx: click.Context, path: Path) -> None:
    """Unregister a search directory."""
    state = get_state(ctx)
    config = load_config_or_exit(state)

    config, removed = remove_root_path(config, path)
    if not removed:
        console.print("[yellow]⚠ Path not found in configuration.[/yellow]")
        return

    save_config_or_exit(state, config)
    console.print(f"[bold green]✓[/bold green] Removed: {escape(printable(str(path)))}", soft_wrap=True)


@click.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List the registered search directories."""
    config = load_config_or_exit(get_state(ctx))

    if not config.root_paths:
        console.print("[yellow]No root paths configured.[/yellow]\n")
        console.print("Add a path with:")
        console.print("  [cyan]quick-proj add[/cyan] [dim]<PATH>[/dim]")
        return

    console.print("\n[bold]Registered paths:[/bold]\n")
    for i, root in enumerate(config.root_paths, start=1):
        status = "[green]✓[/green]" if root.is_dir() else "[red]✗[/red]"
        console.print(f"  {status} {i}. {escape(display_path(root))}", soft_wrap=True)
    console.print()
