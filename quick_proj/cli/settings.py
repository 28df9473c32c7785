"""Settings commands: show the resolved config, set the default editor."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from quick_proj.cli.common import get_state, load_config_or_exit, save_config_or_exit
from quick_proj.config.writer import set_editor
from quick_proj.launcher.editor import is_editor_available
from quick_proj.ui.selector import printable

console = Console()


@click.command("config")
@click.pass_context
def config_cmd(ctx: click.Context) -> None:
    """Show the config file location and the resolved settings."""
    state = get_state(ctx)
    path = state.store.path

    console.print("\n[bold]Configuration:[/bold]\n")
    console.print(f"  Path:   [cyan]{escape(printable(str(path)))}[/cyan]", soft_wrap=True)
    console.print(f"  Exists: {'[green]Yes[/green]' if path.exists() else '[yellow]No[/yellow]'}")

    config = load_config_or_exit(state)

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Setting", style="dim", width=16)
    table.add_column("Value")

    editor = (
        escape(config.editor)
        if config.editor
        else f"[dim](not set, using {escape(config.resolve_editor())})[/dim]"
    )
    table.add_row("Editor", editor)
    depth = str(config.max_depth)
    if state.max_depth is not None:
        depth += f" [dim](overridden to {state.max_depth})[/dim]"
    table.add_row("Max depth", depth)
    table.add_row("Root paths", str(len(config.root_paths)))
    table.add_row("Markers", escape(", ".join(config.project_markers)) or "[dim](none)[/dim]")
    table.add_row("Exclude", escape(", ".join(config.exclude_dirs)) or "[dim](none)[/dim]")

    console.print("\n[bold]Current settings:[/bold]\n")
    console.print(table)
    console.print()


@click.command("set-editor")
@click.argument("editor")
@click.pass_context
def set_editor_cmd(ctx: click.Context, editor: str) -> None:
    """Set the default editor (alias like 'vscode' or a command like 'code -n')."""
    state = get_state(ctx)
    config = load_config_or_exit(state)

    try:
        config = set_editor(config, editor)
    except ValueError as err:
        console.print(f"[red]{escape(str(err))}[/red]", soft_wrap=True)
        raise SystemExit(1) from err

    if not is_editor_available(editor):
        console.print(
            f"[yellow]⚠ Editor '{escape(editor)}' not found in PATH. Setting anyway.[/yellow]"
        )

    save_config_or_exit(state, config)
    console.print(
        f"[bold green]✓[/bold green] Default editor set to: [cyan]{escape(config.editor or '')}[/cyan]"
    )
