"""Default command — scan, pick a project, open it in the editor."""

from __future__ import annotations

import time

from rich.console import Console
from rich.markup import escape

from quick_proj.cli.common import CliState, load_config_or_exit, print_scan_errors
from quick_proj.domain.errors import LaunchError
from quick_proj.domain.interfaces import Launcher, Selector
from quick_proj.engine.scanner import scan as run_scan
from quick_proj.launcher.editor import SubprocessLauncher
from quick_proj.ui.selector import QuestionarySelector, printable

console = Console()


def open_project(state: CliState) -> None:
    """Scan the configured roots, let the user choose, launch the editor."""
    config = load_config_or_exit(state)

    if not config.root_paths:
        console.print("[yellow]⚠ No root paths configured.[/yellow]\n")
        console.print("Add a search path first:")
        console.print("  [cyan]quick-proj add[/cyan] [dim]~/src[/dim]")
        return

    started = time.perf_counter()
    result = run_scan(config.policy(max_depth=state.max_depth))
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    print_scan_errors(result)

    if not result.projects:
        console.print("[yellow]⚠ No projects found in registered paths.[/yellow]\n")
        console.print("Check if your paths contain projects with markers like:")
        console.print(f"  [dim]{escape(', '.join(config.project_markers[:4]))}, ...[/dim]")
        return

    console.print(
        f"\n[bold green]✓[/bold green] [cyan]{len(result.projects)}[/cyan] "
        f"project(s) found in {elapsed_ms}ms"
    )

    selector: Selector = QuestionarySelector()
    project = selector.select(result.projects)
    if project is None:
        console.print("\n[dim]Selection cancelled.[/dim]")
        return

    editor = config.resolve_editor(state.editor)
    launcher: Launcher = SubprocessLauncher()
    console.print(
        f"\nOpening [bold cyan]{escape(printable(project.name))}[/bold cyan] "
        f"with [green]{escape(editor)}[/green]..."
    )
    try:
        launcher.launch(editor, project.path)
    except LaunchError as err:
        console.print(f"[red]{escape(printable(str(err)))}[/red]", soft_wrap=True)
        console.print("[dim]Is the editor installed and on your PATH?[/dim]")
        raise SystemExit(1) from err
