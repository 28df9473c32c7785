"""Shared CLI state and error reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from quick_proj.config.store import YamlConfigStore
from quick_proj.domain.errors import ConfigError
from quick_proj.domain.interfaces import ConfigStore
from quick_proj.domain.models import Config, ScanResult
from quick_proj.ui.selector import printable

console = Console()


@dataclass
class CliState:
    """Per-invocation options set on the top-level group."""

    store: ConfigStore = field(default_factory=YamlConfigStore)
    editor: str | None = None
    max_depth: int | None = None


def get_state(ctx: click.Context) -> CliState:
    return ctx.ensure_object(CliState)


def load_config_or_exit(state: CliState) -> Config:
    try:
        return state.store.load()
    except ConfigError as err:
        _config_failure(err)
        raise SystemExit(1) from err


def save_config_or_exit(state: CliState, config: Config) -> Path:
    try:
        return state.store.save(config)
    except ConfigError as err:
        _config_failure(err)
        raise SystemExit(1) from err


def print_scan_errors(result: ScanResult) -> None:
    """Report unusable roots and skipped directories once per invocation."""
    for error in result.errors:
        console.print(
            f"[yellow]⚠ Skipped root {escape(printable(str(error.root)))}: "
            f"{escape(error.reason)}[/yellow]",
            soft_wrap=True,
        )
    if result.skipped_dirs:
        console.print(
            f"[dim]{result.skipped_dirs} unreadable director"
            f"{'y' if result.skipped_dirs == 1 else 'ies'} skipped "
            "(use -v for details)[/dim]"
        )


def _config_failure(err: ConfigError) -> None:
    console.print(f"[red]Configuration error:[/red] {escape(err.reason)}")
    console.print(f"[dim]Config file: {escape(printable(str(err.path)))}[/dim]", soft_wrap=True)
