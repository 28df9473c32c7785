"""CLI entry point for quick-proj."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from quick_proj.cli.common import CliState
from quick_proj.cli.launch import open_project
from quick_proj.cli.roots import add_cmd, list_cmd, remove_cmd
from quick_proj.cli.scan import scan
from quick_proj.cli.settings import config_cmd, set_editor_cmd
from quick_proj.config.store import YamlConfigStore


@click.group(invoke_without_command=True)
@click.version_option(package_name="quick-proj")
@click.option(
    "--editor",
    "-e",
    default=None,
    help="Editor to open the project with (e.g. code, vim, nvim).",
)
@click.option(
    "--max-depth",
    "-d",
    type=click.IntRange(min=0),
    default=None,
    help="Override the configured search depth.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Use this config file instead of the default location.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    editor: str | None,
    max_depth: int | None,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """quick-proj — fast project launcher for developers.

    Scans registered directories for projects, lets you fuzzy-pick one and
    opens it in your editor. Run without a sub-command to pick a project.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.obj = CliState(
        store=YamlConfigStore(config_path),
        editor=editor,
        max_depth=max_depth,
    )

    if ctx.invoked_subcommand is None:
        open_project(ctx.obj)


cli.add_command(add_cmd)
cli.add_command(remove_cmd)
cli.add_command(list_cmd)
cli.add_command(scan)
cli.add_command(config_cmd)
cli.add_command(set_editor_cmd)
