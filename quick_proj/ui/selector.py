"""Interactive project picker and display helpers."""

from __future__ import annotations

import os
from pathlib import Path

import questionary

from quick_proj.domain.models import Project, ProjectSet


def printable(text: str) -> str:
    """Make filesystem text safe to write to a UTF-8 terminal.

    Names that are not valid UTF-8 carry their raw bytes as surrogate
    escapes; those bytes are shown as replacement characters.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def shorten_home_path(path: str) -> str:
    """Replace a leading home directory with ``~``."""
    home = os.path.expanduser("~").rstrip(os.sep)
    if home and (path == home or path.startswith(home + os.sep)):
        return "~" + path[len(home) :]
    return path


def display_path(path: Path) -> str:
    return printable(shorten_home_path(str(path)))


def format_project_item(project: Project) -> str:
    return f"{printable(project.name)}  ({display_path(project.path)})"


class QuestionarySelector:
    """Selector backed by a questionary list with type-to-filter search."""

    def __init__(self, message: str = "Select a project") -> None:
        self.message = message

    def select(self, projects: ProjectSet) -> Project | None:
        if not projects:
            return None

        choices = [
            questionary.Choice(title=format_project_item(project), value=project)
            for project in projects
        ]
        # ask() turns Ctrl-C into None, which is the cancelled outcome.
        return questionary.select(
            self.message,
            choices=choices,
            use_search_filter=True,
            use_jk_keys=False,
            instruction="(type to filter, Enter to open, Ctrl-C to cancel)",
        ).ask()
