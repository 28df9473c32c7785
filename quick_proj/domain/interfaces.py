"""Collaborator interfaces around the scanner.

These are pure protocols. No YAML, terminal or subprocess details leak
into the domain. Tests substitute fakes for all three.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from quick_proj.domain.models import Config, Project, ProjectSet


class ConfigStore(Protocol):
    """Load and persist the configuration document."""

    @property
    def path(self) -> Path:
        """Where the configuration lives."""
        ...

    def load(self) -> Config:
        """Return the configuration. Raises ConfigError if malformed."""
        ...

    def save(self, config: Config) -> Path:
        """Persist the configuration and return the path written."""
        ...


class Selector(Protocol):
    """Let the user choose one project."""

    def select(self, projects: ProjectSet) -> Project | None:
        """Return the chosen project, or None if the user cancelled."""
        ...


class Launcher(Protocol):
    """Open a project directory in an editor."""

    def launch(self, editor: str, path: Path) -> int:
        """Start the editor on ``path`` and return its exit status.

        Raises LaunchError if the process could not be started.
        """
        ...
