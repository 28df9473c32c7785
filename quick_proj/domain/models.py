"""Core domain models for project discovery.

These models have ZERO dependencies on the filesystem walker, storage, CLI,
or any framework. The scanner consumes a PolicyModel and produces a
ScanResult; everything else is a thin collaborator around that exchange.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import overload

from quick_proj.domain.errors import ScanError

DEFAULT_EDITOR = "code"


@dataclass(frozen=True)
class PolicyModel:
    """What to scan and how. Read-only for the whole scan.

    Built from Config once per invocation and passed explicitly into
    ``scan()``; the scanner never reads configuration on its own.
    """

    root_paths: tuple[Path, ...]
    """Traversal start points, duplicate-free, in configured order."""

    max_depth: int
    """Directory levels below a root that may be visited (0 = root only)."""

    project_markers: tuple[str, ...]
    """Marker patterns in priority order; the first one present wins."""

    exclude_dirs: frozenset[str] = frozenset()
    """Directory base names that are never entered."""

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValueError(f"max_depth must be an integer, got {self.max_depth!r}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


@dataclass(frozen=True)
class Project:
    """A directory recognised as a project root."""

    path: Path
    """Canonical absolute path, also the dedup and sort key."""

    name: str
    marker: str
    """The highest-priority marker found directly inside ``path``."""

    @classmethod
    def at(cls, path: Path, marker: str) -> Project:
        return cls(path=path, name=path.name or str(path), marker=marker)


class ProjectSet:
    """Deduplicated, path-sorted sequence of Projects.

    Constructed fresh per scan and never mutated afterwards.
    """

    __slots__ = ("_projects",)

    def __init__(self, projects: Iterable[Project] = ()) -> None:
        unique: dict[Path, Project] = {}
        for project in projects:
            unique.setdefault(project.path, project)
        self._projects: tuple[Project, ...] = tuple(
            sorted(unique.values(), key=lambda p: p.path)
        )

    def __len__(self) -> int:
        return len(self._projects)

    def __iter__(self) -> Iterator[Project]:
        return iter(self._projects)

    def __bool__(self) -> bool:
        return bool(self._projects)

    @overload
    def __getitem__(self, index: int) -> Project: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Project, ...]: ...

    def __getitem__(self, index: int | slice) -> Project | tuple[Project, ...]:
        return self._projects[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectSet):
            return NotImplemented
        return self._projects == other._projects

    def __hash__(self) -> int:
        return hash(self._projects)

    def __repr__(self) -> str:
        return f"ProjectSet({list(self._projects)!r})"

    @property
    def paths(self) -> list[Path]:
        return [p.path for p in self._projects]


@dataclass(frozen=True)
class ScanResult:
    """Everything one scan produced.

    Root-level failures are collected rather than raised so that one bad
    root never hides the projects found under the others.
    """

    projects: ProjectSet
    errors: tuple[ScanError, ...] = ()
    skipped_dirs: int = 0
    """Directories whose listing failed mid-traversal (permissions, I/O)."""


@dataclass(frozen=True)
class Config:
    """The persisted configuration document."""

    root_paths: tuple[Path, ...] = ()
    editor: str | None = None
    max_depth: int = 4
    project_markers: tuple[str, ...] = ()
    exclude_dirs: tuple[str, ...] = ()

    def policy(self, max_depth: int | None = None) -> PolicyModel:
        """Build the scanner policy, optionally overriding the depth bound."""
        return PolicyModel(
            root_paths=self.root_paths,
            max_depth=self.max_depth if max_depth is None else max_depth,
            project_markers=self.project_markers,
            exclude_dirs=frozenset(self.exclude_dirs),
        )

    def resolve_editor(self, cli_editor: str | None = None) -> str:
        """Pick the editor: CLI flag, then config, then $EDITOR, then 'code'."""
        if cli_editor:
            return cli_editor
        if self.editor:
            return self.editor
        env_editor = os.environ.get("EDITOR", "").strip()
        if env_editor:
            return env_editor
        return DEFAULT_EDITOR
