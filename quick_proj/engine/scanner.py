"""Scanner service — concurrent, depth-bounded project discovery.

This is the entry point for the Discovery bounded context. Each directory
visit is an independent task on a bounded thread pool:

1. a directory whose base name is excluded is pruned outright;
2. otherwise it is listed once and the markers are tested in priority
   order; the first hit records a Project and stops descent;
3. otherwise, below the depth bound, its real (non-symlink) child
   directories are scheduled one level deeper.

Workers never wait on each other. The coordinator loop in ``scan()`` submits
children as their parent's visit completes, so fan-out is bounded by the
pool size regardless of how wide the tree is. Detections land in a shared
append-only sink; the ProjectSet built from it is deduplicated and sorted,
which makes the result independent of scheduling order.

Symlinked directories below a root are not followed, so cycles cannot keep
a scan alive. Roots themselves are resolved to their canonical form.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import threading
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path

from quick_proj.domain.errors import ScanError
from quick_proj.domain.models import PolicyModel, Project, ProjectSet, ScanResult

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[")


class DetectionSink:
    """Thread-safe, append-only collector shared by all scan workers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._projects: list[Project] = []
        self._skipped = 0

    def add(self, project: Project) -> None:
        with self._lock:
            self._projects.append(project)

    def record_skip(self) -> None:
        with self._lock:
            self._skipped += 1

    def snapshot(self) -> list[Project]:
        with self._lock:
            return list(self._projects)

    @property
    def skipped(self) -> int:
        with self._lock:
            return self._skipped


@dataclass(frozen=True)
class _Visit:
    path: Path
    depth: int


def default_worker_count() -> int:
    """Pool size used when the caller doesn't pick one: one per core."""
    return os.cpu_count() or 1


def match_marker(names: Iterable[str], markers: Iterable[str]) -> str | None:
    """Return the first marker (in priority order) present among ``names``.

    Markers containing glob characters (``*``, ``?``, ``[``) are matched
    against every name; all others must match an entry name exactly.
    """
    present = names if isinstance(names, (set, frozenset)) else set(names)
    for marker in markers:
        if _GLOB_CHARS.intersection(marker):
            if any(fnmatch.fnmatchcase(name, marker) for name in present):
                return marker
        elif marker in present:
            return marker
    return None


def scan(policy: PolicyModel, max_workers: int | None = None) -> ScanResult:
    """Discover projects under every root in ``policy``.

    Args:
        policy: Roots, marker priority, exclusions and depth bound.
        max_workers: Thread pool size. Defaults to the CPU count.

    Returns:
        ScanResult with the deduplicated, path-sorted ProjectSet, one
        ScanError per unusable root, and the number of unreadable
        directories that were skipped.
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    roots, errors = _resolve_roots(policy.root_paths)
    sink = DetectionSink()

    if roots:
        workers = max_workers or default_worker_count()
        logger.debug(
            "Scanning %d root(s) with %d worker(s), max_depth=%d",
            len(roots),
            workers,
            policy.max_depth,
        )
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="quick-proj-scan") as pool:
            pending = {pool.submit(_visit, _Visit(root, 0), policy, sink) for root in roots}
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    for child in future.result():
                        pending.add(pool.submit(_visit, child, policy, sink))

    projects = ProjectSet(sink.snapshot())
    logger.debug(
        "Scan finished: %d project(s), %d root error(s), %d unreadable dir(s)",
        len(projects),
        len(errors),
        sink.skipped,
    )
    return ScanResult(projects=projects, errors=tuple(errors), skipped_dirs=sink.skipped)


def _resolve_roots(root_paths: Iterable[Path]) -> tuple[list[Path], list[ScanError]]:
    """Canonicalise roots, dropping duplicates and recording unusable ones."""
    roots: list[Path] = []
    errors: list[ScanError] = []
    seen: set[Path] = set()

    for raw in root_paths:
        root = Path(raw).expanduser()
        try:
            canonical = root.resolve(strict=True)
        except (OSError, RuntimeError):
            logger.debug("Root %s does not exist", root)
            errors.append(ScanError(root, "path does not exist"))
            continue
        if not canonical.is_dir():
            logger.debug("Root %s is not a directory", root)
            errors.append(ScanError(root, "not a directory"))
            continue
        if canonical in seen:
            continue
        seen.add(canonical)
        roots.append(canonical)

    return roots, errors


def _visit(visit: _Visit, policy: PolicyModel, sink: DetectionSink) -> list[_Visit]:
    """Apply the per-directory decision procedure; return children to visit."""
    if visit.path.name in policy.exclude_dirs:
        return []

    try:
        with os.scandir(visit.path) as it:
            entries = list(it)
    except PermissionError as err:
        # Search without read permission: literal markers can still be probed.
        marker = _probe_literal_markers(visit.path, policy.project_markers)
        if marker is not None:
            sink.add(Project.at(visit.path, marker))
            return []
        logger.debug("Skipping unreadable directory %s: %s", visit.path, err)
        sink.record_skip()
        return []
    except OSError as err:
        logger.debug("Skipping unreadable directory %s: %s", visit.path, err)
        sink.record_skip()
        return []

    marker = match_marker({entry.name for entry in entries}, policy.project_markers)
    if marker is not None:
        sink.add(Project.at(visit.path, marker))
        return []

    if visit.depth >= policy.max_depth:
        return []

    children: list[_Visit] = []
    for entry in entries:
        if entry.name in policy.exclude_dirs:
            continue
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue
        if is_dir:
            children.append(_Visit(visit.path / entry.name, visit.depth + 1))
    return children


def _probe_literal_markers(directory: Path, markers: Iterable[str]) -> str | None:
    """Test non-glob markers by path existence, for directories that can't be listed."""
    for marker in markers:
        if _GLOB_CHARS.intersection(marker):
            continue
        candidate = directory / marker
        try:
            if candidate.exists() or candidate.is_symlink():
                return marker
        except OSError:
            continue
    return None
