"""Tests for the concurrent project scanner."""

from __future__ import annotations

import os
import threading
from pathlib import Path

import pytest

from quick_proj.domain.errors import ScanError
from quick_proj.domain.models import PolicyModel, Project
from quick_proj.engine.scanner import DetectionSink, match_marker, scan

MARKERS = (".git", "Cargo.toml", "package.json", "go.mod")


def _make_project(directory: Path, marker: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    if marker.startswith(".") and "." not in marker[1:]:
        (directory / marker).mkdir()
    else:
        (directory / marker).touch()
    return directory


def _policy(
    *roots: Path,
    max_depth: int = 4,
    markers: tuple[str, ...] = MARKERS,
    exclude: frozenset[str] = frozenset({"node_modules"}),
) -> PolicyModel:
    return PolicyModel(
        root_paths=tuple(roots),
        max_depth=max_depth,
        project_markers=markers,
        exclude_dirs=exclude,
    )


def _depth_below(path: Path, root: Path) -> int:
    return len(path.relative_to(root).parts)


@pytest.fixture()
def root(tmp_path: Path) -> Path:
    r = tmp_path / "r"
    r.mkdir()
    return r.resolve()


class TestScenarios:
    def test_single_git_project(self, root: Path) -> None:
        _make_project(root / "proj1", ".git")
        result = scan(_policy(root, markers=(".git", "Cargo.toml")))
        assert list(result.projects) == [Project(path=root / "proj1", name="proj1", marker=".git")]
        assert result.errors == ()

    def test_excluded_dir_pruned_before_marker_test(self, root: Path) -> None:
        _make_project(root / "node_modules", "Cargo.toml")
        result = scan(_policy(root))
        assert len(result.projects) == 0

    def test_overlapping_roots_report_once(self, root: Path) -> None:
        _make_project(root / "sub" / "proj2", "go.mod")
        result = scan(_policy(root, root / "sub"))
        assert result.projects.paths == [root / "sub" / "proj2"]

    def test_nested_project_not_reported(self, root: Path) -> None:
        outer = _make_project(root / "outer", ".git")
        _make_project(outer / "inner", "package.json")
        result = scan(_policy(root))
        assert len(result.projects) == 1
        assert result.projects[0].path == outer
        assert result.projects[0].marker == ".git"

    def test_depth_zero_without_root_marker(self, root: Path) -> None:
        _make_project(root / "proj", ".git")
        result = scan(_policy(root, max_depth=0))
        assert len(result.projects) == 0
        assert result.errors == ()


class TestMarkerPolicy:
    def test_priority_picks_lowest_index(self, root: Path) -> None:
        proj = root / "both"
        _make_project(proj, "package.json")
        _make_project(proj, "Cargo.toml")
        result = scan(_policy(root, markers=("Cargo.toml", "package.json")))
        assert result.projects[0].marker == "Cargo.toml"

        result = scan(_policy(root, markers=("package.json", "Cargo.toml")))
        assert result.projects[0].marker == "package.json"

    def test_root_itself_can_be_a_project(self, root: Path) -> None:
        _make_project(root, ".git")
        _make_project(root / "child", "go.mod")
        result = scan(_policy(root, max_depth=0))
        assert result.projects.paths == [root]
        assert result.projects[0].name == root.name

    def test_marker_can_be_a_file_or_directory(self, root: Path) -> None:
        (root / "a" / ".git").mkdir(parents=True)
        (root / "b").mkdir()
        (root / "b" / ".git").write_text("gitdir: ../.git/worktrees/b\n")
        result = scan(_policy(root))
        assert result.projects.paths == [root / "a", root / "b"]

    def test_glob_marker(self, root: Path) -> None:
        _make_project(root / "dotnet", "App.sln")
        result = scan(_policy(root, markers=(".git", "*.sln")))
        assert result.projects[0].marker == "*.sln"

    def test_no_markers_configured_finds_nothing(self, root: Path) -> None:
        _make_project(root / "proj", ".git")
        result = scan(_policy(root, markers=()))
        assert len(result.projects) == 0


class TestDepthAndExclusion:
    def test_project_at_depth_bound_is_found(self, root: Path) -> None:
        deep = _make_project(root / "a" / "b" / "c", ".git")
        assert scan(_policy(root, max_depth=3)).projects.paths == [deep]
        assert len(scan(_policy(root, max_depth=2)).projects) == 0

    def test_all_results_within_depth_bound(self, root: Path) -> None:
        for parts in [("p1",), ("x", "p2"), ("x", "y", "p3"), ("x", "y", "z", "p4")]:
            _make_project(root.joinpath(*parts), "go.mod")
        for depth in range(5):
            result = scan(_policy(root, max_depth=depth))
            assert all(_depth_below(p.path, root) <= depth for p in result.projects)
        assert len(scan(_policy(root, max_depth=4)).projects) == 4

    def test_no_result_passes_through_excluded_dir(self, root: Path) -> None:
        _make_project(root / "vendor" / "lib", "go.mod")
        _make_project(root / "src" / "vendor" / "dep", ".git")
        _make_project(root / "src" / "app", ".git")
        result = scan(_policy(root, exclude=frozenset({"vendor"})))
        assert result.projects.paths == [root / "src" / "app"]
        for project in result.projects:
            assert "vendor" not in project.path.relative_to(root).parts

    def test_excluded_root_is_pruned(self, root: Path) -> None:
        excluded = root / "build"
        _make_project(excluded / "proj", ".git")
        result = scan(_policy(excluded, exclude=frozenset({"build"})))
        assert len(result.projects) == 0


class TestResultShape:
    def test_sorted_by_path(self, root: Path) -> None:
        for name in ["zeta", "alpha", "Mid", "beta"]:
            _make_project(root / name, ".git")
        result = scan(_policy(root))
        assert result.projects.paths == sorted(result.projects.paths)

    def test_deterministic_across_worker_counts(self, root: Path) -> None:
        for i in range(12):
            _make_project(root / f"group{i % 3}" / f"proj{i}", MARKERS[i % len(MARKERS)])
        baseline = scan(_policy(root), max_workers=1).projects
        for workers in (2, 8):
            assert scan(_policy(root), max_workers=workers).projects == baseline
        assert len(baseline) == 12

    def test_empty_root_is_not_an_error(self, root: Path) -> None:
        (root / "empty" / "dirs").mkdir(parents=True)
        result = scan(_policy(root))
        assert len(result.projects) == 0
        assert result.errors == ()
        assert result.skipped_dirs == 0

    def test_same_root_twice_scanned_once(self, root: Path) -> None:
        _make_project(root / "proj", ".git")
        result = scan(_policy(root, root / "." / "proj" / ".."))
        assert len(result.projects) == 1

    def test_rejects_zero_workers(self, root: Path) -> None:
        with pytest.raises(ValueError):
            scan(_policy(root), max_workers=0)


class TestErrors:
    def test_missing_root_recorded_and_others_scanned(self, root: Path, tmp_path: Path) -> None:
        _make_project(root / "proj", ".git")
        missing = tmp_path / "missing"
        result = scan(_policy(missing, root))
        assert result.projects.paths == [root / "proj"]
        assert result.errors == (ScanError(missing, "path does not exist"),)

    def test_file_root_recorded(self, tmp_path: Path) -> None:
        a_file = tmp_path / "notes.txt"
        a_file.write_text("hello")
        result = scan(_policy(a_file))
        assert len(result.projects) == 0
        assert len(result.errors) == 1
        assert result.errors[0].reason == "not a directory"

    def test_unreadable_directory_is_skipped(
        self, root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _make_project(root / "locked" / "secret", ".git")
        _make_project(root / "open", ".git")
        locked = root / "locked"
        real_scandir = os.scandir

        def fake_scandir(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)
        result = scan(_policy(root))
        assert result.projects.paths == [root / "open"]
        assert result.skipped_dirs == 1
        assert result.errors == ()

    def test_unlistable_directory_still_matches_literal_marker(
        self, root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        locked = _make_project(root / "locked", "Cargo.toml")
        real_scandir = os.scandir

        def fake_scandir(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)
        result = scan(_policy(root))
        assert [(p.path, p.marker) for p in result.projects] == [(locked, "Cargo.toml")]
        assert result.skipped_dirs == 0

    def test_unlistable_directory_ignores_glob_markers(
        self, root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        locked = _make_project(root / "locked", "App.sln")
        real_scandir = os.scandir

        def fake_scandir(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)
        result = scan(_policy(root, markers=("*.sln",)))
        assert result.projects.paths == []
        assert result.skipped_dirs == 1


class TestSymlinks:
    @pytest.fixture(autouse=True)
    def _needs_symlinks(self, tmp_path: Path) -> None:
        probe = tmp_path / "probe"
        try:
            probe.symlink_to(tmp_path, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        probe.unlink()

    def test_symlinked_directories_not_followed(self, root: Path, tmp_path: Path) -> None:
        elsewhere = _make_project(tmp_path / "elsewhere" / "proj", ".git")
        (root / "link").symlink_to(elsewhere.parent, target_is_directory=True)
        result = scan(_policy(root))
        assert len(result.projects) == 0

    def test_symlink_cycle_terminates(self, root: Path) -> None:
        (root / "a").mkdir()
        (root / "a" / "loop").symlink_to(root, target_is_directory=True)
        _make_project(root / "a" / "proj", ".git")
        result = scan(_policy(root, max_depth=50))
        assert result.projects.paths == [root / "a" / "proj"]

    def test_symlinked_root_is_canonicalised(self, root: Path, tmp_path: Path) -> None:
        _make_project(root / "proj", ".git")
        alias = tmp_path / "alias"
        alias.symlink_to(root, target_is_directory=True)
        result = scan(_policy(alias, root))
        assert result.projects.paths == [root / "proj"]


class TestMatchMarker:
    def test_first_in_priority_order(self) -> None:
        assert match_marker({"go.mod", ".git"}, [".git", "go.mod"]) == ".git"
        assert match_marker({"go.mod", ".git"}, ["go.mod", ".git"]) == "go.mod"

    def test_none_when_absent(self) -> None:
        assert match_marker({"README.md"}, [".git"]) is None

    def test_literal_is_exact(self) -> None:
        assert match_marker({"makefile"}, ["Makefile"]) is None

    def test_glob(self) -> None:
        assert match_marker(["App.csproj", "Program.cs"], ["*.csproj"]) == "*.csproj"


class TestDetectionSink:
    def test_concurrent_appends_not_lost(self) -> None:
        sink = DetectionSink()

        def worker(n: int) -> None:
            for i in range(200):
                sink.add(Project.at(Path(f"/w{n}/p{i}"), ".git"))
                if i % 50 == 0:
                    sink.record_skip()

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(sink.snapshot()) == 1600
        assert sink.skipped == 32
