"""Tests for the interactive selector and its display helpers."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from quick_proj.domain.models import Project, ProjectSet
from quick_proj.ui.selector import (
    QuestionarySelector,
    display_path,
    format_project_item,
    printable,
    shorten_home_path,
)

UNDECODABLE_NAME = b"caf\xe9".decode("utf-8", "surrogateescape")


class TestShortenHomePath:
    def test_home_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/dev")
        assert shorten_home_path("/home/dev/src/app") == "~/src/app"

    def test_home_itself(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/dev")
        assert shorten_home_path("/home/dev") == "~"

    def test_sibling_user_untouched(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/dev")
        assert shorten_home_path("/home/developer/app") == "/home/developer/app"

    def test_outside_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/dev")
        assert shorten_home_path("/opt/app") == "/opt/app"


def test_format_project_item(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", "/home/dev")
    project = Project.at(Path("/home/dev/test-project"), ".git")
    assert format_project_item(project) == "test-project  (~/test-project)"


class TestPrintable:
    def test_plain_text_untouched(self) -> None:
        assert printable("café") == "café"

    def test_undecodable_bytes_replaced(self) -> None:
        shown = printable(UNDECODABLE_NAME)
        assert shown == "caf\ufffd"
        shown.encode("utf-8")

    def test_display_path_shortens_and_cleans(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/dev")
        path = Path("/home/dev") / UNDECODABLE_NAME
        assert display_path(path) == "~/caf\ufffd"

    def test_format_project_item_is_encodable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/dev")
        project = Project.at(Path("/home/dev") / UNDECODABLE_NAME, ".git")
        assert format_project_item(project) == "caf\ufffd  (~/caf\ufffd)"


class TestQuestionarySelector:
    def test_empty_set_returns_none_without_prompt(self) -> None:
        with patch("quick_proj.ui.selector.questionary.select") as select:
            assert QuestionarySelector().select(ProjectSet()) is None
        select.assert_not_called()

    def test_returns_chosen_project(self) -> None:
        projects = ProjectSet([Project.at(Path("/a"), ".git"), Project.at(Path("/b"), ".git")])
        with patch("quick_proj.ui.selector.questionary.select") as select:
            select.return_value.ask.return_value = projects[1]
            chosen = QuestionarySelector().select(projects)
        assert chosen == projects[1]
        kwargs = select.call_args.kwargs
        assert kwargs["use_search_filter"] is True
        assert [c.value for c in kwargs["choices"]] == list(projects)

    def test_cancel_returns_none(self) -> None:
        projects = ProjectSet([Project.at(Path("/a"), ".git")])
        with patch("quick_proj.ui.selector.questionary.select") as select:
            select.return_value.ask.return_value = None
            assert QuestionarySelector().select(projects) is None
