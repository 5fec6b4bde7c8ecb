"""Unit tests for filesystem path completion."""

import os

import pytest

from cmdhints.completion import PathCompleter, is_path_input
from cmdhints.domain.models import CandidateKind


@pytest.fixture
def workspace(tmp_path):
    root = tmp_path / "work"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "src" / "main.py").write_text("", encoding="utf-8")
    (root / "README.md").write_text("", encoding="utf-8")
    (root / "Scripts").mkdir()
    (root / ".env").write_text("", encoding="utf-8")
    (root / ".git").mkdir()
    return root


@pytest.fixture
def home(tmp_path):
    root = tmp_path / "home"
    (root / "projects").mkdir(parents=True)
    (root / "profile.txt").write_text("", encoding="utf-8")
    return root


@pytest.fixture
def completer(workspace, home):
    return PathCompleter(cwd=workspace, home=home)


def names(candidates):
    return [c.name for c in candidates]


class TestIsPathInput:
    @pytest.mark.parametrize("text", ["./", "../x", "/etc", "~/", "@src"])
    def test_path_like(self, text):
        assert is_path_input(text)

    @pytest.mark.parametrize("text", ["", "prod", ".hidden", "~user"])
    def test_not_path_like(self, text):
        assert not is_path_input(text)


class TestPathCompleter:
    def test_relative_keeps_prefix_and_marks_directories(self, completer):
        result = completer.complete("./s")

        assert names(result) == ["./Scripts/", "./src/"]
        assert all(c.kind is CandidateKind.DIRECTORY for c in result)

    def test_nested_directory(self, completer):
        result = completer.complete("./src/")

        by_name = {c.name: c.kind for c in result}
        assert by_name == {"./src/main.py": CandidateKind.FILE, "./src/pkg/": CandidateKind.DIRECTORY}

    def test_home_is_not_expanded_in_output(self, completer):
        assert names(completer.complete("~/pro")) == ["~/profile.txt", "~/projects/"]

    def test_at_notation_is_preserved(self, completer):
        assert names(completer.complete("@src/m")) == ["@src/main.py"]

    def test_bare_at_lists_working_directory(self, completer):
        assert "@README.md" in names(completer.complete("@"))

    def test_parent_relative(self, workspace):
        completer = PathCompleter(cwd=workspace / "src")
        assert names(completer.complete("../READ")) == ["../README.md"]

    def test_absolute_path(self, completer, workspace):
        prefix = f"{workspace}{os.sep}src{os.sep}ma"
        assert names(completer.complete(prefix)) == [f"{workspace}/src/main.py"]

    def test_hidden_entries_need_dot_prefix(self, completer):
        assert not any(name.startswith("./.") for name in names(completer.complete("./")))
        assert names(completer.complete("./.")) == ["./.env", "./.git/"]

    def test_missing_directory_yields_nothing(self, completer):
        assert completer.complete("./does/not/exist/") == []

    def test_file_used_as_directory_yields_nothing(self, completer):
        assert completer.complete("./README.md/x") == []

    def test_scores_favor_longer_prefix(self, completer):
        (short,) = completer.complete("./R")
        (longer,) = completer.complete("./READ")
        assert longer.score > short.score
