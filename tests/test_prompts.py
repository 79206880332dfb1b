"""Tests for interactive prompts"""
import io

import pytest
from rich.console import Console

from git_worktree_keeper.exceptions import (
    InteractiveRequiredError,
    NoMergeCandidatesError,
    SelectionCancelled,
)
from git_worktree_keeper.models.worktree import RepoInfo, WorktreeEntry
from git_worktree_keeper.ui import prompts
from git_worktree_keeper.ui.prompts import WorktreeSelector


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def selector(console):
    return WorktreeSelector(console)


@pytest.fixture
def interactive(monkeypatch):
    monkeypatch.setattr(prompts, "stdin_is_interactive", lambda: True)


@pytest.fixture
def info():
    main = WorktreeEntry(path="/repos/project", branch="main", is_main=True)
    feature = WorktreeEntry(path="/home/u/worktrees/project__feature_x", branch="feature/x", managed=True)
    detached = WorktreeEntry(path="/home/u/worktrees/project__old", detached=True, managed=True)
    return RepoInfo(
        main_worktree=main,
        worktrees=[main, feature, detached],
        repo_name="project",
        worktrees_root="/home/u/worktrees",
        current_worktree_entry=feature,
    )


class FakeAsk:
    """Stand-in for rich's Prompt.ask that records its keyword arguments."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    def __call__(self, *args, **kwargs):
        self.calls.append(kwargs)
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


class TestSelectWorktree:
    """Test the worktree picker."""

    def test_requires_tty(self, selector, info, monkeypatch):
        monkeypatch.setattr(prompts, "stdin_is_interactive", lambda: False)
        with pytest.raises(InteractiveRequiredError, match="git-worktree list"):
            selector.select_worktree(info)

    def test_picks_entry(self, selector, info, interactive, monkeypatch, console):
        ask = FakeAsk(1)
        monkeypatch.setattr(prompts.IntPrompt, "ask", ask)

        assert selector.select_worktree(info) is info.worktrees[0]
        # Every worktree plus "create new" is selectable; current is the default
        assert ask.calls[0]["choices"] == ["1", "2", "3", "4"]
        assert ask.calls[0]["default"] == 2

        output = console.file.getvalue()
        assert "main (main)" in output
        assert "feature/x (current)" in output
        assert "Create new worktree..." in output

    def test_create_new(self, selector, info, interactive, monkeypatch):
        monkeypatch.setattr(prompts.IntPrompt, "ask", FakeAsk(4))
        assert selector.select_worktree(info) is None

    def test_cancel(self, selector, info, interactive, monkeypatch):
        monkeypatch.setattr(prompts.IntPrompt, "ask", FakeAsk(KeyboardInterrupt()))
        with pytest.raises(SelectionCancelled):
            selector.select_worktree(info)

    def test_eof_cancels(self, selector, info, interactive, monkeypatch):
        monkeypatch.setattr(prompts.IntPrompt, "ask", FakeAsk(EOFError()))
        with pytest.raises(SelectionCancelled):
            selector.select_worktree(info)


class TestSelectMergeTarget:
    """Test the merge picker."""

    def test_disables_current_and_detached(self, selector, info, interactive, monkeypatch, console):
        ask = FakeAsk(1)
        monkeypatch.setattr(prompts.IntPrompt, "ask", ask)

        assert selector.select_merge_target(info, "feature/x") is info.worktrees[0]
        assert ask.calls[0]["choices"] == ["1"]

        output = console.file.getvalue()
        assert "already the current branch" in output
        assert "detached, cannot merge" in output

    def test_no_candidates(self, selector, interactive):
        only = WorktreeEntry(path="/repos/project", branch="main", is_main=True)
        info = RepoInfo(main_worktree=only, worktrees=[only], repo_name="project", worktrees_root="/w")
        with pytest.raises(NoMergeCandidatesError):
            selector.select_merge_target(info, "main")

    def test_requires_tty(self, selector, info, monkeypatch):
        monkeypatch.setattr(prompts, "stdin_is_interactive", lambda: False)
        with pytest.raises(InteractiveRequiredError):
            selector.select_merge_target(info, "main")


class TestAskBranchName:
    """Test branch name entry."""

    def test_reprompts_on_empty(self, selector, monkeypatch, console):
        monkeypatch.setattr(prompts.Prompt, "ask", FakeAsk("", "   ", " feature/new "))
        assert selector.ask_branch_name() == "feature/new"
        assert "Branch name is required." in console.file.getvalue()

    def test_cancel(self, selector, monkeypatch):
        monkeypatch.setattr(prompts.Prompt, "ask", FakeAsk(KeyboardInterrupt()))
        with pytest.raises(SelectionCancelled):
            selector.ask_branch_name()


class TestConfirm:
    """Test confirmations."""

    def test_auto_accepts_without_terminal(self, selector, monkeypatch):
        ask = FakeAsk(False)
        monkeypatch.setattr(prompts, "has_terminal", lambda: False)
        monkeypatch.setattr(prompts.Confirm, "ask", ask)

        assert selector.confirm("Proceed?") is True
        assert ask.calls == []

    def test_asks_with_terminal(self, selector, monkeypatch):
        ask = FakeAsk(False)
        monkeypatch.setattr(prompts, "has_terminal", lambda: True)
        monkeypatch.setattr(prompts.Confirm, "ask", ask)

        assert selector.confirm("Proceed?") is False
        assert ask.calls[0]["default"] is True

    def test_cancel(self, selector, monkeypatch):
        monkeypatch.setattr(prompts, "has_terminal", lambda: True)
        monkeypatch.setattr(prompts.Confirm, "ask", FakeAsk(EOFError()))
        with pytest.raises(SelectionCancelled):
            selector.confirm("Proceed?")
