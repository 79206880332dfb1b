"""Pytest fixtures for git-worktree-keeper tests"""
import importlib
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from git_worktree_keeper.config import Config
from git_worktree_keeper.ui.prompts import WorktreeSelector


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing (symlinks resolved)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def home_dir(temp_dir):
    """An isolated HOME; managed worktrees live in <home>/worktrees."""
    home = temp_dir / "home"
    home.mkdir()
    return home


@pytest.fixture
def config(home_dir):
    """Configuration pointing at the isolated HOME, with no install step."""
    return Config(home=str(home_dir), install_command=[])


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository named `project` with one commit on main."""
    repo_path = temp_dir / "project"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    (repo_path / "README.md").write_text("# Test Repository\n")
    repo.git.add("README.md")
    repo.git.commit("-m", "Initial commit")
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def linked_worktree(git_repo, home_dir):
    """A managed worktree for `feature/test` at <home>/worktrees/project__feature_test."""
    path = home_dir / "worktrees" / "project__feature_test"
    path.parent.mkdir(parents=True, exist_ok=True)
    git_repo.git.worktree("add", "-b", "feature/test", str(path))
    return path


@pytest.fixture
def mock_selector():
    """A selector whose prompts are mocks; confirmations answer yes."""
    selector = Mock(spec=WorktreeSelector)
    selector.confirm.return_value = True
    return selector


@pytest.fixture
def cli_env(monkeypatch, home_dir):
    """Environment for running the CLI: isolated HOME, no install step, no TTY."""
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("GIT_WORKTREE_INSTALL_COMMAND", "")
    monkeypatch.delenv("SHELL", raising=False)
    monkeypatch.setattr("git_worktree_keeper.ui.prompts.has_terminal", lambda: False)
    monkeypatch.setattr(importlib.import_module("git_worktree_keeper.cli.main"), "has_terminal", lambda: False)
    return home_dir

