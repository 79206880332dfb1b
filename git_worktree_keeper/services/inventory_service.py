"""Builds the per-invocation picture of a repository's worktrees."""

import os
import stat
from typing import List, Optional

from git_worktree_keeper.config import Config
from git_worktree_keeper.constants import MANAGED_SEPARATOR
from git_worktree_keeper.exceptions import InvalidBranchNameError, NoWorktreesError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import RepoInfo, WorktreeEntry
from git_worktree_keeper.services.git.operations import GitOperations
from git_worktree_keeper.services.git.porcelain import parse_worktree_porcelain
from git_worktree_keeper.utils.paths import (
    canonicalize_path,
    is_safe_worktree_path,
    normalize_branch,
)

logger = get_logger(__name__)


def has_git_directory(worktree_path: str) -> bool:
    """True when <path>/.git is a real directory rather than a gitlink file."""
    try:
        mode = os.lstat(os.path.join(worktree_path, ".git")).st_mode
    except OSError:
        return False
    return stat.S_ISDIR(mode)


def mark_main_worktree(worktrees: List[WorktreeEntry]) -> WorktreeEntry:
    """Flag the main worktree and return it.

    Bare entries are always main; otherwise the entry owning a real .git
    directory. If nothing qualifies the first entry is forced to be main,
    which can pick an arbitrary worktree in unusual bare layouts.
    """
    for entry in worktrees:
        entry.is_main = entry.bare or has_git_directory(entry.path)

    main = next((entry for entry in worktrees if entry.is_main), None)
    if main is None:
        main = worktrees[0]
        logger.warning(f"Could not identify the main worktree; assuming {main.path}")
    main.is_main = True
    return main


def is_managed(entry: WorktreeEntry, repo_name: str, worktrees_root: str) -> bool:
    """Whether a worktree follows the <root>/<repo>__<branch-slug> layout."""
    if entry.is_main:
        return False

    root = canonicalize_path(worktrees_root)
    path = canonicalize_path(entry.path)
    if path == root or not is_safe_worktree_path(root, path):
        return False

    prefix = f"{repo_name}{MANAGED_SEPARATOR}"
    name = os.path.basename(path)
    if not entry.branch:
        return name.startswith(prefix)
    try:
        return name == f"{prefix}{normalize_branch(entry.branch)}"
    except InvalidBranchNameError:
        return False


def find_current_worktree(
    worktrees: List[WorktreeEntry], cwd: str, toplevel: Optional[str]
) -> Optional[WorktreeEntry]:
    """Find the worktree containing `cwd`.

    Uses git's reported top-level when there is one; otherwise the entry with
    the longest path that contains `cwd`.
    """
    if toplevel:
        target = canonicalize_path(toplevel)
        for entry in worktrees:
            if canonicalize_path(entry.path) == target:
                return entry
        return None

    candidates = [entry for entry in worktrees if is_safe_worktree_path(entry.path, cwd)]
    if not candidates:
        return None
    return max(candidates, key=lambda entry: len(canonicalize_path(entry.path)))


class RepositoryInventory:
    """Assembles RepoInfo from live git state."""

    def __init__(self, config: Config, cwd: Optional[str] = None, git_ops: Optional[GitOperations] = None):
        """Initialize the inventory.

        Args:
            config: Configuration; supplies the worktrees root
            cwd: Working directory of the caller (defaults to os.getcwd())
            git_ops: Git command service bound to cwd
        """
        self.config = config
        self.cwd = os.path.abspath(cwd or os.getcwd())
        self.git = git_ops or GitOperations(self.cwd)

    def load(self) -> RepoInfo:
        """Build a fresh RepoInfo.

        Raises:
            NotInRepositoryError: if cwd is not inside a git repository
            NoWorktreesError: if git lists no worktrees
        """
        # Must precede every other git call
        git_dir = self.git.ensure_inside_repository()
        logger.debug(f"Git dir: {git_dir}")

        worktrees = parse_worktree_porcelain(self.git.list_worktrees_porcelain())
        if not worktrees:
            raise NoWorktreesError()

        main = mark_main_worktree(worktrees)
        current = find_current_worktree(worktrees, self.cwd, self.git.show_toplevel())

        repo_name = os.path.basename(main.path.rstrip(os.sep))
        worktrees_root = self.config.worktrees_root
        for entry in worktrees:
            entry.managed = is_managed(entry, repo_name, worktrees_root)

        logger.debug(f"Found {len(worktrees)} worktrees")
        for entry in worktrees:
            logger.debug(f"  {entry}")

        return RepoInfo(
            main_worktree=main,
            worktrees=worktrees,
            repo_name=repo_name,
            worktrees_root=worktrees_root,
            current_worktree_entry=current,
            cwd=self.cwd,
        )
