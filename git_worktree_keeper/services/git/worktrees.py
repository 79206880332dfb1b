"""Worktree operations service for git-worktree-keeper."""

import os
from dataclasses import dataclass
from typing import List, Optional

from git_worktree_keeper.config import Config
from git_worktree_keeper.constants import MANAGED_SEPARATOR
from git_worktree_keeper.exceptions import (
    BranchCheckedOutError,
    BranchRequiredError,
    GitWorktreeKeeperError,
    InvalidBranchNameError,
    MainWorktreeProtectedError,
    SelfMergeError,
    UnsafeWorktreePathError,
    WorktreeExistsError,
    WorktreeNotFoundError,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import RepoInfo, WorktreeEntry
from git_worktree_keeper.services.display_service import format_worktree_list
from git_worktree_keeper.services.git.operations import GitOperations
from git_worktree_keeper.ui.prompts import WorktreeSelector
from git_worktree_keeper.utils.paths import (
    canonicalize_path,
    copy_env_files,
    is_safe_worktree_path,
    normalize_branch,
)
from git_worktree_keeper.utils.process import run_command

logger = get_logger(__name__)


@dataclass
class RemovalResult:
    """Outcome of removing a worktree."""

    path: str
    was_current: bool
    suggested_cd: Optional[str] = None


@dataclass
class MergeResult:
    """Outcome of the merge-and-cleanup flow."""

    target: WorktreeEntry
    merged: bool
    output: str = ""
    cleaned_up: bool = False


class WorktreeService:
    """Service for managing linked worktrees of one repository."""

    def __init__(
        self,
        info: RepoInfo,
        config: Config,
        git_ops: Optional[GitOperations] = None,
        selector: Optional[WorktreeSelector] = None,
    ):
        """Initialize the worktree service.

        Args:
            info: Repository snapshot for this invocation
            config: Configuration (install command, preferred branches)
            git_ops: Git command service bound to the caller's directory
            selector: Interactive prompts, used when no branch is given
        """
        self.info = info
        self.config = config
        self.git = git_ops or GitOperations(info.cwd or os.getcwd())
        self.selector = selector or WorktreeSelector()

    @property
    def main_path(self) -> str:
        return self.info.main_worktree.path

    def find_worktree_by_branch(self, branch: str) -> Optional[WorktreeEntry]:
        return self.info.find_by_branch(branch)

    def worktree_path_for(self, branch: str) -> str:
        """Managed location for `branch`: <root>/<repo>__<slug>."""
        slug = normalize_branch(branch)
        return os.path.join(self.info.worktrees_root, f"{self.info.repo_name}{MANAGED_SEPARATOR}{slug}")

    def add_worktree(self, branch: str, quiet: bool = False) -> str:
        """Create a managed worktree for `branch`.

        The branch is created from the current HEAD of the main worktree when
        it does not exist yet. `.env*` files from the main worktree are copied
        in and the install command is run.

        Args:
            branch: Branch to check out
            quiet: Keep stdout clean by sending command output to stderr

        Returns:
            Absolute path of the new worktree
        """
        branch = (branch or "").strip()
        worktree_path = self.worktree_path_for(branch)
        if not is_safe_worktree_path(self.info.worktrees_root, worktree_path):
            raise InvalidBranchNameError(branch)
        if os.path.exists(worktree_path):
            raise WorktreeExistsError(worktree_path)

        existing = self.find_worktree_by_branch(branch)
        if existing:
            raise BranchCheckedOutError(branch, existing.path)

        os.makedirs(os.path.dirname(worktree_path), exist_ok=True)
        has_branch = self.git.branch_exists(branch, cwd=self.main_path)
        output = self.git.add_worktree(worktree_path, branch, create_branch=not has_branch, cwd=self.main_path)
        if output:
            logger.debug(output)
        logger.info(f"Created worktree for {branch} at {worktree_path}")

        copy_env_files(self.main_path, worktree_path)

        if self.config.install_command:
            run_command(self.config.install_command, cwd=worktree_path, stdout_to_stderr=quiet)

        return worktree_path

    def list_worktrees(self) -> List[str]:
        """Aligned `<label>  <path>` lines, one per worktree."""
        return format_worktree_list(self.info)

    def resolve_worktree_path(self, branch: str) -> str:
        """Path of the worktree that has `branch` checked out."""
        entry = self.find_worktree_by_branch(branch)
        if entry is None:
            raise WorktreeNotFoundError(branch)
        return entry.path

    def _current_linked_worktree(self) -> WorktreeEntry:
        current = self.info.current_worktree_entry
        if current is None or current.is_main:
            raise BranchRequiredError()
        return current

    def _removable_worktree(self, branch: str) -> WorktreeEntry:
        entry = self.find_worktree_by_branch(branch)
        if entry is None:
            raise WorktreeNotFoundError(branch)
        if entry.is_main:
            raise MainWorktreeProtectedError(entry.path)
        return entry

    def _remove_entry(self, entry: WorktreeEntry) -> None:
        if entry.is_main:
            raise MainWorktreeProtectedError(entry.path)
        if not is_safe_worktree_path(self.info.worktrees_root, entry.path):
            raise UnsafeWorktreePathError(entry.branch or entry.path, self.info.worktrees_root)

        output = self.git.remove_worktree(entry.path, cwd=self.main_path)
        if output:
            logger.debug(output)
        logger.info(f"Removed worktree at {entry.path}")

    def suggest_cd_target(self, removed_path: str) -> str:
        """Where to go after `removed_path` disappears.

        The worktree of the first preferred branch (master, then main), else
        the main worktree. Never the removed path itself.
        """
        removed = canonicalize_path(removed_path)
        for branch in self.config.preferred_branches:
            entry = self.find_worktree_by_branch(branch)
            if entry and canonicalize_path(entry.path) != removed:
                return entry.path
        return self.main_path

    def remove_worktree(self, branch: Optional[str] = None) -> RemovalResult:
        """Remove the worktree for `branch`, or the current linked worktree.

        Raises:
            BranchRequiredError: no branch given and cwd is not a linked worktree
            WorktreeNotFoundError: no worktree has `branch` checked out
            MainWorktreeProtectedError: the target is the main worktree
            UnsafeWorktreePathError: the target lies outside the worktrees root
        """
        branch = (branch or "").strip()
        entry = self._removable_worktree(branch) if branch else self._current_linked_worktree()

        self._remove_entry(entry)

        was_current = self.info.is_current(entry)
        result = RemovalResult(path=entry.path, was_current=was_current)
        if was_current:
            result.suggested_cd = self.suggest_cd_target(entry.path)
        return result

    def choose_worktree(self) -> str:
        """Interactively pick a worktree (or create one) and return its path."""
        entry = self.selector.select_worktree(self.info)
        if entry is None:
            branch = self.selector.ask_branch_name()
            return self.add_worktree(branch, quiet=True)
        return entry.path

    def merge_worktree(self, branch: Optional[str] = None) -> MergeResult:
        """Merge another worktree's branch into the current branch.

        After a successful merge of a linked worktree inside the worktrees
        root, offers to remove the worktree and then delete its branch.
        """
        current_branch = self.git.current_branch()
        branch = (branch or "").strip()

        if branch:
            target = self.find_worktree_by_branch(branch)
            if target is None:
                raise WorktreeNotFoundError(branch)
        else:
            target = self.selector.select_merge_target(self.info, current_branch)

        target_branch = target.branch
        if not target_branch:
            raise GitWorktreeKeeperError(f"Worktree at {target.path} has no branch to merge.")
        if target_branch == current_branch:
            raise SelfMergeError(target_branch)

        if current_branch != self.config.merge_base_branch:
            into = current_branch or "a detached HEAD"
            if not self.selector.confirm(
                f"Current branch is {into}, not {self.config.merge_base_branch}. Merge {target_branch} anyway?"
            ):
                logger.info("Merge cancelled")
                return MergeResult(target=target, merged=False)

        output = self.git.merge(target_branch)
        logger.info(f"Merged {target_branch} into {current_branch or 'HEAD'}")
        result = MergeResult(target=target, merged=True, output=output)

        if target.is_main:
            return result

        if not is_safe_worktree_path(self.info.worktrees_root, target.path):
            logger.warning(
                f"Worktree {target.path} is outside {self.info.worktrees_root}, not removing it or its branch"
            )
            return result

        if not self.selector.confirm(f"Remove worktree {target.path} and delete branch {target_branch}?"):
            return result

        # The branch stays checked out until its worktree is gone
        self._remove_entry(target)
        self.git.delete_branch(target_branch)
        logger.info(f"Deleted branch {target_branch}")
        result.cleaned_up = True
        return result
