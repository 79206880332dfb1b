"""Worktree data models."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class WorktreeEntry:
    """One record of `git worktree list --porcelain`, plus derived flags."""

    path: str
    head: Optional[str] = None
    branch_ref: Optional[str] = None
    branch: Optional[str] = None  # branch_ref without refs/heads/, None when detached
    detached: bool = False
    bare: bool = False
    is_main: bool = False
    managed: bool = False

    def __str__(self) -> str:
        """String representation of worktree."""
        name = self.branch or "(detached)"
        main_marker = " (main)" if self.is_main else ""
        return f"{name} @ {self.path}{main_marker}"


@dataclass
class RepoInfo:
    """Snapshot of a repository's worktrees, built once per invocation."""

    main_worktree: WorktreeEntry
    worktrees: List[WorktreeEntry]
    repo_name: str
    worktrees_root: str
    current_worktree_entry: Optional[WorktreeEntry] = None
    cwd: str = field(default="")

    @property
    def current_worktree(self) -> Optional[str]:
        """Path of the worktree containing the working directory, if any."""
        if self.current_worktree_entry is None:
            return None
        return self.current_worktree_entry.path

    def find_by_branch(self, branch: str) -> Optional[WorktreeEntry]:
        """Return the worktree that has `branch` checked out."""
        for entry in self.worktrees:
            if entry.branch == branch:
                return entry
        return None

    def is_current(self, entry: WorktreeEntry) -> bool:
        return self.current_worktree_entry is not None and entry.path == self.current_worktree_entry.path
