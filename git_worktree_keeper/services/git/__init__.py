"""Git-related services for git-worktree-keeper."""

from .operations import GitOperations
from .porcelain import parse_worktree_porcelain
from .worktrees import WorktreeService

__all__ = [
    "GitOperations",
    "WorktreeService",
    "parse_worktree_porcelain",
]
