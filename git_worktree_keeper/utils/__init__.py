"""Utility functions for git-worktree-keeper.

This package provides utility modules:
- paths: path canonicalization, containment checks and branch slugs
- process: running the install command and launching the user's shell
"""

from .paths import (
    canonicalize_path,
    copy_env_files,
    is_safe_worktree_path,
    normalize_branch,
)
from .process import launch_shell, run_command

__all__ = [
    # Paths
    "canonicalize_path",
    "copy_env_files",
    "is_safe_worktree_path",
    "normalize_branch",
    # Processes
    "launch_shell",
    "run_command",
]
