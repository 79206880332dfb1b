"""
git-worktree-keeper - Manage linked git worktrees under a shared root
"""

from .__version__ import __version__
from .cli.main import main

__all__ = ["main", "__version__"]
