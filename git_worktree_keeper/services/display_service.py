"""Labels and listings for worktrees"""
from typing import List

from git_worktree_keeper.constants import DETACHED_LABEL, TAG_CURRENT, TAG_MAIN, TAG_PLAIN
from git_worktree_keeper.models.worktree import RepoInfo, WorktreeEntry


def branch_label(entry: WorktreeEntry) -> str:
    return entry.branch or DETACHED_LABEL


def worktree_tags(info: RepoInfo, entry: WorktreeEntry) -> List[str]:
    """Tags shown next to a worktree in the picker."""
    tags = []
    if entry.is_main:
        tags.append(TAG_MAIN)
    if info.is_current(entry):
        tags.append(TAG_CURRENT)
    if not entry.is_main and not entry.managed:
        tags.append(TAG_PLAIN)
    return tags


def format_worktree_label(info: RepoInfo, entry: WorktreeEntry) -> str:
    """Picker label, e.g. ``feature/x (current)`` or ``main (main, current)``."""
    tags = worktree_tags(info, entry)
    if not tags:
        return branch_label(entry)
    return f"{branch_label(entry)} ({', '.join(tags)})"


def format_list_label(entry: WorktreeEntry) -> str:
    """Listing label: branch, marked ``(main)`` or ``(plain)`` where it applies."""
    label = branch_label(entry)
    if entry.is_main:
        return f"{label} ({TAG_MAIN})"
    if not entry.managed:
        return f"{label} ({TAG_PLAIN})"
    return label


def format_worktree_list(info: RepoInfo) -> List[str]:
    """One line per worktree with the path column aligned."""
    rows = [(format_list_label(entry), entry.path) for entry in info.worktrees]
    width = max((len(label) for label, _ in rows), default=0)
    return [f"{label.ljust(width + 2)}{path}" for label, path in rows]
