"""Parser for `git worktree list --porcelain`."""

from typing import List, Optional

from git_worktree_keeper.constants import BRANCH_REF_PREFIX
from git_worktree_keeper.models.worktree import WorktreeEntry


def branch_from_ref(ref: Optional[str]) -> Optional[str]:
    """Strip refs/heads/ from a branch ref."""
    if not ref:
        return None
    if ref.startswith(BRANCH_REF_PREFIX):
        return ref[len(BRANCH_REF_PREFIX):]
    return ref


def parse_worktree_porcelain(output: str) -> List[WorktreeEntry]:
    """Parse porcelain output into worktree entries, in output order.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name     (or a bare `detached` line)
        (blank line between worktrees)

    The bare repository entry carries a `bare` line instead of HEAD/branch.
    Unknown keys such as `locked` or `prunable` are ignored.
    """
    entries: List[WorktreeEntry] = []
    current: Optional[WorktreeEntry] = None

    for line in output.splitlines():
        line = line.rstrip("\r")
        if not line:
            continue

        key, _, value = line.partition(" ")

        if key == "worktree":
            if current is not None:
                entries.append(current)
            current = WorktreeEntry(path=value)
            continue

        # Anything before the first worktree line has no record to attach to
        if current is None:
            continue

        if key == "HEAD":
            current.head = value
        elif key == "branch":
            current.branch_ref = value
        elif key == "detached":
            current.detached = True
        elif key == "bare":
            current.bare = True

    # Last record has no trailing blank line
    if current is not None:
        entries.append(current)

    for entry in entries:
        entry.branch = branch_from_ref(entry.branch_ref)
        entry.detached = entry.detached or entry.branch is None

    return entries
