"""Path helpers used by every safety check.

Worktree paths are always compared in canonical form, never as raw strings,
so that symlinked prefixes (``/tmp`` vs ``/private/tmp``) compare equal.
"""

import os
import re
import shutil
from typing import List

from git_worktree_keeper.constants import ENV_FILE_PREFIX
from git_worktree_keeper.exceptions import InvalidBranchNameError
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)

_UNSAFE_BRANCH_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def canonicalize_path(value: str) -> str:
    """Return a canonical absolute path, even for paths that do not exist yet.

    The deepest existing ancestor has its symlinks resolved; the missing
    trailing segments are re-appended unchanged.
    """
    current = os.path.abspath(value)
    missing: List[str] = []

    while not os.path.exists(current):
        parent = os.path.dirname(current)
        if parent == current:
            # Reached the filesystem root without finding anything
            break
        missing.append(os.path.basename(current))
        current = parent

    if os.path.exists(current):
        current = os.path.realpath(current)

    for name in reversed(missing):
        current = os.path.join(current, name)
    return current


def is_safe_worktree_path(root: str, target: str) -> bool:
    """Check whether `target` is `root` itself or lies inside it."""
    resolved_root = canonicalize_path(root)
    resolved_target = canonicalize_path(target)
    if resolved_target == resolved_root:
        return True
    prefix = resolved_root if resolved_root.endswith(os.sep) else resolved_root + os.sep
    return resolved_target.startswith(prefix)


def normalize_branch(branch: str) -> str:
    """Turn a branch name into a filesystem-safe directory slug.

    Every run of characters outside ``[A-Za-z0-9._-]`` collapses to a single
    underscore.

    Raises:
        InvalidBranchNameError: if the branch is empty or the slug is ``.``/``..``
    """
    trimmed = (branch or "").strip()
    if not trimmed:
        raise InvalidBranchNameError(branch, "Branch name is required.")

    sanitized = _UNSAFE_BRANCH_CHARS.sub("_", trimmed)
    if sanitized in ("", ".", ".."):
        raise InvalidBranchNameError(branch)
    return sanitized


def copy_env_files(from_dir: str, to_dir: str) -> List[str]:
    """Copy every regular ``.env*`` file from the top of `from_dir` into `to_dir`.

    Existing files in `to_dir` are overwritten.

    Returns:
        Names of the copied files
    """
    copied = []
    with os.scandir(from_dir) as entries:
        for entry in entries:
            if not entry.is_file(follow_symlinks=False):
                continue
            if not entry.name.startswith(ENV_FILE_PREFIX):
                continue
            shutil.copyfile(entry.path, os.path.join(to_dir, entry.name))
            copied.append(entry.name)

    if copied:
        logger.debug(f"Copied {', '.join(sorted(copied))} into {to_dir}")
    return copied
