"""Git command service"""

from typing import Optional

import git

from git_worktree_keeper.exceptions import GitOperationError, NotInRepositoryError
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)


def _strip_decoration(text: Optional[str], label: str) -> str:
    """Undo GitPython's "\\n  stderr: '...'" decoration on captured output."""
    text = (text or "").strip()
    prefix = f"{label}: '"
    if text.startswith(prefix) and text.endswith("'"):
        text = text[len(prefix):-1]
    return text.strip()


def error_output(error: git.exc.GitCommandError) -> str:
    """Best human-readable output of a failed git command.

    Prefers stderr; falls back to stdout since `git merge` reports conflicts there.
    """
    stderr = _strip_decoration(getattr(error, "stderr", None), "stderr")
    if stderr:
        return stderr
    return _strip_decoration(getattr(error, "stdout", None), "stdout")


class GitOperations:
    """Runs git commands for one working directory.

    Every call is a blocking round trip to a git subprocess. Failures surface
    as GitOperationError carrying git's own error text; nothing is retried.
    """

    def __init__(self, cwd: str):
        """Initialize the service.

        Args:
            cwd: Directory git commands run in unless a call overrides it
        """
        self.cwd = cwd

    def _git(self, cwd: Optional[str] = None) -> git.Git:
        """Get a git command wrapper bound to a working directory."""
        return git.Git(cwd or self.cwd)

    def run(self, *args: str, cwd: Optional[str] = None) -> str:
        """Run `git <args>` and return its stdout.

        Raises:
            GitOperationError: if git exits non-zero or cannot be launched
        """
        operation = " ".join(args)
        logger.debug(f"git {operation} (cwd={cwd or self.cwd})")
        try:
            return self._git(cwd).execute(["git", *args])
        except git.exc.GitCommandError as e:
            message = error_output(e)
            logger.debug(f"git {operation} exited {e.status}: {message}")
            raise GitOperationError(operation, message or None) from e
        except git.exc.GitCommandNotFound as e:
            raise GitOperationError(operation, f"git executable not found: {e}") from e

    def _try(self, *args: str, cwd: Optional[str] = None) -> Optional[str]:
        """Run a git query whose non-zero exit is an answer, not an error."""
        try:
            return self._git(cwd).execute(["git", *args])
        except git.exc.GitCommandError as e:
            logger.debug(f"git {' '.join(args)} exited {e.status}")
            return None
        except git.exc.GitCommandNotFound as e:
            raise GitOperationError(" ".join(args), f"git executable not found: {e}") from e

    def ensure_inside_repository(self) -> str:
        """Return the absolute git dir, or fail if cwd is not in a repository."""
        git_dir = self._try("rev-parse", "--absolute-git-dir")
        if git_dir is None:
            raise NotInRepositoryError()
        return git_dir.strip()

    def list_worktrees_porcelain(self) -> str:
        return self.run("worktree", "list", "--porcelain")

    def show_toplevel(self) -> Optional[str]:
        """Top-level path of the working tree containing cwd.

        None when git cannot answer, e.g. inside a bare repository directory.
        """
        value = self._try("rev-parse", "--show-toplevel")
        if value is None:
            return None
        return value.strip() or None

    def branch_exists(self, branch: str, cwd: Optional[str] = None) -> bool:
        """Check whether refs/heads/<branch> exists."""
        return self._try("show-ref", "--verify", "--quiet", f"refs/heads/{branch}", cwd=cwd) is not None

    def current_branch(self, cwd: Optional[str] = None) -> str:
        """Name of the checked-out branch, or an empty string on a detached HEAD."""
        return self.run("branch", "--show-current", cwd=cwd).strip()

    def add_worktree(self, path: str, branch: str, create_branch: bool, cwd: Optional[str] = None) -> str:
        """Create a worktree at `path`, creating `branch` first when asked."""
        if create_branch:
            return self.run("worktree", "add", "-b", branch, path, cwd=cwd)
        return self.run("worktree", "add", path, branch, cwd=cwd)

    def remove_worktree(self, path: str, cwd: Optional[str] = None) -> str:
        return self.run("worktree", "remove", path, cwd=cwd)

    def delete_branch(self, branch: str, cwd: Optional[str] = None) -> str:
        """Delete a local branch with `git branch -d` (refuses unmerged branches)."""
        return self.run("branch", "-d", branch, cwd=cwd)

    def merge(self, branch: str, cwd: Optional[str] = None) -> str:
        return self.run("merge", branch, cwd=cwd)
