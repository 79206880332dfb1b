"""Custom exceptions for git-worktree-keeper"""

from typing import Optional


class GitWorktreeKeeperError(Exception):
    """Base exception for all git-worktree-keeper errors."""
    pass


class GitOperationError(GitWorktreeKeeperError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"git {operation} failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class CommandError(GitWorktreeKeeperError):
    """Exception raised when an external command (install, shell) fails."""

    def __init__(self, command: str, message: Optional[str] = None):
        self.command = command
        self.message = message
        super().__init__(message or f"{command} failed.")


class NotInRepositoryError(GitWorktreeKeeperError):
    """Exception raised when the working directory is outside any git repository."""

    def __init__(self):
        super().__init__("Current directory is not inside a git repository.")


class NoWorktreesError(GitWorktreeKeeperError):
    """Exception raised when git reports no worktrees at all."""

    def __init__(self):
        super().__init__("No git worktrees found.")


class MissingEnvironmentError(GitWorktreeKeeperError):
    """Exception raised when a required environment variable is unset."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is not set.")


class InvalidBranchNameError(GitWorktreeKeeperError):
    """Exception raised for branch names that cannot be turned into a directory name."""

    def __init__(self, branch: str, message: Optional[str] = None):
        self.branch = branch
        super().__init__(message or f"Invalid branch name: {branch}")


class WorktreeNotFoundError(GitWorktreeKeeperError):
    """Exception raised when no worktree has the requested branch checked out."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"No worktree found for branch {branch}.")


class WorktreeExistsError(GitWorktreeKeeperError):
    """Exception raised when the target worktree directory already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Worktree path already exists: {path}")


class BranchCheckedOutError(GitWorktreeKeeperError):
    """Exception raised when a branch is already checked out in another worktree."""

    def __init__(self, branch: str, path: str):
        self.branch = branch
        self.path = path
        super().__init__(f"Branch {branch} is already checked out at {path}.")


class BranchRequiredError(GitWorktreeKeeperError):
    """Exception raised when remove is called without a branch outside a linked worktree."""

    def __init__(self):
        super().__init__("Branch name is required when current directory is not a linked worktree.")


class MainWorktreeProtectedError(GitWorktreeKeeperError):
    """Exception raised when attempting to remove the main worktree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Refusing to remove main worktree at {path}.")


class UnsafeWorktreePathError(GitWorktreeKeeperError):
    """Exception raised when a worktree lies outside the managed worktrees root."""

    def __init__(self, label: str, root: str):
        self.label = label
        self.root = root
        super().__init__(f"Worktree for {label} is outside {root}.")


class SelfMergeError(GitWorktreeKeeperError):
    """Exception raised when asked to merge the current branch into itself."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Cannot merge {branch} into itself.")


class InteractiveRequiredError(GitWorktreeKeeperError):
    """Exception raised when a prompt is needed but stdin is not a terminal."""

    def __init__(self, hint: str = "Use `git-worktree list` instead."):
        super().__init__(f"Interactive mode requires a TTY. {hint}")


class NoMergeCandidatesError(GitWorktreeKeeperError):
    """Exception raised when no worktree branch can be merged."""

    def __init__(self):
        super().__init__("No worktree branches available to merge.")


class SelectionCancelled(GitWorktreeKeeperError):
    """Raised when the user aborts an interactive prompt. Not a failure."""

    def __init__(self):
        super().__init__("Cancelled.")
