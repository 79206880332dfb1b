"""Configuration handling for git-worktree-keeper"""

import os
import shlex
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from git_worktree_keeper.constants import (
    DEFAULT_INSTALL_COMMAND,
    INSTALL_COMMAND_ENV,
    WORKTREES_DIR_NAME,
)
from git_worktree_keeper.exceptions import MissingEnvironmentError


@dataclass
class Config:
    """Configuration for git-worktree-keeper with validation."""

    # Environment
    home: str = ""
    shell: Optional[str] = None

    # Command run inside a freshly created worktree (empty list disables it)
    install_command: List[str] = field(default_factory=lambda: list(DEFAULT_INSTALL_COMMAND))

    # Where to suggest `cd`-ing after the current worktree is removed, in order
    preferred_branches: List[str] = field(default_factory=lambda: ["master", "main"])

    # Merging into any other branch asks for confirmation first
    merge_base_branch: str = "master"

    # Execution modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_home()
        self._validate_install_command()
        self._validate_preferred_branches()
        self._validate_merge_base_branch()

    def _validate_home(self):
        """Validate home is set and absolute."""
        if not self.home or not self.home.strip():
            raise MissingEnvironmentError("HOME")
        self.home = os.path.abspath(os.path.expanduser(self.home.strip()))

    def _validate_install_command(self):
        """Validate install_command is an argv list."""
        if not isinstance(self.install_command, list):
            raise ValueError("install_command must be a list")

    def _validate_preferred_branches(self):
        """Validate preferred_branches list."""
        if not isinstance(self.preferred_branches, list):
            raise ValueError("preferred_branches must be a list")

    def _validate_merge_base_branch(self):
        """Validate merge_base_branch is not empty."""
        if not self.merge_base_branch or not self.merge_base_branch.strip():
            raise ValueError("merge_base_branch cannot be empty")
        self.merge_base_branch = self.merge_base_branch.strip()

    @property
    def worktrees_root(self) -> str:
        """Directory holding every managed worktree."""
        return os.path.join(self.home, WORKTREES_DIR_NAME)

    def require_shell(self) -> str:
        """Return the user's shell, failing if SHELL was not set."""
        if not self.shell:
            raise MissingEnvironmentError("SHELL")
        return self.shell

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "home": self.home,
            "shell": self.shell,
            "install_command": self.install_command,
            "preferred_branches": self.preferred_branches,
            "merge_base_branch": self.merge_base_branch,
            "verbose": self.verbose,
            "debug": self.debug,
            "worktrees_root": self.worktrees_root,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "home",
            "shell",
            "install_command",
            "preferred_branches",
            "merge_base_branch",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Config":
        """Create Config from environment variables.

        HOME is required. SHELL is only checked when a shell is launched.
        GIT_WORKTREE_INSTALL_COMMAND replaces the install step; set it to an
        empty string to skip installing dependencies.
        """
        if environ is None:
            environ = os.environ

        values = {
            "home": environ.get("HOME", ""),
            "shell": environ.get("SHELL") or None,
        }
        if INSTALL_COMMAND_ENV in environ:
            values["install_command"] = shlex.split(environ[INSTALL_COMMAND_ENV])
        values.update(overrides)
        return cls(**values)
