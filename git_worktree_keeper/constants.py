"""Shared constants for git-worktree-keeper."""

# Directory under $HOME that holds managed worktrees
WORKTREES_DIR_NAME = "worktrees"

# <repoName>__<branch-slug>
MANAGED_SEPARATOR = "__"

# Default dependency install step for fresh worktrees
DEFAULT_INSTALL_COMMAND = ["bun", "install"]
INSTALL_COMMAND_ENV = "GIT_WORKTREE_INSTALL_COMMAND"

# Files copied from the main worktree root into new worktrees
ENV_FILE_PREFIX = ".env"

BRANCH_REF_PREFIX = "refs/heads/"

# Labels
DETACHED_LABEL = "(detached)"
TAG_MAIN = "main"
TAG_CURRENT = "current"
TAG_PLAIN = "plain"

CREATE_NEW_LABEL = "Create new worktree..."
CREATE_NEW_HINT = "Add a new worktree"

# Merge picker reasons for disabled entries
REASON_DETACHED = "detached, cannot merge"
REASON_CURRENT_BRANCH = "already the current branch"

# Debug log location, under $HOME
LOG_DIR_NAME = ".git-worktree-keeper"
LOG_FILE_NAME = "git-worktree-keeper.log"
