"""Running non-git external commands."""

import os
import subprocess
import sys
from typing import List

from git_worktree_keeper.exceptions import CommandError
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)


def run_command(args: List[str], cwd: str, stdout_to_stderr: bool = False) -> None:
    """Run a command in `cwd`, streaming its output to the terminal.

    Args:
        args: Command and arguments
        cwd: Working directory for the command
        stdout_to_stderr: Send the command's stdout to our stderr, keeping our
            stdout free for a path that the caller will print

    Raises:
        CommandError: if the command cannot be launched or exits non-zero
    """
    display = " ".join(args)
    logger.debug(f"Running {display} in {cwd}")
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            stdout=sys.stderr if stdout_to_stderr else None,
        )
    except OSError as e:
        raise CommandError(display, f"Failed to launch {display}: {e}") from e

    if result.returncode != 0:
        raise CommandError(display)


def launch_shell(shell: str, cwd: str) -> None:
    """Start an interactive `shell` whose working directory is `cwd`.

    Blocks until the shell exits.
    """
    name = os.path.basename(shell)
    logger.debug(f"Launching {shell} in {cwd}")
    try:
        result = subprocess.run([shell], cwd=cwd)
    except OSError as e:
        raise CommandError(name, f"Failed to launch {name}: {e}") from e

    if result.returncode < 0:
        raise CommandError(name, f"{name} exited due to signal {-result.returncode}.")
    if result.returncode != 0:
        raise CommandError(name, f"{name} exited with status {result.returncode}.")
