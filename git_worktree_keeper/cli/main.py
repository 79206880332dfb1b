"""Command-line entry point for git-worktree-keeper"""

import os
import sys
from typing import List, Optional

from rich.console import Console

from git_worktree_keeper.cli.args import parse_args
from git_worktree_keeper.config import Config
from git_worktree_keeper.exceptions import GitWorktreeKeeperError, SelectionCancelled
from git_worktree_keeper.logging_config import get_logger, setup_logging
from git_worktree_keeper.services.git.worktrees import WorktreeService
from git_worktree_keeper.services.inventory_service import RepositoryInventory
from git_worktree_keeper.ui.prompts import WorktreeSelector, has_terminal
from git_worktree_keeper.utils.process import launch_shell

# stdout carries paths for shell substitution; never wrap or highlight it
console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)
logger = get_logger(__name__)

REMOVE_ALIASES = ("remove", "rm")
LIST_ALIASES = ("list", "ls")


def _print(text: str) -> None:
    console.print(text, markup=False)


def run_command(args, config: Config, cwd: str) -> int:
    """Build the repository snapshot and run one command."""
    info = RepositoryInventory(config, cwd=cwd).load()
    service = WorktreeService(info, config, selector=WorktreeSelector(err_console))

    if args.command == "add":
        path = service.add_worktree(args.branch)
        _print(f"Worktree ready: {path}")
    elif args.command in LIST_ALIASES:
        for line in service.list_worktrees():
            _print(line)
    elif args.command in REMOVE_ALIASES:
        result = service.remove_worktree(args.branch)
        _print(f"Removed worktree: {result.path}")
        if result.suggested_cd:
            _print(f"cd {result.suggested_cd}")
    elif args.command == "cd":
        _print(service.resolve_worktree_path(args.branch))
    elif args.command == "merge":
        result = service.merge_worktree(args.branch)
        if not result.merged:
            err_console.print("Merge cancelled.", markup=False)
            return 0
        if result.output:
            _print(result.output)
        if result.cleaned_up:
            _print(f"Removed worktree {result.target.path} and branch {result.target.branch}")
    else:
        target = service.choose_worktree()
        if has_terminal():
            launch_shell(config.require_shell(), target)
        else:
            _print(target)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    # Usage errors exit 2 from argparse before anything else runs
    parsed_args = parse_args(argv)

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = Config.from_env(verbose=parsed_args.verbose, debug=parsed_args.debug)
        if parsed_args.debug:
            for key, value in config.to_dict().items():
                logger.debug(f"config {key}: {value}")
        return run_command(parsed_args, config, os.getcwd())
    except SelectionCancelled:
        return 0
    except KeyboardInterrupt:
        err_console.print("\nOperation cancelled by user", style="yellow", markup=False)
        return 1
    except GitWorktreeKeeperError as e:
        err_console.print(str(e), style="red", markup=False)
        if parsed_args.debug:
            err_console.print_exception()
        return 1
    except Exception as e:
        err_console.print(f"Error: {e}", style="red", markup=False)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
