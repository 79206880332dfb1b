"""Command-line argument parsing for git-worktree-keeper."""

import argparse
from typing import List, Optional

from git_worktree_keeper.__version__ import __version__

PROG = "git-worktree"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. Unknown commands and flags are usage errors."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Manage linked git worktrees under ~/worktrees. "
        "Run without a command to pick a worktree interactively.",
        epilog="Set GIT_WORKTREE_INSTALL_COMMAND to change (or, when empty, skip) "
        "the dependency install step run in new worktrees.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    add_parser = subparsers.add_parser("add", help="Add a worktree for a branch")
    add_parser.add_argument("branch", help="Branch to check out (created if missing)")

    subparsers.add_parser("list", aliases=["ls"], help="List worktrees")

    remove_parser = subparsers.add_parser(
        "remove", aliases=["rm"], help="Remove a worktree (the current one if no branch is given)"
    )
    remove_parser.add_argument("branch", nargs="?", help="Branch whose worktree to remove")

    cd_parser = subparsers.add_parser("cd", help="Print worktree path for a branch")
    cd_parser.add_argument("branch", help="Branch whose worktree path to print")

    merge_parser = subparsers.add_parser(
        "merge", help="Merge a worktree's branch into the current branch and offer cleanup"
    )
    merge_parser.add_argument("branch", nargs="?", help="Branch to merge (prompted if omitted)")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
