"""Interactive prompts: worktree pickers, branch name entry and confirmations.

All prompts are drawn on stderr so stdout stays free for the selected path
(``cd "$(git-worktree)"``).
"""

import sys
from dataclasses import dataclass
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

from git_worktree_keeper.constants import (
    CREATE_NEW_HINT,
    CREATE_NEW_LABEL,
    REASON_CURRENT_BRANCH,
    REASON_DETACHED,
)
from git_worktree_keeper.exceptions import (
    InteractiveRequiredError,
    NoMergeCandidatesError,
    SelectionCancelled,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import RepoInfo, WorktreeEntry
from git_worktree_keeper.services.display_service import format_worktree_label

logger = get_logger(__name__)

err_console = Console(stderr=True, soft_wrap=True, highlight=False)


def stdin_is_interactive() -> bool:
    return sys.stdin.isatty()


def has_terminal() -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


@dataclass
class Choice:
    """One row of a picker."""

    label: str
    hint: str
    entry: Optional[WorktreeEntry] = None  # None for "create new"
    disabled_reason: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return self.disabled_reason is None


class WorktreeSelector:
    """Numbered-menu pickers built on rich prompts."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or err_console

    def _render(self, title: str, choices: List[Choice]) -> List[str]:
        """Print the menu and return the numbers that can be picked."""
        self.console.print(f"[bold]{escape(title)}[/bold]")
        selectable = []
        for number, choice in enumerate(choices, start=1):
            label = escape(choice.label)
            hint = escape(choice.hint)
            if choice.enabled:
                selectable.append(str(number))
                self.console.print(f"  [cyan]{number:>2}[/cyan]  {label}  [dim]{hint}[/dim]")
            else:
                reason = escape(choice.disabled_reason)
                self.console.print(f"  [dim] --  {label}  {hint} ({reason})[/dim]")
        return selectable

    def _ask_choice(self, title: str, choices: List[Choice], default: Optional[int] = None) -> Choice:
        selectable = self._render(title, choices)
        if default is not None and str(default) not in selectable:
            default = None
        try:
            if default is None:
                number = IntPrompt.ask(
                    "Choice", console=self.console, choices=selectable, show_choices=False
                )
            else:
                number = IntPrompt.ask(
                    "Choice", console=self.console, choices=selectable, show_choices=False,
                    default=default,
                )
        except (KeyboardInterrupt, EOFError):
            raise SelectionCancelled()
        return choices[int(number) - 1]

    def select_worktree(self, info: RepoInfo) -> Optional[WorktreeEntry]:
        """Pick a worktree to switch to.

        Returns:
            The chosen entry, or None when "create new worktree" was picked
        """
        if not stdin_is_interactive():
            raise InteractiveRequiredError()

        choices = [
            Choice(label=format_worktree_label(info, entry), hint=entry.path, entry=entry)
            for entry in info.worktrees
        ]
        choices.append(Choice(label=CREATE_NEW_LABEL, hint=CREATE_NEW_HINT))

        default = None
        for number, choice in enumerate(choices, start=1):
            if choice.entry is not None and info.is_current(choice.entry):
                default = number
                break

        choice = self._ask_choice("Select a worktree", choices, default)
        logger.debug(f"Selected {choice.label}")
        return choice.entry

    def select_merge_target(self, info: RepoInfo, current_branch: str) -> WorktreeEntry:
        """Pick a worktree whose branch will be merged into `current_branch`."""
        if not stdin_is_interactive():
            raise InteractiveRequiredError("Pass the branch to merge explicitly.")

        choices = []
        for entry in info.worktrees:
            reason = None
            if not entry.branch:
                reason = REASON_DETACHED
            elif current_branch and entry.branch == current_branch:
                reason = REASON_CURRENT_BRANCH
            choices.append(Choice(
                label=format_worktree_label(info, entry),
                hint=entry.path,
                entry=entry,
                disabled_reason=reason,
            ))

        if not any(choice.enabled for choice in choices):
            raise NoMergeCandidatesError()

        target = f" into {current_branch}" if current_branch else ""
        choice = self._ask_choice(f"Select a worktree branch to merge{target}", choices)
        return choice.entry

    def ask_branch_name(self) -> str:
        """Prompt until a non-empty branch name is entered."""
        while True:
            try:
                value = Prompt.ask("New worktree branch (e.g. feature/example)", console=self.console)
            except (KeyboardInterrupt, EOFError):
                raise SelectionCancelled()
            if value and value.strip():
                return value.strip()
            self.console.print("[red]Branch name is required.[/red]")

    def confirm(self, message: str, default: bool = True) -> bool:
        """Ask a yes/no question; auto-accepts when not attached to a terminal."""
        if not has_terminal():
            logger.debug(f"Auto-confirming without a terminal: {message}")
            return True
        try:
            return Confirm.ask(message, console=self.console, default=default)
        except (KeyboardInterrupt, EOFError):
            raise SelectionCancelled()
