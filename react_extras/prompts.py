"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape
from simple_term_menu import TerminalMenu

from react_extras.errors import Cancelled
from react_extras.resolver import ResolvedFile, ResolvedGroup

_console = Console()


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _multiselect(question: str, labels: list[str], preselected: list[int]) -> list[int]:
    """Display a clack-style multi-select and return the chosen indices.

    Escape or Ctrl-C raises Cancelled. An empty selection is returned as is.
    """
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    menu = TerminalMenu(
        labels,
        multi_select=True,
        show_multi_select_hint=True,
        preselected_entries=preselected or None,
        multi_select_empty_ok=True,
        multi_select_select_on_accept=False,
        menu_cursor="│  ● ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
    )
    raw_indices = menu.show()

    # show() returns None for both Escape and an empty accept
    if menu.chosen_accept_key is None:
        raise Cancelled("Selection cancelled")

    indices = sorted(int(i) for i in raw_indices or ())

    # Overwrite the ◆ question + │ bar that stayed on screen
    _clear_lines(2)

    _console.print(f"[bold green]◇[/]  {question}")
    for i, lbl in enumerate(labels):
        if i in indices:
            _console.print(f"[dim]│[/]  [bold green]■[/] {escape(lbl)}")
        else:
            _console.print(f"[dim]│[/]    [dim s]{escape(lbl)}[/]")
    _print_bar()

    return indices


def _confirm(question: str, default: bool = True) -> bool:
    """Display a clack-style yes/no prompt."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    suffix = " [Y/n] " if default else " [y/N] "
    _console.print("[dim]│[/]  ", end="")
    try:
        answer = input(suffix).strip().lower()
    except (EOFError, KeyboardInterrupt):
        raise Cancelled("Confirmation cancelled") from None

    result = default if answer == "" else answer in ("y", "yes")

    display = "Yes" if result else "No"

    # Overwrite the ◆ question + │ bar + │ [Y/n] input line
    _clear_lines(3)

    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {display}")
    _print_bar()

    return result


def prompt_groups(groups: list[ResolvedGroup]) -> list[ResolvedGroup]:
    """Ask which groups to set up; everything starts selected."""
    labels = [f"{g.label}  ({g.hint})" for g in groups]
    indices = _multiselect(
        "Select what to set up", labels, preselected=list(range(len(groups)))
    )
    return [groups[i] for i in indices]


def prompt_overwrite(existing: list[ResolvedFile]) -> list[ResolvedFile]:
    """Ask which already-existing files may be overwritten; none start selected."""
    labels = [f"{f.target_path}  ({f.label})" for f in existing]
    indices = _multiselect("Some files already exist. Select files to overwrite", labels, [])
    return [existing[i] for i in indices]


def prompt_proceed() -> bool:
    return _confirm("Proceed with setup?", default=True)
