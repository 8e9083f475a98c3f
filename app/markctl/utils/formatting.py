"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich. Command output
forwarded by exec does not go through these consoles.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from markctl.core.theme import get_theme

if TYPE_CHECKING:
    from markctl.models.mark import Mark


def _detect_color_system() -> str | None:
    """Use truecolor on interactive terminals, let Rich decide otherwise."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_mark_table(title: str = "Staging Area") -> Table:
    """Create a pre-configured table for displaying marks.

    Args:
        title: Table title.

    Returns:
        Rich Table with index, path and tags columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", style="muted", justify="right")
    table.add_column("Path", overflow="fold")
    table.add_column("Tags", style="mark.tag")
    return table


def format_mark_row(index: int, mark: Mark) -> tuple[str, str, str]:
    """Format a mark as a table row.

    Directory marks use the directory style so they stand out from files.

    Returns:
        Tuple of (index, path, tags) with Rich markup.
    """
    style = "mark.dir" if mark.is_dir else "mark.file"
    path = f"[{style}]{escape(mark.path)}[/]"
    tags = escape(" ".join(mark.tags)) if mark.tags else "[muted]-[/]"
    return (str(index), path, tags)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")
