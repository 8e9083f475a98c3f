"""Status command for showing the staging area.

This module provides the `markctl status` command, which is also what
runs when markctl is invoked without a command.
"""

import json
from typing import Annotated

import typer

from markctl.cli.types import AVAILABLE_COMMANDS, get_settings, open_area
from markctl.core.area import StagingArea
from markctl.utils.formatting import (
    console,
    create_mark_table,
    err_console,
    format_mark_row,
    print_info,
)


def status(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show staged paths and their tags."""
    show_status(ctx, json_output=json_output)


def show_status(ctx: typer.Context, *, json_output: bool = False) -> None:
    """Print the available commands and the current marks."""
    settings = get_settings(ctx)
    area = open_area(settings)

    if json_output:
        _print_json(area)
        return

    err_console.print(AVAILABLE_COMMANDS, markup=False, highlight=False)

    if not area.marks:
        print_info(f"Staging area is empty ({area.backing_path}).")
        return

    _print_table(area)


def _print_table(area: StagingArea) -> None:
    """Print marks as a numbered Rich table."""
    table = create_mark_table(title=f"Staging Area ({area.backing_path})")
    for i, mark in enumerate(area.marks):
        table.add_row(*format_mark_row(i, mark))
    console.print(table)


def _print_json(area: StagingArea) -> None:
    """Print marks as JSON for scripting."""
    output = [
        {"index": i, "path": mark.path, "tags": list(mark.tags)}
        for i, mark in enumerate(area.marks)
    ]
    typer.echo(json.dumps(output, indent=2))
