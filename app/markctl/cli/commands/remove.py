"""Remove command for unstaging paths.

This module provides the `markctl remove` command.
"""

from typing import Annotated

import typer

from markctl.cli.types import get_settings, open_area, save_area
from markctl.utils.formatting import print_info, print_success


def remove(
    ctx: typer.Context,
    patterns: Annotated[
        list[str] | None,
        typer.Argument(help="Glob patterns matched against file names."),
    ] = None,
) -> None:
    """Unstage marks whose file name matches any pattern.

    Without patterns the whole staging area is cleared.

    Examples:
        markctl remove '*.log'
        markctl remove
    """
    settings = get_settings(ctx)
    area = open_area(settings)

    removed = area.remove_all(patterns or [])

    if removed == 0:
        print_info("No staged paths matched.")
        return

    save_area(area)
    print_success(f"Removed {removed} path(s).")
