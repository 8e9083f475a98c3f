"""Add command for staging paths.

This module provides the `markctl add` command (alias `+`).
"""

from typing import Annotated

import typer

from markctl.cli.types import as_staging_arg, get_settings, open_area, save_area
from markctl.utils.formatting import print_info, print_success


def add(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Files or directories to stage."),
    ],
) -> None:
    """Stage files and directories.

    Adding a directory replaces staged paths beneath it unless --preserve
    is given. Paths already covered by a staged directory are skipped.

    Examples:
        markctl add notes.txt src/
        markctl --preserve add src/
    """
    settings = get_settings(ctx)
    area = open_area(settings)

    added = area.add_all(as_staging_arg(raw) for raw in paths)

    if added == 0:
        print_info("Nothing new to stage.")
        return

    save_area(area)
    print_success(f"Staged {added} path(s).")
