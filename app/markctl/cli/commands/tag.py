"""Tag command for labeling marks.

This module provides the `markctl tag` command.
"""

from typing import Annotated

import typer

from markctl.cli.types import get_settings, open_area, save_area
from markctl.utils.formatting import print_error, print_info, print_success


def tag(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(metavar="TAG", help="Tag to apply."),
    ] = None,
    patterns: Annotated[
        list[str] | None,
        typer.Argument(help="Glob patterns matched against file names."),
    ] = None,
) -> None:
    """Tag staged paths whose file name matches any pattern.

    Without patterns every staged path is tagged.

    Examples:
        markctl tag backup '*.conf'
        markctl tag review
    """
    if not name:
        print_error("markctl tag <tag> (filenames)")
        raise typer.Exit(code=1)

    if any(c.isspace() for c in name):
        print_error(f"Tags cannot contain whitespace: {name!r}")
        raise typer.Exit(code=1)

    settings = get_settings(ctx)
    area = open_area(settings)

    tagged = area.tag(name, patterns or [])

    if tagged == 0:
        print_info("No staged paths were tagged.")
        return

    save_area(area)
    print_success(f"Tagged {tagged} path(s) with '{name}'.")
