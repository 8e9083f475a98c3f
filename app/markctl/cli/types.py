"""Shared helpers for CLI commands.

Commands get their settings from the root context and open or save the
staging area through these helpers, which turn staging errors into a
printed message and a nonzero exit.
"""

import os
from pathlib import Path

import typer

from markctl.core.area import StagingArea
from markctl.core.settings import MarkSettings
from markctl.core.store import StagingError, StagingNotFoundError, StagingStore
from markctl.utils.formatting import print_error, print_info

AVAILABLE_COMMANDS = """Available commands:
  add <files>
  exec (like, exec cp _ .)
  tag <tag> (files)
  remove (files)
  status
  config show|init|path
  --help"""


def get_settings(ctx: typer.Context) -> MarkSettings:
    """Get the effective settings stored by the root callback."""
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and isinstance(obj.get("settings"), MarkSettings):
        return obj["settings"]
    return MarkSettings()


def open_area(settings: MarkSettings) -> StagingArea:
    """Load the staging area or exit with an error message.

    Raises:
        typer.Exit: If the staging file is missing (and may not be
            created) or cannot be read or created.
    """
    store = StagingStore(settings.resolved_staging_path, create=settings.create_staging)
    try:
        return store.load(preserve_subdirs=settings.preserve_subdirs)
    except StagingNotFoundError as e:
        print_error(str(e))
        print_info("Run without --no-create to start a new staging area.")
        raise typer.Exit(code=1) from e
    except StagingError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def save_area(area: StagingArea) -> None:
    """Rewrite the staging file or exit with an error message.

    Raises:
        typer.Exit: If the staging file cannot be written.
    """
    try:
        area.rewrite()
    except StagingError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def as_staging_arg(raw: str) -> str:
    """Append a trailing separator to existing directories.

    The staging area decides directory intent from the trailing separator
    alone, so the CLI adds one for arguments naming a directory.
    """
    if raw and not raw.endswith(os.sep) and Path(raw).is_dir():
        return raw + os.sep
    return raw
