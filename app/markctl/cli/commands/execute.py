"""Exec command for running a shell command across staged paths.

This module provides the `markctl exec` command.
"""

from typing import Annotated

import typer

from markctl.cli.types import get_settings, open_area, save_area
from markctl.core.executor import ExecOptions, ExecResult, ShellRunner
from markctl.utils.formatting import print_error, print_info, print_warning


def _report_failure(result: ExecResult) -> None:
    """Report a failed mark as soon as it happens."""
    if not result.success:
        print_error(f"{result.path}: {result.error} ({result.command})")


def execute(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            metavar="COMMAND...",
            help="Command template; _ is the path, _.base its name, _.dir its directory.",
        ),
    ] = None,
) -> None:
    """Run a command once for every staged path.

    Each command runs through the shell with placeholders substituted.
    Unless --retain, --tag or --dry is given, the staging area is cleared
    afterwards. Exits with status 1 if any command failed.

    Examples:
        markctl exec cp _ /tmp/backup
        markctl --tag review exec wc -l _
        markctl --dry exec mv _ _.dir/old-_.base
    """
    if not args:
        print_error("markctl exec <command> (like, exec cp _ .)")
        raise typer.Exit(code=1)

    settings = get_settings(ctx)
    area = open_area(settings)

    runner = ShellRunner(shell=settings.shell, timeout=settings.timeout_seconds)
    if not settings.dry_run and not runner.is_available():
        print_error(f"Shell not found: {settings.shell}")
        raise typer.Exit(code=1)

    options = ExecOptions(
        dry_run=settings.dry_run,
        print_commands=settings.print_commands,
        tag_filter=settings.tag_filter,
    )
    summary = area.exec(args, options, runner=runner, on_result=_report_failure)

    if settings.tag_filter and area.marks and not summary.results:
        print_warning(f"No staged paths carry tag '{settings.tag_filter}'.")

    print_info(f"{summary.completed} of {len(area)} completed")

    if not settings.retain_marks and not settings.tag_filter and not settings.dry_run:
        area.clear()
        save_area(area)

    if summary.error is not None:
        raise typer.Exit(code=1)
