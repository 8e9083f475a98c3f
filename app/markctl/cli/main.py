"""Main CLI application entry point.

Defines the Typer application, the global options that make up the
effective settings, and command registration.
"""

from pathlib import Path
from typing import Annotated

import typer

from markctl import __version__
from markctl.cli.commands import add, config, execute, remove, status, tag
from markctl.core.paths import STAGING_ENV_VAR
from markctl.core.settings import SettingsError, load_settings
from markctl.utils.formatting import print_error
from markctl.utils.log import configure_logging

app = typer.Typer(
    name="markctl",
    help="Stage files and run shell commands across them as a batch.",
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"markctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    staging: Annotated[
        str | None,
        typer.Option(
            "--staging",
            "-s",
            envvar=STAGING_ENV_VAR,
            help="Staging file (default: ~/.mark-staging).",
        ),
    ] = None,
    create: Annotated[
        bool | None,
        typer.Option(
            "--create/--no-create",
            help="Allow creating the staging file if it doesn't exist.",
        ),
    ] = None,
    preserve: Annotated[
        bool | None,
        typer.Option(
            "--preserve/--no-preserve",
            help="Keep staged paths underneath a newly added directory.",
        ),
    ] = None,
    retain: Annotated[
        bool | None,
        typer.Option(
            "--retain/--no-retain",
            help="Keep the staging area after exec.",
        ),
    ] = None,
    verbose: Annotated[
        bool | None,
        typer.Option(
            "--verbose/--no-verbose",
            "-v",
            help="Print commands before running them.",
        ),
    ] = None,
    dry: Annotated[
        bool | None,
        typer.Option(
            "--dry/--no-dry",
            help="Print commands without running them.",
        ),
    ] = None,
    tag_filter: Annotated[
        str | None,
        typer.Option(
            "--tag",
            "-t",
            help="Only exec staged paths carrying this tag.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file (default: ~/.config/markctl/config.toml).",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Enable debug logging on stderr.",
        ),
    ] = False,
) -> None:
    """markctl - stage files, tag them, and run commands across them.

    Run without a command to show the staging area.
    """
    configure_logging(debug)

    try:
        settings = load_settings(config_path).with_overrides(
            staging_path=staging,
            create_staging=create,
            preserve_subdirs=preserve,
            retain_marks=retain,
            print_commands=verbose,
            dry_run=dry,
            tag_filter=tag_filter,
        )
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings

    if ctx.invoked_subcommand is None:
        status.show_status(ctx)


app.command(name="add")(add.add)
app.command(name="+", hidden=True)(add.add)
app.command(name="remove")(remove.remove)
app.command(name="tag")(tag.tag)
app.command(
    name="exec",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)(execute.execute)
app.command(name="status")(status.status)
app.add_typer(config.app, name="config")
