"""Config command for inspecting and creating the settings file.

Settings live in ~/.config/markctl/config.toml and are overridden by the
global command-line options.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from markctl.cli.types import get_settings
from markctl.core.paths import ensure_config_dir, get_settings_path
from markctl.core.settings import MarkSettings, SettingsError, save_settings
from markctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the settings file.",
    no_args_is_help=True,
)


@app.command()
def show(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show effective settings after config file and options are applied."""
    settings = get_settings(ctx)

    if json_output:
        typer.echo(json.dumps(settings.model_dump(), indent=2))
        return

    table = Table(
        title="Effective Settings",
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="text")
    table.add_column("Value", style="info")
    for key, value in settings.model_dump().items():
        table.add_row(key, "-" if value is None else str(value))
    table.add_row("staging file", str(settings.resolved_staging_path))
    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = get_settings_path()

    if path.exists() and not force:
        print_error(f"Settings file already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        ensure_config_dir()
        save_settings(MarkSettings(), path)
    except (RuntimeError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default settings to {path}")


@app.command()
def path() -> None:
    """Print the settings file location."""
    typer.echo(str(get_settings_path()))
