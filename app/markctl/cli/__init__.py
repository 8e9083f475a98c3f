"""CLI package for markctl.

This package contains the Typer application and all subcommands.
"""

from markctl.cli.main import app

__all__ = ["app"]
