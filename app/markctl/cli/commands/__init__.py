"""CLI commands for markctl.

This package contains all subcommand implementations.
"""

from markctl.cli.commands import add, config, execute, remove, status, tag

__all__ = ["add", "config", "execute", "remove", "status", "tag"]
