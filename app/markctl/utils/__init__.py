"""Utility modules for markctl.

This module exports commonly used utility functions.
"""

from markctl.utils.formatting import (
    console,
    create_mark_table,
    err_console,
    format_mark_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from markctl.utils.log import configure_logging
from markctl.utils.shell import CommandResult, command_exists, run_shell

__all__ = [
    "CommandResult",
    "command_exists",
    "configure_logging",
    "console",
    "create_mark_table",
    "err_console",
    "format_mark_row",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_shell",
]
