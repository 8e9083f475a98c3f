"""Command templating and per-mark execution.

Commands are token lists in which ``_`` stands for the mark's path,
``_.base`` for its final component and ``_.dir`` for its containing
directory. Substituted tokens are joined with single spaces and handed to
a shell as one command line; paths are not escaped.

Running one command for one mark goes through the CommandRunner protocol
so the sequential ShellRunner can be swapped for another strategy without
touching the staging area.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from markctl.models.mark import Mark
from markctl.utils.shell import CommandResult, command_exists, run_shell

logger = logging.getLogger(__name__)

PATH_TOKEN = "_"
BASE_TOKEN = "_.base"
DIR_TOKEN = "_.dir"

OutputSink = Callable[[str], None]


def write_stdout(text: str) -> None:
    """Forward command output to our own standard output."""
    sys.stdout.write(text)
    sys.stdout.flush()


def substitute(args: Sequence[str], mark: Mark) -> list[str]:
    """Replace placeholder tokens with values from ``mark``.

    Only whole tokens are replaced; ``_`` inside a longer token is left
    alone.

    Args:
        args: Command template tokens.
        mark: Mark supplying the values.

    Returns:
        New token list.
    """
    values = {
        PATH_TOKEN: mark.path,
        BASE_TOKEN: mark.base,
        DIR_TOKEN: mark.dir,
    }
    return [values.get(arg, arg) for arg in args]


def render_command(args: Sequence[str], mark: Mark) -> str:
    """Build the shell command line for one mark."""
    return " ".join(substitute(args, mark))


class CommandRunner(Protocol):
    """Runs one shell command line and reports its outcome."""

    def run(self, command: str) -> CommandResult:
        """Run ``command`` to completion.

        Raises:
            OSError: If the command cannot be spawned.
            subprocess.TimeoutExpired: If the command times out.
        """
        ...


class ShellRunner:
    """Runs commands one at a time through ``<shell> -c``.

    Attributes:
        shell: Shell executable.
        timeout: Per-command timeout in seconds, or None.
    """

    def __init__(self, shell: str = "sh", timeout: float | None = None) -> None:
        self.shell = shell
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check if the configured shell can be found."""
        return command_exists(self.shell)

    def run(self, command: str) -> CommandResult:
        return run_shell(command, shell=self.shell, timeout=self.timeout)


@dataclass(frozen=True, slots=True)
class ExecOptions:
    """Options controlling a batch exec.

    Attributes:
        dry_run: Print commands instead of running them.
        print_commands: Print each command before running it.
        tag_filter: Only marks carrying this exact tag (empty = all marks).
    """

    dry_run: bool = False
    print_commands: bool = False
    tag_filter: str = ""


@dataclass(frozen=True, slots=True)
class ExecResult:
    """Outcome of running the command for a single mark.

    Attributes:
        path: Path of the mark the command ran for.
        command: The substituted command line.
        success: Whether the command exited with status 0.
        error: Error message if the command failed, None otherwise.
        dry_run: Whether the command was only printed.
        output: Combined output of the command.
    """

    path: str
    command: str
    success: bool
    error: str | None = None
    dry_run: bool = False
    output: str = ""


@dataclass(slots=True)
class ExecSummary:
    """Aggregate outcome of a batch exec.

    Attributes:
        results: One result per attempted mark, in mark order.
    """

    results: list[ExecResult] = field(default_factory=list)

    @property
    def completed(self) -> int:
        """Number of marks whose command ran successfully (dry runs excluded)."""
        return sum(1 for r in self.results if r.success and not r.dry_run)

    @property
    def failed(self) -> list[ExecResult]:
        """Results of commands that failed."""
        return [r for r in self.results if not r.success]

    @property
    def error(self) -> str | None:
        """Error of the last failed mark, or None if nothing failed."""
        failures = self.failed
        return failures[-1].error if failures else None


class MarkExecutor:
    """Runs a command template for individual marks.

    Handles dry-run and command echo, forwards output to the sink and
    converts failures into ExecResult values instead of raising.
    """

    def __init__(
        self,
        args: Sequence[str],
        options: ExecOptions | None = None,
        *,
        runner: CommandRunner | None = None,
        sink: OutputSink | None = None,
        echo: OutputSink | None = None,
    ) -> None:
        """Initialize the MarkExecutor.

        Args:
            args: Command template tokens.
            options: Batch options. Defaults to ExecOptions().
            runner: Command runner. Defaults to ShellRunner().
            sink: Receives command output. Defaults to stdout.
            echo: Receives printed commands. Defaults to sink.
        """
        self.args = list(args)
        self.options = options or ExecOptions()
        self.runner: CommandRunner = runner or ShellRunner()
        self.sink = sink or write_stdout
        self.echo = echo or self.sink

    def execute(self, mark: Mark) -> ExecResult:
        """Run the command for one mark.

        Args:
            mark: Mark to substitute into the template.

        Returns:
            ExecResult describing the outcome.
        """
        command = render_command(self.args, mark)

        if self.options.dry_run or self.options.print_commands:
            shell = getattr(self.runner, "shell", "sh")
            self.echo(f"{shell} -c {command}\n")
            if self.options.dry_run:
                return ExecResult(path=mark.path, command=command, success=True, dry_run=True)

        try:
            result = self.runner.run(command)
        except subprocess.TimeoutExpired as e:
            logger.warning("Command timed out for %s: %s", mark.path, command)
            return ExecResult(
                path=mark.path,
                command=command,
                success=False,
                error=f"timed out after {e.timeout}s",
            )
        except OSError as e:
            logger.warning("Could not run command for %s: %s", mark.path, e)
            return ExecResult(path=mark.path, command=command, success=False, error=str(e))

        if result.output:
            self.sink(result.output)

        if not result.success:
            return ExecResult(
                path=mark.path,
                command=command,
                success=False,
                error=f"exit status {result.returncode}",
                output=result.output,
            )

        return ExecResult(path=mark.path, command=command, success=True, output=result.output)
