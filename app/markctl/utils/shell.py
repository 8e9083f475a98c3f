"""Shell execution utilities.

Provides subprocess execution with combined output capture for exec.
"""

import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        output: Combined stdout and stderr, in the order it was written.
        returncode: Exit code of the command.
    """

    output: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_shell(
    command: str,
    *,
    shell: str = "sh",
    timeout: float | None = None,
) -> CommandResult:
    """Run a command line through ``<shell> -c`` and capture its output.

    The command string is handed to the shell verbatim; nothing is quoted
    or escaped. Output that is not valid UTF-8 is decoded with
    replacement characters instead of failing.

    Args:
        command: Complete command line.
        shell: Shell executable to invoke.
        timeout: Maximum time in seconds to wait. None waits forever.

    Returns:
        CommandResult with combined output and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If the shell executable is not found.
        OSError: If the shell cannot be spawned.
    """
    result = subprocess.run(
        [shell, "-c", command],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
        timeout=timeout,
    )
    return CommandResult(output=result.stdout or "", returncode=result.returncode)


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None
