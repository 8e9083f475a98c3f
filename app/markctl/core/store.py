"""Staging file persistence.

This module provides the StagingStore class, which parses a staging file
into a StagingArea and writes a StagingArea back to disk atomically.

File format (one mark per line, whitespace-delimited)::

    # comment lines and blank lines are ignored
    /abs/path/to/file tag1 tag2
    /abs/path/to/dir/
"""

import logging
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from tempfile import NamedTemporaryFile

from markctl.core.area import StagingArea
from markctl.models.mark import Mark

logger = logging.getLogger(__name__)

HEADER_TEMPLATE = """
# this file was automatically created by "{command}"
# you can edit it and mark will still work properly, but
# mark will happily overwrite it as well.

"""


class StagingError(Exception):
    """Base exception for staging file errors."""


class StagingNotFoundError(StagingError):
    """Raised when the staging file is missing and creation is disallowed."""


class StagingReadError(StagingError):
    """Raised when the staging file exists but cannot be read."""


class StagingWriteError(StagingError):
    """Raised when the staging file cannot be created or replaced."""


def invocation() -> str:
    """Describe the current command line for the file header."""
    parts = [Path(sys.argv[0]).name, *sys.argv[1:]]
    return " ".join(parts).strip()


def render_header(command: str) -> str:
    """Render the comment block written at the top of every staging file."""
    return HEADER_TEMPLATE.format(command=command)


def parse_marks(lines: Iterable[str]) -> list[Mark]:
    """Parse staging file lines into marks.

    Blank lines, lines starting with whitespace and lines starting with
    ``#`` are skipped. Every other line is split on whitespace: token 0 is
    the path, the remaining tokens are tags. Duplicate tags are kept.

    Lines whose first token is not an absolute path are skipped with a
    warning rather than failing the whole load.

    Args:
        lines: Raw lines, with or without trailing newlines.

    Returns:
        Marks in file order.
    """
    marks: list[Mark] = []

    for line_num, line in enumerate(lines, start=1):
        if not line or line[0].isspace() or line.startswith("#"):
            continue

        tokens = line.split()
        if not os.path.isabs(tokens[0]):
            logger.warning(
                "Skipping malformed staging line %d: %r is not an absolute path",
                line_num,
                tokens[0],
            )
            continue

        marks.append(Mark.from_tokens(tokens))

    return marks


def render_marks(marks: Iterable[Mark], command: str) -> str:
    """Render the full staging file text: header, then one line per mark."""
    body = "".join(mark.to_line() + "\n" for mark in marks)
    return render_header(command) + body


class StagingStore:
    """Durable line-oriented representation of a staging area.

    Attributes:
        path: Location of the staging file.
        create: Whether load() may create a missing staging file.
    """

    def __init__(
        self,
        path: Path,
        *,
        create: bool = True,
        command: str | None = None,
    ) -> None:
        """Initialize StagingStore.

        Args:
            path: Staging file location (already expanded).
            create: Allow creating the file when it doesn't exist.
            command: Command line recorded in the header. Defaults to
                the current process invocation.
        """
        self.path = Path(path)
        self.create = create
        self._command = command if command is not None else invocation()

    def load(self, *, preserve_subdirs: bool = False) -> StagingArea:
        """Read and parse the staging file, creating it if permitted.

        Args:
            preserve_subdirs: Passed through to the returned area.

        Returns:
            StagingArea backed by this store.

        Raises:
            StagingNotFoundError: If the file is missing and create is False.
            StagingReadError: If the file cannot be read.
            StagingWriteError: If a missing file cannot be created.
        """
        try:
            with self.path.open(encoding="utf-8", errors="surrogateescape") as f:
                marks = parse_marks(f)
        except FileNotFoundError:
            if not self.create:
                raise StagingNotFoundError(f"Staging file not found: {self.path}") from None
            return self.initialize(preserve_subdirs=preserve_subdirs)
        except (OSError, UnicodeDecodeError) as e:
            raise StagingReadError(f"Failed to read staging file {self.path}: {e}") from e

        logger.debug("Loaded %d mark(s) from %s", len(marks), self.path)
        return StagingArea(
            backing_path=self.path,
            marks=marks,
            store=self,
            preserve_subdirs=preserve_subdirs,
        )

    def initialize(self, *, preserve_subdirs: bool = False) -> StagingArea:
        """Create an empty staging file holding only the header.

        The file is created exclusively with mode 0600, so an existing
        file is never clobbered.

        Returns:
            Empty StagingArea backed by this store.

        Raises:
            StagingWriteError: If the file cannot be created.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as f:
                f.write(render_header(self._command))
        except OSError as e:
            raise StagingWriteError(f"Failed to create staging file {self.path}: {e}") from e

        logger.info("Created staging file %s", self.path)
        return StagingArea(
            backing_path=self.path,
            store=self,
            preserve_subdirs=preserve_subdirs,
        )

    def rewrite(self, area: StagingArea) -> None:
        """Replace the staging file with the area's current marks.

        The content goes to a temporary file in the same directory, which
        is then renamed over the staging file with os.replace(). A crash
        mid-write leaves the previous file intact.

        Args:
            area: Area whose marks are serialized, in order.

        Raises:
            StagingWriteError: If the temporary file cannot be written or
                renamed.
        """
        text = render_marks(area.marks, self._command)

        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                errors="surrogateescape",
                dir=self.path.parent,
                prefix=".mark-",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(str(tmp_path), str(self.path))
        except (OSError, UnicodeError) as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise StagingWriteError(f"Failed to rewrite staging file {self.path}: {e}") from e

        logger.debug("Wrote %d mark(s) to %s", len(area.marks), self.path)
