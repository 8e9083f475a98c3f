"""Staging area: the in-memory mark set and its mutation rules.

Invariants maintained by add():
- No two marks share the same normalized path.
- No mark lives under a directory mark, unless preserve_subdirs is set,
  in which case marks already present under a newly added directory are
  kept alongside it.

Patterns for remove() and tag() are shell-style globs matched against
the final path component only.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator, Sequence
from fnmatch import fnmatchcase
from pathlib import Path
from typing import TYPE_CHECKING

from markctl.core.executor import (
    CommandRunner,
    ExecOptions,
    ExecResult,
    ExecSummary,
    MarkExecutor,
    OutputSink,
)
from markctl.models.mark import Mark

if TYPE_CHECKING:
    from markctl.core.store import StagingStore

logger = logging.getLogger(__name__)


def resolve_path(raw: str) -> str:
    """Resolve a user-supplied path to an absolute, normalized mark path.

    A trailing separator on ``raw`` marks directory intent and survives
    normalization. The filesystem is never consulted.

    Args:
        raw: Path as given by the user, relative or absolute.

    Returns:
        Absolute normalized path, ending with os.sep for directories.

    Raises:
        ValueError: If ``raw`` is empty.
        OSError: If the working directory cannot be determined.
    """
    if not raw:
        msg = "Path cannot be empty"
        raise ValueError(msg)

    separators = tuple(s for s in (os.sep, os.altsep) if s)
    resolved = os.path.abspath(raw)
    if raw.endswith(separators) and not resolved.endswith(os.sep):
        resolved += os.sep
    return resolved


def basename_matches(mark: Mark, pattern: str) -> bool:
    """Match a glob pattern against the mark's final path component."""
    return fnmatchcase(mark.base, pattern)


class StagingArea:
    """Ordered set of marks plus the file they persist to.

    Attributes:
        backing_path: Location of the staging file.
        marks: Marks in file/insertion order.
        preserve_subdirs: Keep existing marks when a covering directory
            is added.
    """

    def __init__(
        self,
        backing_path: Path,
        marks: list[Mark] | None = None,
        *,
        store: StagingStore | None = None,
        preserve_subdirs: bool = False,
    ) -> None:
        self.backing_path = Path(backing_path)
        self.marks: list[Mark] = marks if marks is not None else []
        self.preserve_subdirs = preserve_subdirs
        self._store = store

    def __len__(self) -> int:
        return len(self.marks)

    def __iter__(self) -> Iterator[Mark]:
        return iter(self.marks)

    @property
    def paths(self) -> list[str]:
        """Paths of all marks, in order."""
        return [mark.path for mark in self.marks]

    def get(self, path: str) -> Mark | None:
        """Find the mark with exactly this normalized path."""
        for mark in self.marks:
            if mark.path == path:
                return mark
        return None

    def add(self, raw_path: str) -> bool:
        """Stage a path.

        Adding a directory (trailing separator) replaces marks beneath it
        unless preserve_subdirs is set. Adding a path that is already
        staged, or that lies beneath a staged directory, does nothing.
        Paths containing whitespace are refused, since the staging file
        separates the path from its tags with whitespace.

        Args:
            raw_path: Path as given by the user.

        Returns:
            True if a new mark was appended, False otherwise.
        """
        try:
            path = resolve_path(raw_path)
        except (OSError, ValueError) as e:
            logger.warning("Cannot resolve path %r: %s", raw_path, e)
            return False

        if any(c.isspace() for c in path):
            logger.warning("Cannot stage %r: paths containing whitespace are not supported", path)
            return False

        new_dir = path.endswith(os.sep)
        subsumed: set[int] = set()

        for i, mark in enumerate(self.marks):
            if mark.path == path:
                logger.debug("Already staged: %s", path)
                return False

            if mark.covers(path):
                logger.debug("%s is covered by staged directory %s", path, mark.path)
                return False

            if new_dir and mark.path.startswith(path) and not self.preserve_subdirs:
                subsumed.add(i)

        if subsumed:
            logger.debug("Directory %s replaces %d mark(s)", path, len(subsumed))
            self.marks = [m for i, m in enumerate(self.marks) if i not in subsumed]

        self.marks.append(Mark(path=path))
        return True

    def add_all(self, raw_paths: Iterable[str]) -> int:
        """Stage several paths, returning how many marks were added."""
        return sum(1 for raw in raw_paths if self.add(raw))

    def remove(self, pattern: str) -> int:
        """Remove every mark whose basename matches ``pattern``.

        Args:
            pattern: Shell-style glob (``*``, ``?``, ``[...]``).

        Returns:
            Number of marks removed.
        """
        kept = [m for m in self.marks if not basename_matches(m, pattern)]
        removed = len(self.marks) - len(kept)
        self.marks = kept
        return removed

    def remove_all(self, patterns: Sequence[str]) -> int:
        """Remove marks matching any pattern; no patterns clears everything."""
        if not patterns:
            return self.clear()
        return sum(self.remove(pattern) for pattern in patterns)

    def clear(self) -> int:
        """Drop every mark, returning how many there were."""
        removed = len(self.marks)
        self.marks = []
        return removed

    @staticmethod
    def tag_mark(mark: Mark, pattern: str, tag: str) -> bool:
        """Apply ``tag`` to ``mark`` if its basename matches ``pattern``.

        An empty pattern matches every mark.

        Returns:
            True if the tag was added, False if the pattern didn't match
            or the mark already carried the tag.
        """
        if pattern and not basename_matches(mark, pattern):
            return False
        return mark.add_tag(tag)

    def tag(self, tag: str, patterns: Sequence[str] = ()) -> int:
        """Tag all marks matching any of ``patterns`` (all marks if none).

        Returns:
            Number of tag applications that changed a mark.
        """
        tagged = 0
        for pattern in patterns or ("",):
            for mark in self.marks:
                if self.tag_mark(mark, pattern, tag):
                    tagged += 1
        return tagged

    def select(self, tag_filter: str = "") -> list[Mark]:
        """Marks carrying ``tag_filter`` exactly, or all marks if it is empty."""
        if not tag_filter:
            return list(self.marks)
        return [m for m in self.marks if m.has_tag(tag_filter)]

    def exec(
        self,
        args: Sequence[str],
        options: ExecOptions | None = None,
        *,
        runner: CommandRunner | None = None,
        sink: OutputSink | None = None,
        echo: OutputSink | None = None,
        on_result: Callable[[ExecResult], None] | None = None,
    ) -> ExecSummary:
        """Run a command template once per selected mark, in order.

        A failing mark never stops the batch. Each result is handed to
        ``on_result`` as soon as it is known.

        Args:
            args: Command template tokens (``_``, ``_.base``, ``_.dir``).
            options: Dry-run, echo and tag filter settings.
            runner: Command runner, defaults to a sequential ShellRunner.
            sink: Receives command output.
            echo: Receives printed commands.
            on_result: Called with every ExecResult.

        Returns:
            ExecSummary with the completed count and last error.
        """
        options = options or ExecOptions()
        executor = MarkExecutor(args, options, runner=runner, sink=sink, echo=echo)
        summary = ExecSummary()

        for mark in self.select(options.tag_filter):
            result = executor.execute(mark)
            if not result.success:
                logger.debug("Command failed for %s: %s", mark.path, result.error)
            summary.results.append(result)
            if on_result is not None:
                on_result(result)

        return summary

    def rewrite(self) -> None:
        """Persist the current marks through the backing store.

        Raises:
            RuntimeError: If the area has no store.
            StagingWriteError: If the store cannot write the file.
        """
        if self._store is None:
            msg = f"Staging area for {self.backing_path} has no store"
            raise RuntimeError(msg)
        self._store.rewrite(self)
