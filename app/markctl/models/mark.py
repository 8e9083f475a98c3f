"""Mark model for staged filesystem paths.

A mark is one staged path plus the tags the user attached to it.
Directory marks are distinguished from file marks solely by a trailing
path separator; nothing here touches the filesystem.
"""

import os
from dataclasses import dataclass, field


@dataclass(slots=True)
class Mark:
    """A single staged filesystem path with its tags.

    Attributes:
        path: Absolute, normalized path. Directory marks end with os.sep.
        tags: Tags in insertion order. Uniqueness is enforced by add_tag(),
            not by construction, so tags loaded from disk are kept as-is.
    """

    path: str
    tags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate mark data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def is_dir(self) -> bool:
        """Whether this is a directory mark (trailing separator)."""
        return self.path.endswith(os.sep)

    @property
    def base(self) -> str:
        """Final path component, ignoring any trailing separator.

        Returns:
            The basename, or the separator itself for the root directory.
        """
        stripped = self.path.rstrip(os.sep)
        if not stripped:
            return os.sep
        return os.path.basename(stripped)

    @property
    def dir(self) -> str:
        """Containing directory of the mark.

        For a directory mark such as ``/a/b/`` this is ``/a/b``.
        """
        return os.path.dirname(self.path) or os.sep

    def has_tag(self, tag: str) -> bool:
        """Check for an exact tag match."""
        return tag in self.tags

    def add_tag(self, tag: str) -> bool:
        """Append a tag unless it is already present.

        Args:
            tag: Tag to add.

        Returns:
            True if the tag was added, False if it was already there.
        """
        if tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def covers(self, path: str) -> bool:
        """Check whether this directory mark contains ``path``.

        Only directory marks cover anything; containment is a plain
        string-prefix test on the normalized paths.
        """
        return self.is_dir and path.startswith(self.path)

    def to_line(self) -> str:
        """Serialize to a staging file line (without newline)."""
        return " ".join([self.path, *self.tags])

    @classmethod
    def from_tokens(cls, tokens: list[str]) -> "Mark":
        """Build a mark from whitespace-split staging file tokens.

        Args:
            tokens: Token 0 is the path, the remainder are tags.

        Returns:
            New Mark. Duplicate tags are preserved.

        Raises:
            ValueError: If there are no tokens.
        """
        if not tokens:
            msg = "Cannot build a mark from an empty line"
            raise ValueError(msg)
        return cls(path=tokens[0], tags=list(tokens[1:]))
