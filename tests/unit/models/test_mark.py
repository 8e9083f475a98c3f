"""Unit tests for the Mark model."""

import pytest
from markctl.models.mark import Mark


class TestMarkInit:
    """Tests for Mark construction."""

    def test_defaults_to_no_tags(self) -> None:
        """A new mark carries no tags."""
        mark = Mark(path="/a/b.txt")
        assert mark.tags == []

    def test_empty_path_rejected(self) -> None:
        """Empty paths are rejected."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            Mark(path="")

    def test_tags_not_shared_between_instances(self) -> None:
        """Each mark gets its own tag list."""
        first = Mark(path="/a")
        second = Mark(path="/b")
        first.tags.append("x")
        assert second.tags == []


class TestMarkPathParts:
    """Tests for is_dir, base and dir."""

    def test_file_mark(self) -> None:
        """File marks split into directory and name."""
        mark = Mark(path="/x/y/z.txt")
        assert mark.is_dir is False
        assert mark.base == "z.txt"
        assert mark.dir == "/x/y"

    def test_directory_mark(self) -> None:
        """Directory marks ignore the trailing separator for base."""
        mark = Mark(path="/a/b/")
        assert mark.is_dir is True
        assert mark.base == "b"
        assert mark.dir == "/a/b"

    def test_root_directory(self) -> None:
        """The root directory is its own base and dir."""
        mark = Mark(path="/")
        assert mark.is_dir is True
        assert mark.base == "/"
        assert mark.dir == "/"

    def test_top_level_file(self) -> None:
        """A file directly under root has root as its dir."""
        assert Mark(path="/file").dir == "/"


class TestMarkTags:
    """Tests for tag handling."""

    def test_add_tag(self) -> None:
        """add_tag appends new tags in order."""
        mark = Mark(path="/a")
        assert mark.add_tag("one") is True
        assert mark.add_tag("two") is True
        assert mark.tags == ["one", "two"]

    def test_add_tag_twice(self) -> None:
        """add_tag refuses duplicates."""
        mark = Mark(path="/a")
        mark.add_tag("done")
        assert mark.add_tag("done") is False
        assert mark.tags == ["done"]

    def test_has_tag_is_exact(self) -> None:
        """has_tag matches whole tags only."""
        mark = Mark(path="/a", tags=["review"])
        assert mark.has_tag("review") is True
        assert mark.has_tag("rev") is False


class TestMarkCovers:
    """Tests for directory containment."""

    def test_directory_covers_descendant(self) -> None:
        """Directory marks cover paths beneath them."""
        assert Mark(path="/a/b/").covers("/a/b/c/d.txt") is True

    def test_file_covers_nothing(self) -> None:
        """File marks never cover other paths."""
        assert Mark(path="/a/b").covers("/a/b/c") is False

    def test_sibling_with_common_prefix(self) -> None:
        """The trailing separator keeps /a/b/ from covering /a/bc."""
        assert Mark(path="/a/b/").covers("/a/bc") is False


class TestMarkSerialization:
    """Tests for line conversion."""

    def test_to_line(self) -> None:
        """Path and tags are joined by single spaces."""
        assert Mark(path="/a/b", tags=["x", "y"]).to_line() == "/a/b x y"

    def test_to_line_without_tags(self) -> None:
        """A mark without tags serializes to its path."""
        assert Mark(path="/a/b/").to_line() == "/a/b/"

    def test_from_tokens_keeps_duplicates(self) -> None:
        """Duplicate tags from a file are preserved."""
        mark = Mark.from_tokens(["/a", "t", "t"])
        assert mark.path == "/a"
        assert mark.tags == ["t", "t"]

    def test_from_tokens_empty(self) -> None:
        """An empty token list is rejected."""
        with pytest.raises(ValueError, match="empty line"):
            Mark.from_tokens([])
