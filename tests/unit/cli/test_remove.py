"""Unit tests for the remove command."""

from collections.abc import Callable
from pathlib import Path

from click.testing import Result

Invoke = Callable[..., Result]
StagedPaths = Callable[[], list[str]]


class TestRemoveCommand:
    """Tests for markctl remove."""

    def test_remove_by_glob(
        self, invoke: Invoke, tmp_path: Path, staged_paths: StagedPaths
    ) -> None:
        """Marks whose names match are removed."""
        invoke("add", *(str(tmp_path / n) for n in ("foo.txt", "bar.txt", "foo.log")))

        result = invoke("remove", "foo.*")

        assert result.exit_code == 0
        assert "Removed 2 path(s)" in result.output
        assert staged_paths() == [str(tmp_path / "bar.txt")]

    def test_remove_everything(
        self, invoke: Invoke, tmp_path: Path, staged_paths: StagedPaths
    ) -> None:
        """remove without patterns clears the staging area."""
        invoke("add", str(tmp_path / "a"), str(tmp_path / "b"))

        result = invoke("remove")

        assert result.exit_code == 0
        assert staged_paths() == []

    def test_remove_no_match(
        self, invoke: Invoke, tmp_path: Path, staging_file: Path
    ) -> None:
        """A pattern matching nothing leaves the file untouched."""
        invoke("add", str(tmp_path / "a"))
        before = staging_file.read_text(encoding="utf-8")

        result = invoke("remove", "zzz*")

        assert result.exit_code == 0
        assert "No staged paths matched" in result.output
        assert staging_file.read_text(encoding="utf-8") == before
