"""Unit tests for the exec command.

These run real commands through sh against files in tmp_path.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import Result

Invoke = Callable[..., Result]
StagedPaths = Callable[[], list[str]]


@pytest.fixture
def two_files(tmp_path: Path) -> list[Path]:
    """Create two small files to stage."""
    files = [tmp_path / "one.txt", tmp_path / "two.txt"]
    for f in files:
        f.write_text(f"content of {f.name}\n", encoding="utf-8")
    return files


class TestExecCommand:
    """Tests for markctl exec."""

    def test_exec_runs_and_clears(
        self, invoke: Invoke, two_files: list[Path], staged_paths: StagedPaths
    ) -> None:
        """Commands run per mark, output is forwarded, marks are cleared."""
        invoke("add", *(str(f) for f in two_files))

        result = invoke("exec", "cat", "_")

        assert result.exit_code == 0
        assert "content of one.txt" in result.stdout
        assert "content of two.txt" in result.stdout
        assert result.stdout.index("one.txt") < result.stdout.index("two.txt")
        assert "2 of 2 completed" in result.output
        assert staged_paths() == []

    def test_exec_retain(
        self, invoke: Invoke, two_files: list[Path], staged_paths: StagedPaths
    ) -> None:
        """--retain keeps the marks after exec."""
        invoke("add", *(str(f) for f in two_files))

        result = invoke("--retain", "exec", "true")

        assert result.exit_code == 0
        assert len(staged_paths()) == 2

    def test_exec_tag_filter(
        self, invoke: Invoke, two_files: list[Path], staged_paths: StagedPaths
    ) -> None:
        """--tag limits exec to tagged marks and keeps the staging area."""
        invoke("add", *(str(f) for f in two_files))
        invoke("tag", "pick", "two.*")

        result = invoke("--tag", "pick", "exec", "echo", "_.base")

        assert result.exit_code == 0
        assert "two.txt" in result.stdout
        assert "one.txt" not in result.stdout
        assert "1 of 2 completed" in result.output
        assert len(staged_paths()) == 2

    def test_exec_dry_run(
        self, invoke: Invoke, two_files: list[Path], staged_paths: StagedPaths
    ) -> None:
        """--dry prints commands without running them."""
        invoke("add", str(two_files[0]))

        result = invoke("--dry", "exec", "rm", "_")

        assert result.exit_code == 0
        assert f"sh -c rm {two_files[0]}" in result.stdout
        assert two_files[0].exists()
        assert "0 of 1 completed" in result.output
        assert staged_paths() == [str(two_files[0])]

    def test_exec_verbose(self, invoke: Invoke, two_files: list[Path]) -> None:
        """-v prints each command before running it."""
        invoke("add", str(two_files[0]))

        result = invoke("-v", "exec", "true", "_.base")

        assert result.exit_code == 0
        assert "sh -c true one.txt" in result.stdout

    def test_exec_failure_continues(
        self, invoke: Invoke, tmp_path: Path, two_files: list[Path]
    ) -> None:
        """A failing mark is reported, the rest still run, exit code is 1."""
        missing = tmp_path / "missing.txt"
        invoke("add", str(two_files[0]), str(missing), str(two_files[1]))

        result = invoke("exec", "test", "-e", "_")

        assert result.exit_code == 1
        assert "2 of 3 completed" in result.output

    def test_exec_passes_option_tokens(self, invoke: Invoke, two_files: list[Path]) -> None:
        """Options after the command name belong to the command."""
        invoke("add", str(two_files[0]))

        result = invoke("exec", "wc", "-l", "_")

        assert result.exit_code == 0
        assert "1 " in result.stdout

    def test_exec_requires_command(self, invoke: Invoke) -> None:
        """exec without a command prints usage and fails."""
        result = invoke("exec")

        assert result.exit_code == 1
        assert "markctl exec <command>" in result.output

    def test_exec_missing_shell(
        self, invoke: Invoke, isolated_env: Path, two_files: list[Path]
    ) -> None:
        """A configured shell that doesn't exist is fatal."""
        config_dir = isolated_env / "markctl"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text(
            'shell = "nonexistent_shell_xyz_12345"\n', encoding="utf-8"
        )
        invoke("add", str(two_files[0]))

        result = invoke("exec", "true")

        assert result.exit_code == 1
        assert "Shell not found" in result.output
