"""Fixtures for CLI tests."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import Result
from markctl.cli.main import app
from typer.testing import CliRunner


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo the root logger setup done by the CLI callback."""
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    """Typer CLI runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, staging_file: Path) -> Callable[..., Result]:
    """Invoke markctl against the test staging file."""

    def _invoke(*args: str) -> Result:
        return runner.invoke(app, ["--staging", str(staging_file), *args])

    return _invoke


@pytest.fixture
def staged_paths(staging_file: Path) -> Callable[[], list[str]]:
    """Read back the lines of the staging file that hold marks."""

    def _read() -> list[str]:
        text = staging_file.read_text(encoding="utf-8")
        return [line for line in text.splitlines() if line and not line.startswith("#")]

    return _read
