"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep user config and the real staging file out of every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("MARK_STAGING", raising=False)
    return config_home


@pytest.fixture
def staging_file(tmp_path: Path) -> Path:
    """Location for a staging file that does not exist yet."""
    return tmp_path / "state" / ".mark-staging"


@pytest.fixture
def sample_staging_text() -> str:
    """Staging file content with comments, blanks and tags."""
    return """
# this file was automatically created by "mark add"
# you can edit it and mark will still work properly, but
# mark will happily overwrite it as well.

/home/user/notes.txt todo review
/home/user/src/
  /home/user/indented.txt ignored
/home/user/report.log done done
"""
