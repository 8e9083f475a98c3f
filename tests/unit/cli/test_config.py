"""Unit tests for the config command."""

import json
from pathlib import Path

from markctl.cli.main import app
from markctl.core.settings import MarkSettings, load_settings
from typer.testing import CliRunner


class TestConfigCommand:
    """Tests for markctl config."""

    def test_config_path(self, runner: CliRunner, isolated_env: Path) -> None:
        """config path prints the settings location."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(isolated_env / "markctl" / "config.toml")

    def test_config_init(self, runner: CliRunner, isolated_env: Path) -> None:
        """config init writes default settings."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        settings_path = isolated_env / "markctl" / "config.toml"
        assert load_settings(settings_path) == MarkSettings()

    def test_config_init_refuses_overwrite(self, runner: CliRunner) -> None:
        """An existing settings file needs --force."""
        runner.invoke(app, ["config", "init"])

        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(app, ["config", "init", "--force"])
        assert result.exit_code == 0

    def test_config_show_json(self, runner: CliRunner) -> None:
        """config show reflects global options."""
        result = runner.invoke(app, ["--staging", "/tmp/x", "--dry", "config", "show", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["staging_path"] == "/tmp/x"
        assert data["dry_run"] is True

    def test_config_show_table(self, runner: CliRunner) -> None:
        """config show renders a table by default."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "Effective Settings" in result.stdout
