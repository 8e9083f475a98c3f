"""User settings for markctl.

Settings replace the global flags of a plain command-line tool with an
explicit value that is threaded into the store, the area and the executor.

Precedence (lowest to highest):
1. Model defaults
2. ~/.config/markctl/config.toml
3. Global command-line options

Example config.toml::

    staging_path = "~/work/.mark-staging"
    preserve_subdirs = true
    shell = "bash"
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from markctl.core.paths import DEFAULT_STAGING_PATH, expand_staging_path, get_settings_path

logger = logging.getLogger(__name__)


class MarkSettings(BaseModel):
    """Behavioral settings for a markctl invocation.

    Attributes:
        create_staging: Create the staging file if it doesn't exist.
        preserve_subdirs: Keep marks under a newly added directory.
        retain_marks: Keep the staging area after exec.
        print_commands: Print each command before running it.
        dry_run: Print commands without running them.
        tag_filter: Only exec marks carrying this tag (empty = all).
        staging_path: Staging file location, ``~`` and ``$VARS`` allowed.
        shell: Shell used to run exec commands (invoked as ``<shell> -c``).
        timeout_seconds: Per-command timeout for exec (None = no limit).
    """

    model_config = ConfigDict(extra="forbid")

    create_staging: Annotated[
        bool,
        Field(description="Create the staging file if missing"),
    ] = True
    preserve_subdirs: Annotated[
        bool,
        Field(description="Keep marks under a newly added directory"),
    ] = False
    retain_marks: Annotated[
        bool,
        Field(description="Keep marks after exec"),
    ] = False
    print_commands: Annotated[
        bool,
        Field(description="Print commands before running them"),
    ] = False
    dry_run: Annotated[
        bool,
        Field(description="Print commands without running them"),
    ] = False
    tag_filter: Annotated[
        str,
        Field(description="Only exec marks carrying this tag"),
    ] = ""
    staging_path: Annotated[
        str,
        Field(min_length=1, description="Staging file location"),
    ] = DEFAULT_STAGING_PATH
    shell: Annotated[
        str,
        Field(min_length=1, description="Shell for exec commands"),
    ] = "sh"
    timeout_seconds: Annotated[
        int | None,
        Field(ge=1, le=86400, description="Per-command timeout in seconds"),
    ] = None

    @property
    def resolved_staging_path(self) -> Path:
        """Staging path with ``~`` and environment variables expanded."""
        return expand_staging_path(self.staging_path)

    def with_overrides(self, **overrides: Any) -> "MarkSettings":
        """Return a copy with non-None overrides applied and re-validated.

        Args:
            **overrides: Field values; None means "not given".

        Returns:
            New MarkSettings instance.

        Raises:
            SettingsValidationError: If an override is invalid.
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return MarkSettings.model_validate(data)
        except ValidationError as e:
            raise SettingsValidationError(f"Invalid setting: {e}") from e


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when settings content is invalid."""


def load_settings(path: Path | None = None) -> MarkSettings:
    """Load settings from a TOML file.

    A missing file is not an error; defaults are returned instead.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated MarkSettings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
        SettingsError: If the file cannot be read.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return MarkSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return MarkSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: MarkSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        settings: The MarkSettings object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null; unset optional values are left out
    data = {k: v for k, v in settings.model_dump().items() if v is not None}

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
