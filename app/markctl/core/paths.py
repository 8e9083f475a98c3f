"""XDG-compliant path management for markctl.

This module provides the configuration directory, the location of the
settings and theme files, and expansion of the staging file location.

XDG defaults:
- Config: ~/.config/markctl/
- Staging file: ~/.mark-staging (not under XDG, kept for compatibility)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "markctl"

# Default location of the staging file, before expansion
DEFAULT_STAGING_PATH = "~/.mark-staging"

# Environment variable overriding the staging file location
STAGING_ENV_VAR = "MARK_STAGING"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/markctl/ (or XDG_CONFIG_HOME/markctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/markctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/markctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def expand_staging_path(raw: str) -> Path:
    """Expand ``~`` and environment variables in a staging file location.

    Args:
        raw: Staging path as configured, e.g. "~/.mark-staging".

    Returns:
        Expanded path. Relative paths stay relative to the working directory.
    """
    return Path(os.path.expandvars(os.path.expanduser(raw)))


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
