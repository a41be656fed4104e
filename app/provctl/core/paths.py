"""XDG-compliant path management for provctl.

This module provides standardized paths for configuration and state
storage. The same layout is used on Windows, rooted at the user's home
directory, unless the XDG environment variables override it.

Defaults:
- Config: ~/.config/provctl/
- State: ~/.local/state/provctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "provctl"


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
        Path to ~/.config/provctl/ (or XDG_CONFIG_HOME/provctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the status cache that should persist between
    runs but is not configuration.

    Returns:
        Path to ~/.local/state/provctl/ (or XDG_STATE_HOME/provctl/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/provctl/provctl.toml.
    """
    return get_config_dir() / "provctl.toml"


def get_cache_path() -> Path:
    """Get the status cache file path.

    Returns:
        Path to ~/.local/state/provctl/status-cache.json.
    """
    return get_state_dir() / "status-cache.json"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/provctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Returns:
        Path to the state directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")


def expand_path(value: str) -> Path:
    """Expand ``~`` and environment variables in a configured path.

    Environment variables follow the platform's rules (``%VAR%`` is
    only expanded on Windows).

    Args:
        value: Path string from the configuration file.

    Returns:
        Expanded path.
    """
    return Path(os.path.expandvars(value)).expanduser()
