"""Configuration file I/O operations.

This module provides functions for loading configuration files in TOML
format with validation using Pydantic models, and for writing the
starter configuration created by ``provctl init``.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from provctl.core.paths import get_config_path
from provctl.models.config import Configuration


class ConfigError(Exception):
    """Base exception for configuration-related errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration content is invalid."""


def load_config(path: Path | None = None) -> Configuration:
    """Load and validate a configuration from a TOML file.

    Args:
        path: Path to the configuration file. If None, uses the default path.

    Returns:
        Validated Configuration object.

    Raises:
        ConfigNotFoundError: If the file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Configuration not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read configuration: {e}") from e

    try:
        return Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration content: {e}") from e


def config_exists(path: Path | None = None) -> bool:
    """Check if a configuration file exists.

    Args:
        path: Path to check. If None, uses the default path.
    """
    return (path or get_config_path()).exists()


def starter_config() -> dict[str, Any]:
    """Return the document written by ``provctl init``."""
    return {
        "packages": [
            {"id": "Git.Git", "name": "Git"},
            {"id": "GitHub.cli", "name": "GitHub CLI"},
            {"id": "JanDeDobbeleer.OhMyPosh", "name": "Oh My Posh"},
            {"id": "Microsoft.PowerShell", "name": "PowerShell"},
        ],
        "theme": {"theme": "paradox"},
        "fonts": [
            {
                "id": "Meslo",
                "family": "MesloLGM Nerd Font",
                "files": ["MesloLGMNerdFont-Regular.ttf"],
                "consumers": ["windows-terminal"],
            }
        ],
        "repository": {"auth": {"hostname": "github.com"}},
        "os_settings": [
            {
                "id": "show-file-extensions",
                "name": "Show file extensions",
                "key": "HKCU\\Software\\Microsoft\\Windows\\CurrentVersion\\Explorer\\Advanced",
                "value_name": "HideFileExt",
                "value": False,
                "true_value": 1,
                "false_value": 0,
                "restart_shell": True,
            }
        ],
        "cache": {"max_age_hours": 24.0},
    }


def save_config(data: dict[str, Any], path: Path | None = None) -> Path:
    """Write a configuration document to a TOML file.

    The file is written atomically through a temporary file in the same
    directory and os.replace(). The document is validated first so that
    an invalid document never reaches disk.

    Args:
        data: Configuration document.
        path: Target path. If None, uses the default path.

    Returns:
        Path where the configuration was saved.

    Raises:
        ConfigValidationError: If the document is invalid.
        ConfigError: If the file cannot be written.
    """
    try:
        Configuration.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration content: {e}") from e

    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write configuration: {e}") from e

    return config_path
