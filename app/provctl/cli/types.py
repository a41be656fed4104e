"""Shared options and helpers for CLI commands.

This module provides the option types and the configuration/reconciler
setup used by the apply and plan commands.
"""

from datetime import timedelta
from pathlib import Path
from typing import Annotated

import typer

from provctl.collaborators import Environment
from provctl.core.config import ConfigError, ConfigNotFoundError, load_config
from provctl.core.paths import get_cache_path, get_config_path
from provctl.core.reconciler import Reconciler, ReconcilerOptions
from provctl.models.config import Configuration
from provctl.utils.formatting import print_error, print_info

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to the configuration file.",
        dir_okay=False,
    ),
]

NoCacheOption = Annotated[
    bool,
    typer.Option(
        "--no-cache",
        help="Ignore the status cache and probe every declaration.",
    ),
]


def _positive_hours(value: float | None) -> float | None:
    """Reject a cache validity window that is not greater than zero."""
    if value is not None and value <= 0:
        msg = "must be greater than 0"
        raise typer.BadParameter(msg)
    return value


MaxAgeOption = Annotated[
    float | None,
    typer.Option(
        "--max-age",
        help="Status cache validity in hours (overrides the configuration).",
        callback=_positive_hours,
    ),
]


def load_configuration(path: Path | None) -> Configuration:
    """Load the configuration or exit with an error message.

    Args:
        path: Explicit configuration path, or None for the default.

    Returns:
        The validated configuration.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError as e:
        print_error(f"Configuration not found: {path or get_config_path()}")
        print_info("Run 'provctl init' to create a starter configuration.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load configuration: {e}")
        raise typer.Exit(code=1) from e


def build_reconciler(
    configuration: Configuration,
    no_cache: bool = False,
    max_age_hours: float | None = None,
) -> Reconciler:
    """Create a reconciler for the current machine.

    Args:
        configuration: Loaded configuration (supplies the default cache age).
        no_cache: Bypass the status cache.
        max_age_hours: Cache validity override in hours.

    Returns:
        Reconciler bound to the default environment.
    """
    hours = max_age_hours if max_age_hours is not None else configuration.cache.max_age_hours
    options = ReconcilerOptions(
        cache_path=get_cache_path(),
        max_age=timedelta(hours=hours),
        use_cache=not no_cache,
    )
    return Reconciler(Environment.default(), options)
