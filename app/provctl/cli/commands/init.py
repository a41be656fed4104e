"""Init command implementation.

Writes a starter configuration the user can edit.
"""

from pathlib import Path
from typing import Annotated

import typer

from provctl.core.config import ConfigError, config_exists, save_config, starter_config
from provctl.core.paths import get_config_path
from provctl.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Create a starter configuration.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the configuration file.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing configuration.",
        ),
    ] = False,
) -> None:
    """Create a starter configuration.

    The starter declares the tools provctl itself relies on (Git, the
    GitHub CLI, Oh My Posh, PowerShell), a prompt theme, a Nerd Font and
    one Explorer setting. Edit it before the first `provctl apply`.

    Examples:
        provctl init                    # Write to the default location
        provctl init --output my.toml   # Write somewhere else
        provctl init --force            # Overwrite an existing file
    """
    if ctx.invoked_subcommand is not None:
        return

    output_path = output or get_config_path()

    if config_exists(output_path):
        if not force:
            print_error(f"Configuration already exists: {output_path}")
            print_info("Use --force to overwrite or specify a different path with --output.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing configuration: {output_path}")

    try:
        saved_path = save_config(starter_config(), output_path)
    except ConfigError as e:
        print_error(f"Failed to write configuration: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Configuration created: {saved_path}")
    console.print("[muted]Review it, then run 'provctl apply --dry-run'.[/muted]")
