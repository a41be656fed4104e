"""Cache commands.

`provctl cache show` lists the cached statuses and whether the cache is
still valid; `provctl cache clear` deletes it so the next run probes
everything.
"""

from datetime import timedelta
from pathlib import Path
import typer
from rich.table import Table

from provctl.cli.types import ConfigOption, MaxAgeOption, load_configuration
from provctl.core.cache import StateCache
from provctl.core.config import config_exists
from provctl.core.paths import get_cache_path
from provctl.core.reconciler import DEFAULT_MAX_AGE
from provctl.models.status import StatusSnapshot
from provctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect or clear the status cache.",
    no_args_is_help=True,
)


def _open_cache(max_age_hours: float | None = None) -> StateCache:
    max_age = timedelta(hours=max_age_hours) if max_age_hours is not None else DEFAULT_MAX_AGE
    return StateCache(get_cache_path(), max_age)


def _configured_max_age(config: Path | None) -> float | None:
    """Validity window from the configuration, or None if there is none."""
    if not config_exists(config):
        return None
    return load_configuration(config).cache.max_age_hours


def _create_status_table(snapshot: StatusSnapshot) -> Table:
    table = Table(
        title="Cached Status",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Kind", style="muted", no_wrap=True)
    table.add_column("Id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Installed", justify="center")

    for status in snapshot.statuses:
        installed = "[satisfied]yes[/satisfied]" if status.installed else "[pending]no[/pending]"
        table.add_row(status.kind.value, status.id, status.name, installed)

    return table


@app.command()
def show(
    config: ConfigOption = None,
    max_age: MaxAgeOption = None,
) -> None:
    """Show the cached statuses.

    Freshness is judged with --max-age, else the configuration's
    `[cache] max_age_hours`, else 24 hours.
    """
    if max_age is None:
        max_age = _configured_max_age(config)
    cache = _open_cache(max_age)
    snapshot = cache.load()

    if snapshot is None:
        print_info(f"No status cache at {cache.path}")
        return

    console.print(_create_status_table(snapshot))
    state = "[success]valid[/success]" if cache.is_fresh(snapshot) else "[warning]expired[/warning]"
    console.print(
        f"\nSaved {snapshot.timestamp.isoformat(timespec='minutes')} ({state}), "
        f"{len(snapshot)} entr{'y' if len(snapshot) == 1 else 'ies'}"
    )


@app.command()
def clear() -> None:
    """Delete the status cache."""
    cache = _open_cache()
    try:
        removed = cache.clear()
    except OSError as e:
        print_error(f"Failed to delete status cache: {e}")
        raise typer.Exit(code=1) from e

    if removed:
        print_success(f"Status cache removed: {cache.path}")
    else:
        print_info("No status cache to remove.")
