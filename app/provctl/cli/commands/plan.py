"""Plan command implementation.

Shows the action each declaration would get, without executing
anything and without writing the status cache.
"""

import typer

from provctl.cli.display import create_plan_table, print_plan_summary
from provctl.cli.types import (
    ConfigOption,
    MaxAgeOption,
    NoCacheOption,
    build_reconciler,
    load_configuration,
)
from provctl.core.reconciler import PrerequisiteError
from provctl.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Show planned actions without changing anything.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_plan(
    ctx: typer.Context,
    config: ConfigOption = None,
    no_cache: NoCacheOption = False,
    max_age: MaxAgeOption = None,
) -> None:
    """Show the planned action for every declaration.

    Examples:
        provctl plan                # Plan against the status cache
        provctl plan --no-cache     # Probe everything first
    """
    if ctx.invoked_subcommand is not None:
        return

    configuration = load_configuration(config)
    reconciler = build_reconciler(configuration, no_cache=no_cache, max_age_hours=max_age)

    try:
        reconciler.check_prerequisites()
    except PrerequisiteError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = reconciler.obtain_snapshot(configuration, dry_run=True)
    plan = reconciler.plan(configuration, source.snapshot)

    if not plan:
        print_info("The configuration declares no resources.")
        return

    console.print(create_plan_table(plan))
    print_plan_summary(plan)
