"""Apply command implementation.

Brings the machine in line with the configuration: probes (or reuses
the status cache), plans one action per declaration, and executes the
plan after confirmation.
"""

from typing import Annotated

import typer

from provctl.cli.display import (
    count_pending,
    create_plan_table,
    create_results_table,
    print_plan_summary,
    print_report_summary,
    print_warnings,
)
from provctl.cli.types import (
    ConfigOption,
    MaxAgeOption,
    NoCacheOption,
    build_reconciler,
    load_configuration,
)
from provctl.core.reconciler import PrerequisiteError
from provctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Apply the configuration to this machine.",
    invoke_without_command=True,
)


def _confirm_actions(action_count: int) -> bool:
    """Prompt user to confirm action execution.

    Args:
        action_count: Number of actions that would change the machine.

    Returns:
        True if user confirms, False otherwise.
    """
    return typer.confirm(
        f"\nProceed with {action_count} action(s)?",
        default=False,
    )


@app.callback(invoke_without_command=True)
def apply_config(
    ctx: typer.Context,
    config: ConfigOption = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
    no_cache: NoCacheOption = False,
    max_age: MaxAgeOption = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
) -> None:
    """Apply the configuration to this machine.

    Every declaration gets exactly one action: skip when satisfied,
    install/configure/pull when missing, and nothing when it is disabled
    or its tool is not available. Failures of one item never stop the
    others.

    Examples:
        provctl apply --dry-run         # Preview changes
        provctl apply --yes             # Apply without confirmation
        provctl apply --no-cache        # Re-probe everything first
        provctl apply -c work.toml      # Use another configuration
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    configuration = load_configuration(config)
    reconciler = build_reconciler(configuration, no_cache=no_cache, max_age_hours=max_age)

    try:
        reconciler.check_prerequisites()
    except PrerequisiteError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = reconciler.obtain_snapshot(configuration, dry_run=dry_run)
    if not quiet:
        origin = "status cache" if source.from_cache else "fresh probe"
        print_info(f"Using {origin} ({len(source.probed)} declaration(s) probed)")

    plan = reconciler.plan(configuration, source.snapshot)
    pending = count_pending(plan)

    if not quiet:
        console.print(create_plan_table(plan, dry_run))
        print_plan_summary(plan)

    if pending == 0:
        print_success("Machine already matches the configuration. Nothing to do.")
    elif not dry_run and not yes and not _confirm_actions(pending):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    if pending and not dry_run:
        console.print("\n[bold]Executing actions...[/bold]\n")

    run = reconciler.execute(source, plan, dry_run=dry_run)

    if pending and not quiet:
        console.print(create_results_table(run.report))
    print_warnings(run.report)
    for warning in run.warnings:
        print_warning(warning)
    print_report_summary(run.report)

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
        return

    if not run.report.succeeded:
        raise typer.Exit(code=1)
