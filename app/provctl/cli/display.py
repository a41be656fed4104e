"""Shared Rich display functions for plans and results.

Provides reusable table builders and summary printers used by the apply
and plan commands.
"""

from rich.table import Table

from provctl.models.action import ActionType, ExecutionReport, Outcome, PlannedAction
from provctl.utils.formatting import console, print_success, print_warning

_ACTION_STYLES: dict[ActionType, str] = {
    ActionType.SKIP: "muted",
    ActionType.INSTALL: "added",
    ActionType.CONFIGURE: "changed",
    ActionType.PULL: "added",
    ActionType.UNAVAILABLE: "warning",
    ActionType.DISABLED: "muted",
}

_OUTCOME_LABELS: dict[Outcome, str] = {
    Outcome.APPLIED: "[success]OK[/success]",
    Outcome.FAILED: "[error]FAIL[/error]",
    Outcome.SKIPPED: "[muted]SKIP[/muted]",
    Outcome.DISABLED: "[muted]OFF[/muted]",
    Outcome.UNAVAILABLE: "[warning]N/A[/warning]",
    Outcome.WOULD_APPLY: "[info]WOULD[/info]",
}

# Order and wording of the end-of-run counts
_SUMMARY_PARTS: tuple[tuple[Outcome, str, str], ...] = (
    (Outcome.APPLIED, "applied", "success"),
    (Outcome.WOULD_APPLY, "would apply", "info"),
    (Outcome.SKIPPED, "skipped", "muted"),
    (Outcome.DISABLED, "disabled", "muted"),
    (Outcome.UNAVAILABLE, "unavailable", "warning"),
    (Outcome.FAILED, "failed", "error"),
)


def _state_label(planned: PlannedAction) -> str:
    if planned.status.installed:
        return "[satisfied]present[/satisfied]"
    return "[pending]missing[/pending]"


def _action_label(planned: PlannedAction) -> str:
    style = _ACTION_STYLES[planned.action_type]
    return f"[{style}]{planned.label}[/{style}]"


def create_plan_table(plan: list[PlannedAction], dry_run: bool = False) -> Table:
    """Create a Rich table displaying planned actions.

    Builds a formatted table with Kind, Name, State and Action columns,
    one row per declaration in configuration order.

    Args:
        plan: Planned actions to display.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for plan display.
    """
    title = "Planned Actions (Dry Run)" if dry_run else "Planned Actions"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Kind", style="muted", no_wrap=True)
    table.add_column("Name", no_wrap=True)
    table.add_column("State", width=10)
    table.add_column("Action")

    for planned in plan:
        table.add_row(
            planned.kind.value,
            planned.name,
            _state_label(planned),
            _action_label(planned),
        )

    return table


def create_results_table(report: ExecutionReport) -> Table:
    """Create a Rich table displaying per-item results.

    Each row shows the outcome, the item, its state before the run, the
    action taken and the result message.

    Args:
        report: Execution report to display.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results (Dry Run)" if report.dry_run else "Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Kind", style="muted", no_wrap=True)
    table.add_column("Name", no_wrap=True)
    table.add_column("State")
    table.add_column("Action")
    table.add_column("Message")

    for result in report.results:
        if result.failed:
            message = result.error or "Unknown error"
            if result.exit_code is not None:
                message = f"{message} (exit code {result.exit_code})"
        else:
            message = result.message or ""

        table.add_row(
            _OUTCOME_LABELS[result.outcome],
            result.planned.kind.value,
            result.planned.name,
            _state_label(result.planned),
            _action_label(result.planned),
            f"[muted]{message}[/muted]",
        )

    return table


def count_pending(plan: list[PlannedAction]) -> int:
    """Count the actions that would change the machine."""
    return sum(1 for planned in plan if planned.action_type.is_mutating)


def print_plan_summary(plan: list[PlannedAction]) -> None:
    """Print how many declarations need work.

    Args:
        plan: Planned actions.
    """
    pending = count_pending(plan)
    satisfied = sum(1 for planned in plan if planned.action_type == ActionType.SKIP)
    unavailable = sum(1 for planned in plan if planned.action_type == ActionType.UNAVAILABLE)

    parts = [f"[added]{pending} to apply[/added]", f"[muted]{satisfied} satisfied[/muted]"]
    if unavailable:
        parts.append(f"[warning]{unavailable} unavailable[/warning]")
    console.print(f"\nSummary: {', '.join(parts)}")


def print_warnings(report: ExecutionReport) -> None:
    """Print item and run-level warnings of a report."""
    for warning in report.all_warnings:
        print_warning(warning)


def print_report_summary(report: ExecutionReport) -> None:
    """Print the end-of-run counts.

    Shows a success line when nothing failed and there was something to
    do, followed by the per-outcome counts.

    Args:
        report: Execution report.
    """
    counts = report.counts

    if report.succeeded and counts[Outcome.APPLIED]:
        print_success(f"All {counts[Outcome.APPLIED]} action(s) completed successfully.")

    parts = [
        f"[{style}]{counts[outcome]} {text}[/{style}]"
        for outcome, text, style in _SUMMARY_PARTS
        if counts[outcome] or outcome in (Outcome.APPLIED, Outcome.FAILED)
    ]
    console.print(f"\n{', '.join(parts)}")
