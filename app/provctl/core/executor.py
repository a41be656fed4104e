"""Plan execution.

Applies planned actions one at a time in plan order. A failing item is
recorded and execution moves on to the next one. In dry-run mode no
operator is called at all.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from provctl.models.action import ActionResult, ActionType, ExecutionReport, Outcome
from provctl.operators.base import OPERATOR_ERRORS

if TYPE_CHECKING:
    from provctl.models.action import PlannedAction
    from provctl.models.config import ResourceKind
    from provctl.models.status import StatusSnapshot
    from provctl.operators.base import Operator
    from provctl.utils.shell import CommandResult

logger = logging.getLogger(__name__)

# Outcomes for actions that are never applied.
_PASSIVE_OUTCOMES: dict[ActionType, Outcome] = {
    ActionType.SKIP: Outcome.SKIPPED,
    ActionType.DISABLED: Outcome.DISABLED,
    ActionType.UNAVAILABLE: Outcome.UNAVAILABLE,
}


class Executor:
    """Applies or simulates a plan.

    Attributes:
        operators: Operator per resource kind.
    """

    def __init__(
        self,
        operators: Mapping[ResourceKind, Operator],
        restart_shell: Callable[[], CommandResult] | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            operators: Operator per resource kind.
            restart_shell: Restarts the desktop shell; called at most once
                per execution, after all items.
        """
        self.operators = operators
        self._restart_shell = restart_shell

    def execute(self, plan: list[PlannedAction], dry_run: bool = False) -> ExecutionReport:
        """Execute a plan.

        Args:
            plan: Planned actions in order.
            dry_run: If True, report mutating actions as WOULD_APPLY
                without calling any operator.

        Returns:
            ExecutionReport with one result per planned action.
        """
        results: list[ActionResult] = []

        for planned in plan:
            passive = _PASSIVE_OUTCOMES.get(planned.action_type)
            if passive is not None:
                results.append(ActionResult(planned=planned, outcome=passive))
            elif dry_run:
                results.append(
                    ActionResult(
                        planned=planned,
                        outcome=Outcome.WOULD_APPLY,
                        message=f"Would {planned.label.lower()}",
                    )
                )
            else:
                results.append(self.operators[planned.kind].run(planned))

        warnings: list[str] = []
        if not dry_run and any(r.success and r.restart_shell for r in results):
            warning = self._restart_desktop_shell()
            if warning:
                warnings.append(warning)

        return ExecutionReport(results=tuple(results), dry_run=dry_run, warnings=tuple(warnings))

    def _restart_desktop_shell(self) -> str | None:
        """Restart the desktop shell, returning a warning on failure."""
        if self._restart_shell is None:
            return None
        try:
            result = self._restart_shell()
        except OPERATOR_ERRORS as e:
            logger.warning("Desktop shell restart failed: %s", e)
            return f"Desktop shell restart failed: {e}"
        if not result.success:
            detail = result.error_text(f"exit code {result.returncode}")
            logger.warning("Desktop shell restart failed: %s", detail)
            return f"Desktop shell restart failed: {detail}"
        return None


def apply_results(snapshot: StatusSnapshot, report: ExecutionReport) -> StatusSnapshot:
    """Derive the post-execution snapshot without re-probing.

    Every applied item is marked satisfied; everything else is left
    as it was. Dry-run reports leave the snapshot unchanged.

    Args:
        snapshot: Snapshot the plan was built from.
        report: Execution report.

    Returns:
        A new snapshot (or ``snapshot`` itself if nothing changed).
    """
    if report.dry_run:
        return snapshot

    updated = [r.planned.status.mark_installed() for r in report.results if r.success]
    if not updated:
        return snapshot
    return snapshot.with_statuses(updated)
