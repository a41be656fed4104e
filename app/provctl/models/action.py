"""Action models for reconciliation.

This module defines the planned action for each declared resource and
the outcome of executing (or simulating) it.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from provctl.models.config import (
    Declaration,
    PackageDeclaration,
    ResourceKind,
    ToolDeclaration,
)
from provctl.models.status import ResourceStatus


class ActionType(Enum):
    """Action assigned to a declared resource.

    Attributes:
        SKIP: Already satisfied.
        INSTALL: Not installed; install it.
        CONFIGURE: Not configured; configure it.
        PULL: Image not present locally; pull it.
        UNAVAILABLE: The collaborator tool needed to act is absent.
        DISABLED: The declaration is marked inactive.
    """

    SKIP = "skip"
    INSTALL = "install"
    CONFIGURE = "configure"
    PULL = "pull"
    UNAVAILABLE = "unavailable"
    DISABLED = "disabled"

    @property
    def is_mutating(self) -> bool:
        """Check if this action changes the machine when applied."""
        return self in (ActionType.INSTALL, ActionType.CONFIGURE, ActionType.PULL)


@dataclass(frozen=True, slots=True)
class PlannedAction:
    """A declared resource paired with its observed status and action.

    Attributes:
        kind: Resource kind.
        declaration: The declaration from the configuration.
        status: The probed or cached status the action was derived from.
        action_type: Action derived by the planner.
    """

    kind: ResourceKind
    declaration: Declaration
    status: ResourceStatus
    action_type: ActionType

    @property
    def id(self) -> str:
        """Declaration identifier."""
        return self.declaration.id

    @property
    def name(self) -> str:
        """Declaration display name."""
        return self.declaration.display_name

    @property
    def label(self) -> str:
        """Human-readable action, e.g. ``Install v2.1``."""
        text = self.action_type.value.capitalize()
        if self.action_type == ActionType.INSTALL and isinstance(
            self.declaration, (PackageDeclaration, ToolDeclaration)
        ):
            if self.declaration.version:
                text = f"{text} v{self.declaration.version}"
        return text


class Outcome(Enum):
    """Result of handling one planned action."""

    APPLIED = "applied"
    FAILED = "failed"
    SKIPPED = "skipped"
    DISABLED = "disabled"
    UNAVAILABLE = "unavailable"
    WOULD_APPLY = "would_apply"


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of executing a planned action.

    Attributes:
        planned: The action that was handled.
        outcome: What happened.
        message: Optional success message or additional information.
        error: Error message if the action failed.
        exit_code: Exit code of the failing command, if any.
        warnings: Best-effort follow-up steps that failed.
        restart_shell: The action needs a desktop shell restart to show.
    """

    planned: PlannedAction
    outcome: Outcome
    message: str | None = None
    error: str | None = None
    exit_code: int | None = None
    warnings: tuple[str, ...] = ()
    restart_shell: bool = False

    @property
    def success(self) -> bool:
        """Check if the action was applied."""
        return self.outcome == Outcome.APPLIED

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return self.outcome == Outcome.FAILED


def applied(
    planned: PlannedAction,
    message: str | None = None,
    warnings: tuple[str, ...] = (),
    restart_shell: bool = False,
) -> ActionResult:
    """Create a successful result for a planned action."""
    return ActionResult(
        planned=planned,
        outcome=Outcome.APPLIED,
        message=message or "Operation completed",
        warnings=warnings,
        restart_shell=restart_shell,
    )


def failed(planned: PlannedAction, error: str, exit_code: int | None = None) -> ActionResult:
    """Create a failed result for a planned action."""
    return ActionResult(
        planned=planned,
        outcome=Outcome.FAILED,
        error=error,
        exit_code=exit_code,
    )


@dataclass(frozen=True, slots=True)
class ExecutionReport:
    """Per-item results of one execution pass.

    Attributes:
        results: One result per planned action, in plan order.
        dry_run: Whether the pass was simulated.
        warnings: Run-level warnings (e.g. a failed shell restart).
    """

    results: tuple[ActionResult, ...]
    dry_run: bool = False
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def counts(self) -> dict[Outcome, int]:
        """Number of results per outcome; every outcome is present."""
        counter = Counter(result.outcome for result in self.results)
        return {outcome: counter.get(outcome, 0) for outcome in Outcome}

    @property
    def succeeded(self) -> bool:
        """Check that no item failed."""
        return not any(result.failed for result in self.results)

    @property
    def all_warnings(self) -> tuple[str, ...]:
        """Item warnings followed by run-level warnings."""
        item_warnings = tuple(w for result in self.results for w in result.warnings)
        return item_warnings + self.warnings
