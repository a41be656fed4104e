"""Abstract base class for resource operators.

Operators apply a planned action for one resource kind: install a
package, pull an image, write a setting. They never raise for a failed
external command; failures come back as FAILED results.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from provctl.collaborators import CollaboratorError, Environment
from provctl.models.action import ActionResult, ActionType, PlannedAction, applied, failed
from provctl.models.config import Declaration, ResourceKind
from provctl.utils.shell import CommandResult

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=Declaration)

# Errors an operator may raise while commanding the environment. Any of
# them turns into a FAILED result for the item.
OPERATOR_ERRORS: tuple[type[Exception], ...] = (
    CollaboratorError,
    OSError,
    ValueError,
    subprocess.SubprocessError,
)


class Operator(ABC, Generic[D]):
    """Base class for all operators.

    Example:
        >>> operator = PackageOperator(Environment.default())
        >>> if operator.is_available():
        ...     result = operator.run(planned)
        ...     print(result.outcome)
    """

    def __init__(self, environment: Environment) -> None:
        self._env = environment

    @property
    @abstractmethod
    def kind(self) -> ResourceKind:
        """Return the resource kind this operator handles."""

    @property
    @abstractmethod
    def action_type(self) -> ActionType:
        """Action this operator performs for unsatisfied resources."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the collaborator this operator needs is present.

        Returns:
            True if the operator can act, False otherwise.
        """

    @abstractmethod
    def apply(self, declaration: D, planned: PlannedAction) -> ActionResult:
        """Apply the action for one declaration.

        May raise any of :data:`OPERATOR_ERRORS`.
        """

    def run(self, planned: PlannedAction) -> ActionResult:
        """Apply a planned action without raising.

        Args:
            planned: The action to apply; its kind must match this operator.

        Returns:
            ActionResult with outcome APPLIED or FAILED.

        Raises:
            ValueError: If the planned action's kind doesn't match.
        """
        if planned.kind != self.kind:
            msg = f"Action kind {planned.kind.value} doesn't match operator kind {self.kind.value}"
            raise ValueError(msg)

        logger.info("%s %s %s", planned.label, self.kind.value, planned.id)
        try:
            return self.apply(planned.declaration, planned)
        except OPERATOR_ERRORS as e:
            logger.warning("%s of %s failed: %s", planned.label, planned.id, e)
            return failed(planned, str(e), exit_code=getattr(e, "exit_code", None))

    @staticmethod
    def from_command(planned: PlannedAction, result: CommandResult, what: str) -> ActionResult:
        """Turn a collaborator command result into an action result."""
        if result.success:
            return applied(planned)
        return failed(
            planned,
            result.error_text(f"{what} failed"),
            exit_code=result.returncode,
        )
