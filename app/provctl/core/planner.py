"""Action planning from declarations and observed state.

The planner pairs every current declaration with its status and picks
exactly one action for it. Planning is pure: it reads the snapshot and
collaborator availability and changes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from provctl.models.action import ActionType, PlannedAction
from provctl.models.status import ResourceStatus

if TYPE_CHECKING:
    from provctl.models.config import Configuration, Declaration, ResourceKind
    from provctl.models.status import StatusSnapshot
    from provctl.operators.base import Operator

logger = logging.getLogger(__name__)


def decide_action(
    declaration: Declaration,
    status: ResourceStatus,
    collaborator_available: bool,
    action_type: ActionType,
) -> ActionType:
    """Pick the action for one declaration.

    Priority: DISABLED, then UNAVAILABLE, then SKIP if satisfied,
    otherwise the kind's own action.

    Args:
        declaration: The declaration.
        status: Its observed status.
        collaborator_available: Whether the tool needed to act is present.
        action_type: The kind's action (install, configure or pull).

    Returns:
        The action to take.
    """
    if not declaration.enabled:
        return ActionType.DISABLED
    if not collaborator_available:
        return ActionType.UNAVAILABLE
    if status.installed:
        return ActionType.SKIP
    return action_type


class Planner:
    """Builds the ordered action plan for a configuration.

    Example:
        >>> planner = Planner(build_operators(environment))
        >>> for planned in planner.plan(configuration, snapshot):
        ...     print(planned.name, planned.label)
    """

    def __init__(self, operators: Mapping[ResourceKind, Operator]) -> None:
        self._operators = operators

    def availability(self, kinds: set[ResourceKind]) -> dict[ResourceKind, bool]:
        """Check collaborator availability once per kind."""
        return {kind: self._operators[kind].is_available() for kind in kinds}

    def plan(self, configuration: Configuration, snapshot: StatusSnapshot) -> list[PlannedAction]:
        """Plan one action per declaration, in declaration order.

        Declarations missing from the snapshot are planned as
        unsatisfied.

        Args:
            configuration: Desired state.
            snapshot: Observed state.

        Returns:
            Flat list of planned actions.
        """
        declarations = list(configuration.declarations())
        available = self.availability({kind for kind, _ in declarations})

        planned: list[PlannedAction] = []
        for kind, declaration in declarations:
            status = snapshot.get(kind, declaration.id)
            if status is None:
                logger.debug(
                    "No status for %s %s; assuming unsatisfied", kind.value, declaration.id
                )
                status = ResourceStatus(
                    kind=kind,
                    id=declaration.id,
                    name=declaration.display_name,
                    installed=False,
                )

            action = decide_action(
                declaration,
                status,
                available[kind],
                self._operators[kind].action_type,
            )
            planned.append(
                PlannedAction(
                    kind=kind,
                    declaration=declaration,
                    status=status,
                    action_type=action,
                )
            )

        return planned
