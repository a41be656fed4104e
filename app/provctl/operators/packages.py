"""Package operator: installs packages through winget."""

from provctl.models.action import ActionResult, ActionType, PlannedAction
from provctl.models.config import PackageDeclaration, ResourceKind
from provctl.operators.base import Operator


class PackageOperator(Operator[PackageDeclaration]):
    """Installs packages silently, honouring a pinned version."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.PACKAGE

    @property
    def action_type(self) -> ActionType:
        return ActionType.INSTALL

    def is_available(self) -> bool:
        return self._env.winget.is_available()

    def apply(self, declaration: PackageDeclaration, planned: PlannedAction) -> ActionResult:
        result = self._env.winget.install(declaration.id, declaration.version)
        return self.from_command(planned, result, "winget install")
