"""Tool-runtime operator for dotnet global tools."""

from provctl.models.action import ActionResult, ActionType, PlannedAction
from provctl.models.config import ResourceKind, ToolDeclaration
from provctl.operators.base import Operator


class ToolOperator(Operator[ToolDeclaration]):
    """Installs dotnet global tools."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.TOOL

    @property
    def action_type(self) -> ActionType:
        return ActionType.INSTALL

    def is_available(self) -> bool:
        return self._env.dotnet.is_available()

    def apply(self, declaration: ToolDeclaration, planned: PlannedAction) -> ActionResult:
        result = self._env.dotnet.install(declaration.id, declaration.version)
        return self.from_command(planned, result, "dotnet tool install")
