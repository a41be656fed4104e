"""Container image operator."""

from provctl.models.action import ActionResult, ActionType, PlannedAction
from provctl.models.config import ContainerImageDeclaration, ResourceKind
from provctl.operators.base import Operator


class ContainerImageOperator(Operator[ContainerImageDeclaration]):
    """Pulls images with docker."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.CONTAINER_IMAGE

    @property
    def action_type(self) -> ActionType:
        return ActionType.PULL

    def is_available(self) -> bool:
        return self._env.docker.is_available()

    def apply(self, declaration: ContainerImageDeclaration, planned: PlannedAction) -> ActionResult:
        result = self._env.docker.pull(declaration.reference)
        return self.from_command(planned, result, "docker pull")
