"""Operators for source-control resources: auth, extensions and clones."""

from provctl.core.paths import expand_path
from provctl.models.action import ActionResult, ActionType, PlannedAction, applied, failed
from provctl.models.config import (
    CloneDeclaration,
    GhAuthDeclaration,
    GhExtensionDeclaration,
    ResourceKind,
)
from provctl.operators.base import Operator


class GhAuthOperator(Operator[GhAuthDeclaration]):
    """Runs the interactive gh login."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.GH_AUTH

    @property
    def action_type(self) -> ActionType:
        return ActionType.CONFIGURE

    def is_available(self) -> bool:
        return self._env.gh.is_available()

    def apply(self, declaration: GhAuthDeclaration, planned: PlannedAction) -> ActionResult:
        exit_code = self._env.gh.login(declaration.hostname)
        if exit_code != 0:
            return failed(planned, "gh auth login failed", exit_code=exit_code)
        return applied(planned, f"Logged in to {declaration.hostname}")


class GhExtensionOperator(Operator[GhExtensionDeclaration]):
    """Installs gh extensions."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.GH_EXTENSION

    @property
    def action_type(self) -> ActionType:
        return ActionType.INSTALL

    def is_available(self) -> bool:
        return self._env.gh.is_available()

    def apply(self, declaration: GhExtensionDeclaration, planned: PlannedAction) -> ActionResult:
        result = self._env.gh.install_extension(declaration.id)
        return self.from_command(planned, result, "gh extension install")


class CloneOperator(Operator[CloneDeclaration]):
    """Clones repositories with gh."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.CLONE

    @property
    def action_type(self) -> ActionType:
        return ActionType.CONFIGURE

    def is_available(self) -> bool:
        return self._env.gh.is_available()

    def apply(self, declaration: CloneDeclaration, planned: PlannedAction) -> ActionResult:
        path = expand_path(declaration.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        result = self._env.gh.clone(declaration.repository, str(path))
        return self.from_command(planned, result, "gh repo clone")
