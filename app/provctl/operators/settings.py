"""Operators for OS settings and scheduled backups."""

from provctl.core.paths import expand_path
from provctl.models.action import ActionResult, ActionType, PlannedAction, applied
from provctl.models.config import BackupDeclaration, OsSettingDeclaration, ResourceKind
from provctl.operators.base import Operator


class OsSettingOperator(Operator[OsSettingDeclaration]):
    """Writes registry values.

    Settings that need a desktop shell restart flag their result; the
    executor restarts the shell once per batch.
    """

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.OS_SETTING

    @property
    def action_type(self) -> ActionType:
        return ActionType.CONFIGURE

    def is_available(self) -> bool:
        return self._env.registry.is_available()

    def apply(self, declaration: OsSettingDeclaration, planned: PlannedAction) -> ActionResult:
        result = self._env.registry.write(
            declaration.key,
            declaration.value_name,
            declaration.value_type,
            declaration.stored_value,
        )
        if not result.success:
            return self.from_command(planned, result, "reg add")
        return applied(planned, restart_shell=declaration.restart_shell)


def backup_command(declaration: BackupDeclaration) -> str:
    """Build the robocopy mirror command a backup task runs."""
    source = expand_path(declaration.source)
    destination = expand_path(declaration.destination)
    return f'robocopy "{source}" "{destination}" /MIR /R:2 /W:5 /NP'


class BackupOperator(Operator[BackupDeclaration]):
    """Registers a scheduled task that mirrors the source directory."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.BACKUP

    @property
    def action_type(self) -> ActionType:
        return ActionType.CONFIGURE

    def is_available(self) -> bool:
        return self._env.scheduler.is_available()

    def apply(self, declaration: BackupDeclaration, planned: PlannedAction) -> ActionResult:
        result = self._env.scheduler.create_task(
            declaration.task_name,
            backup_command(declaration),
            declaration.schedule,
            declaration.time,
        )
        return self.from_command(planned, result, "schtasks /Create")
