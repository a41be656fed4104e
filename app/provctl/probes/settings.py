"""Probes for OS settings and scheduled backups."""

from provctl.models.config import BackupDeclaration, OsSettingDeclaration, ResourceKind
from provctl.probes.base import Probe, ProbeResult


class OsSettingProbe(Probe[OsSettingDeclaration]):
    """Compares the stored registry value with the declared value.

    A missing key or value counts as unsatisfied.
    """

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.OS_SETTING

    def check(self, declaration: OsSettingDeclaration) -> ProbeResult:
        current = self._env.registry.read(declaration.key, declaration.value_name)
        if current is None:
            return ProbeResult(satisfied=False)
        return ProbeResult(
            satisfied=current.lower() == declaration.stored_value.lower(),
            metadata={"current": current},
        )


class BackupProbe(Probe[BackupDeclaration]):
    """Satisfied iff the backup's scheduled task is registered."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.BACKUP

    def check(self, declaration: BackupDeclaration) -> ProbeResult:
        return ProbeResult(satisfied=self._env.scheduler.has_task(declaration.task_name))
