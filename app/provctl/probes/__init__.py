"""Resource probes.

PROBE_TYPES maps every resource kind to its probe class. The Prober
dispatches declarations through that map; adding a kind means adding a
probe class and an entry here.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

from provctl.collaborators import Environment
from provctl.models.config import Configuration, Declaration, ResourceKind
from provctl.models.status import ResourceStatus, StatusSnapshot
from provctl.probes.base import Probe, ProbeResult
from provctl.probes.browser import BrowserExtensionProbe
from provctl.probes.containers import ContainerImageProbe
from provctl.probes.fonts import FontProbe
from provctl.probes.packages import PACKAGE_OVERRIDES, PackageProbe
from provctl.probes.repository import CloneProbe, GhAuthProbe, GhExtensionProbe
from provctl.probes.settings import BackupProbe, OsSettingProbe
from provctl.probes.shell import ShellThemeProbe
from provctl.probes.tools import ToolProbe

logger = logging.getLogger(__name__)

PROBE_TYPES: dict[ResourceKind, type[Probe]] = {
    ResourceKind.PACKAGE: PackageProbe,
    ResourceKind.SHELL_THEME: ShellThemeProbe,
    ResourceKind.FONT: FontProbe,
    ResourceKind.GH_AUTH: GhAuthProbe,
    ResourceKind.GH_EXTENSION: GhExtensionProbe,
    ResourceKind.CLONE: CloneProbe,
    ResourceKind.BROWSER_EXTENSION: BrowserExtensionProbe,
    ResourceKind.CONTAINER_IMAGE: ContainerImageProbe,
    ResourceKind.TOOL: ToolProbe,
    ResourceKind.OS_SETTING: OsSettingProbe,
    ResourceKind.BACKUP: BackupProbe,
}

__all__ = [
    "PACKAGE_OVERRIDES",
    "PROBE_TYPES",
    "Probe",
    "ProbeResult",
    "Prober",
]


class Prober:
    """Probes declarations one at a time, in order.

    Example:
        >>> prober = Prober(Environment.default())
        >>> snapshot = prober.probe_all(configuration)
    """

    def __init__(
        self,
        environment: Environment,
        probe_types: Mapping[ResourceKind, type[Probe]] | None = None,
    ) -> None:
        types = PROBE_TYPES if probe_types is None else probe_types
        self._probes: dict[ResourceKind, Probe] = {
            kind: probe_type(environment) for kind, probe_type in types.items()
        }

    def probe(self, kind: ResourceKind, declaration: Declaration) -> ResourceStatus:
        """Probe one declaration.

        Raises:
            KeyError: If no probe is registered for the kind.
        """
        logger.debug("Probing %s %s", kind.value, declaration.id)
        return self._probes[kind].probe(declaration)

    def probe_many(
        self, declarations: Iterable[tuple[ResourceKind, Declaration]]
    ) -> list[ResourceStatus]:
        """Probe several declarations sequentially."""
        return [self.probe(kind, declaration) for kind, declaration in declarations]

    def probe_all(self, configuration: Configuration) -> StatusSnapshot:
        """Probe every declaration of a configuration into a fresh snapshot."""
        statuses = self.probe_many(configuration.declarations())
        return StatusSnapshot(timestamp=datetime.now(UTC), statuses=tuple(statuses))
