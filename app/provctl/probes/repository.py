"""Probes for source-control resources: auth, extensions and clones."""

from provctl.core.paths import expand_path
from provctl.models.config import (
    CloneDeclaration,
    GhAuthDeclaration,
    GhExtensionDeclaration,
    ResourceKind,
)
from provctl.probes.base import Probe, ProbeResult


class GhAuthProbe(Probe[GhAuthDeclaration]):
    """Satisfied iff ``gh auth status`` reports a login for the host."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.GH_AUTH

    def check(self, declaration: GhAuthDeclaration) -> ProbeResult:
        return ProbeResult(satisfied=self._env.gh.is_authenticated(declaration.hostname))


class GhExtensionProbe(Probe[GhExtensionDeclaration]):
    """Satisfied iff the extension is in ``gh extension list``."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.GH_EXTENSION

    def check(self, declaration: GhExtensionDeclaration) -> ProbeResult:
        return ProbeResult(satisfied=declaration.id.lower() in self._env.gh.extensions())


class CloneProbe(Probe[CloneDeclaration]):
    """Satisfied iff the target path exists; contents are not verified."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.CLONE

    def check(self, declaration: CloneDeclaration) -> ProbeResult:
        path = expand_path(declaration.path)
        return ProbeResult(satisfied=path.exists(), metadata={"path": str(path)})
