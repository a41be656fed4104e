"""Container image probe."""

from provctl.models.config import ContainerImageDeclaration, ResourceKind
from provctl.probes.base import Probe, ProbeResult


class ContainerImageProbe(Probe[ContainerImageDeclaration]):
    """Satisfied iff ``repository:tag`` is in the local image list."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.CONTAINER_IMAGE

    def check(self, declaration: ContainerImageDeclaration) -> ProbeResult:
        return ProbeResult(satisfied=declaration.reference in self._env.docker.images())
