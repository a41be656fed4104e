"""Tool-runtime probe for dotnet global tools."""

from provctl.models.config import ResourceKind, ToolDeclaration
from provctl.probes.base import Probe, ProbeResult


class ToolProbe(Probe[ToolDeclaration]):
    """Satisfied iff the tool id is in the global tool list (any case).

    As with packages, a pinned version only affects installation.
    """

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.TOOL

    def check(self, declaration: ToolDeclaration) -> ProbeResult:
        return ProbeResult(satisfied=declaration.id.lower() in self._env.dotnet.global_tools())
