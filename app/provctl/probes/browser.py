"""Browser extension probe for the default Firefox profile."""

from provctl.models.config import BrowserExtensionDeclaration, ResourceKind
from provctl.probes.base import Probe, ProbeResult


class BrowserExtensionProbe(Probe[BrowserExtensionDeclaration]):
    """Satisfied iff ``<id>.<ext>`` exists in the profile's extensions dir."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.BROWSER_EXTENSION

    def check(self, declaration: BrowserExtensionDeclaration) -> ProbeResult:
        extensions_dir = self._env.firefox.extensions_dir()
        if extensions_dir is None:
            return ProbeResult(satisfied=False)

        path = extensions_dir / declaration.file_name
        return ProbeResult(satisfied=path.is_file(), metadata={"path": str(path)})
