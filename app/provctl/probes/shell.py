"""Shell theme probe: checks the profile for the prompt init line."""

from provctl.core.paths import expand_path
from provctl.models.config import ResourceKind, ShellThemeDeclaration
from provctl.probes.base import Probe, ProbeResult


class ShellThemeProbe(Probe[ShellThemeDeclaration]):
    """Satisfied iff the profile exists and holds the exact init line."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.SHELL_THEME

    def check(self, declaration: ShellThemeDeclaration) -> ProbeResult:
        profile = expand_path(declaration.profile)
        if not profile.is_file():
            return ProbeResult(satisfied=False)

        # utf-8-sig: profiles saved by Windows PowerShell carry a BOM
        lines = profile.read_text(encoding="utf-8-sig").splitlines()
        return ProbeResult(
            satisfied=declaration.init_line in lines,
            metadata={"profile": str(profile)},
        )
