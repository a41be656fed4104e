"""Package probe for the system package manager.

Order of checks:
1. Identifier overrides: some packages are detected more reliably by
   their companion command-line tool than by the package manager.
2. Exact identifier match in the package manager's listing.
3. Broader substring query (identifier, then display name).

A pinned version does not affect the check; any installed version
satisfies the declaration.
"""

from collections.abc import Callable

from provctl.collaborators import Environment
from provctl.models.config import PackageDeclaration, ResourceKind
from provctl.probes.base import Probe, ProbeResult
from provctl.utils.shell import command_exists

OverrideCheck = Callable[[PackageDeclaration], bool]


def companion_command(name: str) -> OverrideCheck:
    """Build an override that looks for a command on PATH."""

    def check(_declaration: PackageDeclaration) -> bool:
        return command_exists(name)

    return check


PACKAGE_OVERRIDES: dict[str, OverrideCheck] = {
    "Git.Git": companion_command("git"),
    "GitHub.cli": companion_command("gh"),
    "JanDeDobbeleer.OhMyPosh": companion_command("oh-my-posh"),
    "Microsoft.PowerShell": companion_command("pwsh"),
    "Microsoft.VisualStudioCode": companion_command("code"),
}


class PackageProbe(Probe[PackageDeclaration]):
    """Probe for packages managed by winget."""

    def __init__(
        self,
        environment: Environment,
        overrides: dict[str, OverrideCheck] | None = None,
    ) -> None:
        super().__init__(environment)
        self._overrides = PACKAGE_OVERRIDES if overrides is None else overrides

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.PACKAGE

    def check(self, declaration: PackageDeclaration) -> ProbeResult:
        override = self._overrides.get(declaration.id)
        if override is not None and override(declaration):
            return ProbeResult(satisfied=True, metadata={"matched": "companion"})

        winget = self._env.winget
        if winget.is_installed_exact(declaration.id):
            return ProbeResult(satisfied=True, metadata={"matched": "exact"})

        queries = [declaration.id]
        if declaration.name and declaration.name != declaration.id:
            queries.append(declaration.name)
        for query in queries:
            if winget.is_installed_matching(query):
                return ProbeResult(satisfied=True, metadata={"matched": "query"})

        return ProbeResult(satisfied=False)
