"""WinGet package manager client."""

import logging

from provctl.collaborators.base import Collaborator
from provctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class WingetClient(Collaborator):
    """Client for the winget CLI.

    Queries installed packages by exact identifier or broader substring
    and installs packages silently with all agreements accepted.
    """

    # Installs can take long (large IDEs, SDKs); 30 minutes
    _INSTALL_TIMEOUT: float = 1800.0
    _QUERY_FLAGS = ("--accept-source-agreements", "--disable-interactivity")

    @property
    def name(self) -> str:
        return "winget"

    def is_available(self) -> bool:
        """Check if winget is available."""
        return command_exists("winget")

    def is_installed_exact(self, package_id: str) -> bool:
        """Check for an installed package with exactly this identifier.

        Args:
            package_id: WinGet package identifier, e.g. ``Git.Git``.

        Returns:
            True if winget lists the identifier as installed.
        """
        result = run_command(["winget", "list", "--exact", "--id", package_id, *self._QUERY_FLAGS])
        return result.success and package_id.lower() in result.stdout.lower()

    def is_installed_matching(self, query: str) -> bool:
        """Check for an installed package matching a broader query.

        Catches packages installed outside winget whose identifiers
        differ from the catalog identifier.

        Args:
            query: Text matched against installed package names and ids.

        Returns:
            True if the query text appears in winget's listing.
        """
        result = run_command(["winget", "list", "--query", query, *self._QUERY_FLAGS])
        return result.success and query.lower() in result.stdout.lower()

    def install(self, package_id: str, version: str | None = None) -> CommandResult:
        """Install a package silently.

        Args:
            package_id: WinGet package identifier.
            version: Optional version to pin.

        Returns:
            CommandResult of the install command.
        """
        args = [
            "winget",
            "install",
            "--id",
            package_id,
            "--exact",
            "--silent",
            "--accept-package-agreements",
            "--accept-source-agreements",
        ]
        if version:
            args.extend(["--version", version])

        logger.info("Installing %s (version=%s)", package_id, version or "latest")
        return run_command(args, timeout=self._INSTALL_TIMEOUT)
