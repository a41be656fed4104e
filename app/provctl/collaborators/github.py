"""GitHub CLI client for authentication, extensions and clones."""

import logging

from provctl.collaborators.base import Collaborator, CollaboratorError
from provctl.utils.shell import CommandResult, command_exists, run_command, run_interactive

logger = logging.getLogger(__name__)


class GhClient(Collaborator):
    """Client for the gh CLI."""

    _CLONE_TIMEOUT: float = 600.0

    @property
    def name(self) -> str:
        return "gh"

    def is_available(self) -> bool:
        """Check if gh is available."""
        return command_exists("gh")

    def is_authenticated(self, hostname: str) -> bool:
        """Check the auth status output for the logged-in phrase.

        gh prints its status report to stderr, so both streams are
        searched.

        Args:
            hostname: Host to check, e.g. ``github.com``.

        Returns:
            True if gh reports an active login for the host.
        """
        result = run_command(["gh", "auth", "status", "--hostname", hostname])
        return f"Logged in to {hostname}" in result.output

    def login(self, hostname: str) -> int:
        """Run the browser-based login flow attached to the terminal.

        Returns:
            Exit code of ``gh auth login``.
        """
        return run_interactive(["gh", "auth", "login", "--hostname", hostname, "--web"])

    def extensions(self) -> set[str]:
        """List installed extensions as lower-cased ``owner/gh-name``.

        Raises:
            CollaboratorError: If the listing fails.
        """
        result = run_command(["gh", "extension", "list"])
        if not result.success:
            raise CollaboratorError.from_result("gh extension list", result)

        installed: set[str] = set()
        for line in result.stdout.splitlines():
            parts = line.split("\t")
            if len(parts) >= 2 and "/" in parts[1]:
                installed.add(parts[1].strip().lower())
        return installed

    def install_extension(self, repository: str) -> CommandResult:
        """Install an extension from ``owner/gh-name``."""
        logger.info("Installing gh extension %s", repository)
        return run_command(["gh", "extension", "install", repository])

    def clone(self, repository: str, path: str) -> CommandResult:
        """Clone ``owner/name`` into ``path``."""
        logger.info("Cloning %s into %s", repository, path)
        return run_command(["gh", "repo", "clone", repository, path], timeout=self._CLONE_TIMEOUT)
