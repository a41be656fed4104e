"""dotnet tool runtime client."""

import logging

from provctl.collaborators.base import Collaborator, CollaboratorError
from provctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class DotnetClient(Collaborator):
    """Client for global tools managed by the dotnet CLI."""

    _INSTALL_TIMEOUT: float = 600.0

    @property
    def name(self) -> str:
        return "dotnet"

    def is_available(self) -> bool:
        """Check if dotnet is available."""
        return command_exists("dotnet")

    def global_tools(self) -> set[str]:
        """List global tool package ids, lower-cased.

        The listing starts with a header row and a dashed separator;
        every following row begins with the package id.

        Raises:
            CollaboratorError: If the listing fails.
        """
        result = run_command(["dotnet", "tool", "list", "--global"])
        if not result.success:
            raise CollaboratorError.from_result("dotnet tool list", result)

        tools: set[str] = set()
        for line in result.stdout.splitlines():
            fields = line.split()
            if not fields or fields[0].lower() == "package" or set(fields[0]) == {"-"}:
                continue
            tools.add(fields[0].lower())
        return tools

    def install(self, tool_id: str, version: str | None = None) -> CommandResult:
        """Install a global tool, optionally pinned to a version."""
        args = ["dotnet", "tool", "install", "--global", tool_id]
        if version:
            args.extend(["--version", version])
        logger.info("Installing dotnet tool %s (version=%s)", tool_id, version or "latest")
        return run_command(args, timeout=self._INSTALL_TIMEOUT)
