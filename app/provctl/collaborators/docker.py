"""Docker container runtime client."""

import logging

from provctl.collaborators.base import Collaborator, CollaboratorError
from provctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class DockerClient(Collaborator):
    """Client for the docker CLI."""

    _PULL_TIMEOUT: float = 3600.0

    @property
    def name(self) -> str:
        return "docker"

    def is_available(self) -> bool:
        """Check if docker is available."""
        return command_exists("docker")

    def images(self) -> set[str]:
        """List local images as ``repository:tag`` references.

        Raises:
            CollaboratorError: If the daemon cannot be queried.
        """
        result = run_command(["docker", "images", "--format", "{{.Repository}}:{{.Tag}}"])
        if not result.success:
            raise CollaboratorError.from_result("docker images", result)
        return {line.strip() for line in result.stdout.splitlines() if line.strip()}

    def pull(self, reference: str) -> CommandResult:
        """Pull an image reference."""
        logger.info("Pulling %s", reference)
        return run_command(["docker", "pull", reference], timeout=self._PULL_TIMEOUT)
