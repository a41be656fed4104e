"""Abstract base class for external collaborators.

A collaborator is an external system provctl queries or commands but
does not implement: the package manager, the source-control CLI, the
container runtime and so on. Each concrete collaborator wraps one CLI.
"""

from abc import ABC, abstractmethod

from provctl.utils.shell import CommandResult


class CollaboratorError(RuntimeError):
    """Raised when a collaborator command fails.

    Attributes:
        exit_code: Exit code of the failing command, if it ran.
    """

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    @classmethod
    def from_result(cls, what: str, result: CommandResult) -> "CollaboratorError":
        """Build an error from a failed command result."""
        detail = result.error_text(f"exit code {result.returncode}")
        return cls(f"{what} failed: {detail}", exit_code=result.returncode)


class Collaborator(ABC):
    """Base class for all collaborators.

    Example:
        >>> docker = DockerClient()
        >>> if docker.is_available():
        ...     print(docker.images())
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name used in messages (e.g. ``winget``)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the collaborator can be used on this system.

        Returns:
            True if the underlying tool is present, False otherwise.
        """
