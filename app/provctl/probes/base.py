"""Abstract base class for resource probes.

A probe answers one question for one declared resource: is it already
in its desired state? Probes never change the machine.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, TypeVar

from provctl.collaborators import CollaboratorError, Environment
from provctl.models.config import Declaration, ResourceKind
from provctl.models.status import ResourceStatus

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=Declaration)

# Errors a probe may raise while querying the environment. Any of them
# means "not satisfied".
PROBE_ERRORS: tuple[type[Exception], ...] = (
    CollaboratorError,
    OSError,
    ValueError,
    subprocess.SubprocessError,
)


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of a single probe.

    Attributes:
        satisfied: Whether the resource is installed or configured.
        metadata: Observations worth caching (resolved path, match type).
    """

    satisfied: bool
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


class Probe(ABC, Generic[D]):
    """Base class for all probes.

    Subclasses implement :meth:`check`; callers use :meth:`probe`, which
    turns any query error into an unsatisfied status.

    Example:
        >>> probe = ContainerImageProbe(Environment.default())
        >>> status = probe.probe(declaration)
        >>> status.installed
        False
    """

    def __init__(self, environment: Environment) -> None:
        self._env = environment

    @property
    @abstractmethod
    def kind(self) -> ResourceKind:
        """Return the resource kind this probe handles."""

    @abstractmethod
    def check(self, declaration: D) -> ProbeResult:
        """Determine whether the declaration is satisfied.

        May raise any of :data:`PROBE_ERRORS`.
        """

    def probe(self, declaration: D) -> ResourceStatus:
        """Probe a declaration without raising.

        Args:
            declaration: Declaration to check.

        Returns:
            ResourceStatus; ``installed`` is False if probing failed.
        """
        try:
            result = self.check(declaration)
        except PROBE_ERRORS as e:
            logger.debug("Probe of %s %s failed: %s", self.kind.value, declaration.id, e)
            result = ProbeResult(satisfied=False, metadata={"probe_error": str(e)})

        return ResourceStatus(
            kind=self.kind,
            id=declaration.id,
            name=declaration.display_name,
            installed=result.satisfied,
            metadata=result.metadata,
        )
