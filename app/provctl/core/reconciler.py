"""Desired-state reconciliation.

Ties the pieces together for one run:

1. Check the prerequisite collaborator (the package manager).
2. Obtain a snapshot: reuse a valid cache, probing only declarations it
   does not know yet, or probe everything.
3. Plan one action per declaration.
4. Execute the plan, or simulate it in dry-run mode.
5. After a real pass, mark applied items satisfied and save the cache.

Dry runs never write the cache.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from provctl.core.cache import StateCache
from provctl.core.executor import Executor, apply_results
from provctl.core.paths import get_cache_path
from provctl.core.planner import Planner
from provctl.operators import build_operators
from provctl.probes import Prober

if TYPE_CHECKING:
    from provctl.collaborators import Environment
    from provctl.models.action import ExecutionReport, PlannedAction
    from provctl.models.config import Configuration, ResourceKind
    from provctl.models.status import StatusKey, StatusSnapshot
    from provctl.operators.base import Operator

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE = timedelta(hours=24)


class PrerequisiteError(RuntimeError):
    """Raised when the prerequisite collaborator is missing at startup."""


@dataclass(frozen=True, slots=True)
class ReconcilerOptions:
    """Options for one reconciler instance.

    Attributes:
        cache_path: Location of the status cache file.
        max_age: Validity window of the status cache.
        use_cache: If False, ignore any cached snapshot and probe everything.
    """

    cache_path: Path = field(default_factory=get_cache_path)
    max_age: timedelta = DEFAULT_MAX_AGE
    use_cache: bool = True


@dataclass(frozen=True, slots=True)
class ReconcileRun:
    """Everything one run produced.

    Attributes:
        snapshot: Snapshot after the run (optimistically updated on a
            real pass, unchanged on a dry run).
        plan: Planned actions.
        report: Execution report.
        from_cache: Whether the starting snapshot came from the cache.
        probed: Keys probed during this run.
        cache_written: Whether the cache file was written.
        warnings: Run-level warnings (e.g. a failed cache write).
    """

    snapshot: StatusSnapshot
    plan: list[PlannedAction]
    report: ExecutionReport
    from_cache: bool
    probed: list[StatusKey]
    cache_written: bool
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SnapshotSource:
    """Snapshot obtained at the start of a run and where it came from."""

    snapshot: StatusSnapshot
    from_cache: bool
    probed: list[StatusKey]
    cache_written: bool = False


class Reconciler:
    """Reconciles a machine towards a configuration.

    Example:
        >>> reconciler = Reconciler(Environment.default(), ReconcilerOptions())
        >>> run = reconciler.run(load_config(), dry_run=True)
        >>> print(run.report.counts)
    """

    def __init__(
        self,
        environment: Environment,
        options: ReconcilerOptions | None = None,
        *,
        prober: Prober | None = None,
        operators: Mapping[ResourceKind, Operator] | None = None,
        cache: StateCache | None = None,
    ) -> None:
        """Initialize the reconciler.

        Args:
            environment: Collaborators of the machine.
            options: Cache location, validity window and bypass flag.
            prober: Override the prober built from the environment.
            operators: Override the operators built from the environment.
            cache: Override the cache built from the options.
        """
        self.options = options or ReconcilerOptions()
        self._env = environment
        self._prober = prober or Prober(environment)
        self._operators = operators or build_operators(environment)
        self.cache = cache or StateCache(self.options.cache_path, self.options.max_age)
        self._planner = Planner(self._operators)
        self._executor = Executor(self._operators, restart_shell=environment.registry.restart_shell)

    def check_prerequisites(self) -> None:
        """Ensure the package manager is present.

        Raises:
            PrerequisiteError: If it is not.
        """
        if not self._env.winget.is_available():
            msg = f"{self._env.winget.name} is not available; it is required to provision"
            raise PrerequisiteError(msg)

    def obtain_snapshot(
        self, configuration: Configuration, dry_run: bool = False
    ) -> SnapshotSource:
        """Load a valid cached snapshot or probe everything.

        A valid cache is extended with probes for new declarations; the
        extended snapshot is saved right away unless this is a dry run.

        Args:
            configuration: Current configuration.
            dry_run: If True, never write the cache.

        Returns:
            The snapshot and how it was obtained.
        """
        cached = self.cache.load_valid() if self.options.use_cache else None

        if cached is None:
            logger.info("Probing %d declaration(s)", configuration.declaration_count)
            snapshot = self._prober.probe_all(configuration)
            return SnapshotSource(
                snapshot=snapshot,
                from_cache=False,
                probed=[status.key for status in snapshot.statuses],
            )

        snapshot, probed = self.cache.reconcile_new_declarations(
            cached, configuration, self._prober
        )
        written = False
        if probed and not dry_run:
            try:
                snapshot = self.cache.save(snapshot)
                written = True
            except OSError as e:
                logger.warning("Could not write status cache %s: %s", self.cache.path, e)
        return SnapshotSource(
            snapshot=snapshot, from_cache=True, probed=probed, cache_written=written
        )

    def plan(self, configuration: Configuration, snapshot: StatusSnapshot) -> list[PlannedAction]:
        """Plan actions for a configuration against a snapshot."""
        return self._planner.plan(configuration, snapshot)

    def run(self, configuration: Configuration, dry_run: bool = False) -> ReconcileRun:
        """Reconcile once.

        Args:
            configuration: Desired state.
            dry_run: If True, simulate: no mutating calls, no cache write.

        Returns:
            ReconcileRun describing the run.

        Raises:
            PrerequisiteError: If the package manager is missing.
        """
        self.check_prerequisites()

        source = self.obtain_snapshot(configuration, dry_run=dry_run)
        plan = self.plan(configuration, source.snapshot)
        return self.execute(source, plan, dry_run=dry_run)

    def execute(
        self,
        source: SnapshotSource,
        plan: list[PlannedAction],
        dry_run: bool = False,
    ) -> ReconcileRun:
        """Execute a plan made from ``source`` and persist the outcome.

        Split from run() so callers can show the plan and ask for
        confirmation before anything is changed.

        Args:
            source: Snapshot the plan was made from.
            plan: Planned actions.
            dry_run: If True, simulate: no mutating calls, no cache write.

        Returns:
            ReconcileRun describing the run.
        """
        report = self._executor.execute(plan, dry_run=dry_run)

        if dry_run:
            return ReconcileRun(
                snapshot=source.snapshot,
                plan=plan,
                report=report,
                from_cache=source.from_cache,
                probed=source.probed,
                cache_written=False,
            )

        snapshot = apply_results(source.snapshot, report)
        warnings: list[str] = []
        cache_written = source.cache_written
        try:
            snapshot = self.cache.save(snapshot)
            cache_written = True
        except OSError as e:
            logger.warning("Could not write status cache %s: %s", self.cache.path, e)
            warnings.append(f"Could not write status cache: {e}")

        return ReconcileRun(
            snapshot=snapshot,
            plan=plan,
            report=report,
            from_cache=source.from_cache,
            probed=source.probed,
            cache_written=cache_written,
            warnings=tuple(warnings),
        )
