"""Unit tests for plan execution."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

from provctl.collaborators import Environment
from provctl.core.executor import Executor, apply_results
from provctl.models.action import ActionType, ExecutionReport, Outcome, PlannedAction
from provctl.models.config import (
    Declaration,
    OsSettingDeclaration,
    PackageDeclaration,
    ResourceKind,
)
from provctl.models.status import ResourceStatus, StatusSnapshot
from provctl.operators import build_operators
from provctl.utils.shell import CommandResult

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_planned(
    declaration: Declaration,
    action_type: ActionType = ActionType.INSTALL,
    kind: ResourceKind = ResourceKind.PACKAGE,
) -> PlannedAction:
    """Create a PlannedAction for an unsatisfied declaration."""
    status = ResourceStatus(
        kind=kind, id=declaration.id, name=declaration.display_name, installed=False
    )
    return PlannedAction(
        kind=kind, declaration=declaration, status=status, action_type=action_type
    )


def make_setting(resource_id: str, restart: bool = True) -> PlannedAction:
    """PlannedAction configuring an OS setting."""
    declaration = OsSettingDeclaration(
        id=resource_id, key="HKCU\\X", value_name=resource_id, value=1, restart_shell=restart
    )
    return make_planned(declaration, ActionType.CONFIGURE, ResourceKind.OS_SETTING)


# ---------------------------------------------------------------------------
# Executor.execute
# ---------------------------------------------------------------------------


class TestExecute:
    """Tests for Executor.execute."""

    def test_failure_isolation(self, environment: Environment) -> None:
        """A failing item does not stop the ones after it."""
        environment.winget.install.side_effect = [
            CommandResult("", "", 0),
            CommandResult("", "install failed", 1603),
            CommandResult("", "", 0),
        ]
        plan = [make_planned(PackageDeclaration(id=name)) for name in ("A", "B", "C")]

        report = Executor(build_operators(environment)).execute(plan)

        counts = report.counts
        assert (counts[Outcome.APPLIED], counts[Outcome.FAILED], counts[Outcome.SKIPPED]) == (
            2,
            1,
            0,
        )
        assert [r.outcome for r in report.results] == [
            Outcome.APPLIED,
            Outcome.FAILED,
            Outcome.APPLIED,
        ]
        assert report.results[1].exit_code == 1603
        assert report.succeeded is False

    def test_passive_actions_never_call_operators(self, environment: Environment) -> None:
        """Skip, disabled and unavailable items map to their outcomes."""
        plan = [
            make_planned(PackageDeclaration(id="A"), ActionType.SKIP),
            make_planned(PackageDeclaration(id="B", enabled=False), ActionType.DISABLED),
            make_planned(PackageDeclaration(id="C"), ActionType.UNAVAILABLE),
        ]

        report = Executor(build_operators(environment)).execute(plan)

        assert [r.outcome for r in report.results] == [
            Outcome.SKIPPED,
            Outcome.DISABLED,
            Outcome.UNAVAILABLE,
        ]
        environment.winget.install.assert_not_called()

    def test_dry_run_is_pure(self, environment: Environment) -> None:
        """Dry runs report would-apply without calling anything."""
        restart = MagicMock()
        plan = [
            make_planned(PackageDeclaration(id="Editor.X", version="2.1")),
            make_setting("HideFileExt"),
        ]

        report = Executor(build_operators(environment), restart_shell=restart).execute(
            plan, dry_run=True
        )

        assert report.dry_run is True
        assert [r.outcome for r in report.results] == [Outcome.WOULD_APPLY, Outcome.WOULD_APPLY]
        assert report.results[0].message == "Would install v2.1"
        environment.winget.install.assert_not_called()
        environment.registry.write.assert_not_called()
        restart.assert_not_called()

    def test_shell_restarted_once_per_batch(self, environment: Environment) -> None:
        """Several restart-flagged settings restart the shell once."""
        restart = MagicMock(return_value=CommandResult("", "", 0))
        plan = [make_setting("A"), make_setting("B"), make_setting("C", restart=False)]

        report = Executor(build_operators(environment), restart_shell=restart).execute(plan)

        restart.assert_called_once_with()
        assert report.warnings == ()

    def test_no_restart_when_flagged_item_failed(self, environment: Environment) -> None:
        """Only applied items trigger the restart."""
        environment.registry.write.return_value = CommandResult("", "Access is denied.", 1)
        restart = MagicMock(return_value=CommandResult("", "", 0))

        Executor(build_operators(environment), restart_shell=restart).execute([make_setting("A")])

        restart.assert_not_called()

    def test_restart_failure_is_warning(self, environment: Environment) -> None:
        """A failed restart is a run-level warning, not a failed item."""
        restart = MagicMock(return_value=CommandResult("", "explorer not running", 1))

        report = Executor(build_operators(environment), restart_shell=restart).execute(
            [make_setting("A")]
        )

        assert report.succeeded is True
        assert report.warnings == ("Desktop shell restart failed: explorer not running",)

    def test_restart_exception_is_warning(self, environment: Environment) -> None:
        """Exceptions from the restart call are reported as warnings."""
        restart = MagicMock(side_effect=FileNotFoundError("powershell"))

        report = Executor(build_operators(environment), restart_shell=restart).execute(
            [make_setting("A")]
        )

        assert len(report.warnings) == 1
        assert "powershell" in report.warnings[0]


# ---------------------------------------------------------------------------
# apply_results
# ---------------------------------------------------------------------------


class TestApplyResults:
    """Tests for apply_results function."""

    def test_marks_applied_items_installed(self, environment: Environment) -> None:
        """Applied items become installed; failed ones stay as they were."""
        environment.winget.install.side_effect = [
            CommandResult("", "", 0),
            CommandResult("", "nope", 1),
        ]
        plan = [make_planned(PackageDeclaration(id=name)) for name in ("A", "B")]
        snapshot = StatusSnapshot(
            timestamp=NOW, statuses=tuple(planned.status for planned in plan)
        )
        report = Executor(build_operators(environment)).execute(plan)

        updated = apply_results(snapshot, report)

        assert [s.installed for s in updated.statuses] == [True, False]
        assert [s.installed for s in snapshot.statuses] == [False, False]

    def test_dry_run_returns_same_snapshot(self) -> None:
        """Dry-run reports never change the snapshot."""
        snapshot = StatusSnapshot(timestamp=NOW)

        assert apply_results(snapshot, ExecutionReport(results=(), dry_run=True)) is snapshot

    def test_nothing_applied_returns_same_snapshot(self) -> None:
        """Without applied items the snapshot is returned unchanged."""
        snapshot = StatusSnapshot(timestamp=NOW)

        assert apply_results(snapshot, ExecutionReport(results=())) is snapshot
