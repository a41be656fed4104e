"""Unit tests for the reconciler.

These run full passes against an Environment of mocks and a status
cache in a temporary directory.
"""

import json
from datetime import timedelta
from pathlib import Path

import pytest
from provctl.collaborators import Environment
from provctl.core.reconciler import PrerequisiteError, Reconciler, ReconcilerOptions
from provctl.models.action import ActionType, Outcome
from provctl.models.config import (
    Configuration,
    ContainerImageDeclaration,
    PackageDeclaration,
    ResourceKind,
)
from provctl.probes import PROBE_TYPES, Prober
from provctl.probes.packages import PackageProbe
from provctl.utils.shell import CommandResult


class _PackageProbeWithoutOverrides(PackageProbe):
    def __init__(self, environment: Environment) -> None:
        super().__init__(environment, overrides={})


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    """Location of the status cache."""
    return tmp_path / "state" / "status-cache.json"


@pytest.fixture
def configuration() -> Configuration:
    """Git present, Editor absent and pinned."""
    return Configuration(
        packages=[
            PackageDeclaration(id="Git.Git", name="Git"),
            PackageDeclaration(id="Editor.X", name="Editor", version="2.1"),
        ]
    )


@pytest.fixture
def reconciler(environment: Environment, cache_path: Path) -> Reconciler:
    """Reconciler whose package probe asks winget only."""
    environment.winget.is_installed_exact.side_effect = lambda pid: pid == "Git.Git"
    types = {**PROBE_TYPES, ResourceKind.PACKAGE: _PackageProbeWithoutOverrides}
    return Reconciler(
        environment,
        ReconcilerOptions(cache_path=cache_path, max_age=timedelta(hours=24)),
        prober=Prober(environment, probe_types=types),
    )


class TestPrerequisites:
    """Tests for the package manager prerequisite."""

    def test_missing_winget_is_fatal(
        self, reconciler: Reconciler, environment: Environment, configuration: Configuration
    ) -> None:
        """Nothing is probed or planned without the package manager."""
        environment.winget.is_available.return_value = False

        with pytest.raises(PrerequisiteError, match="winget"):
            reconciler.run(configuration)

        environment.winget.is_installed_exact.assert_not_called()


class TestExampleScenario:
    """Git installed, Editor missing with a pinned version."""

    def test_plan(self, reconciler: Reconciler, configuration: Configuration) -> None:
        """Git is skipped and Editor is installed at the pinned version."""
        source = reconciler.obtain_snapshot(configuration, dry_run=True)
        plan = reconciler.plan(configuration, source.snapshot)

        assert [(p.name, p.label) for p in plan] == [("Git", "Skip"), ("Editor", "Install v2.1")]

    def test_dry_run_changes_nothing(
        self,
        reconciler: Reconciler,
        environment: Environment,
        configuration: Configuration,
        cache_path: Path,
    ) -> None:
        """A dry run reports both lines and writes nothing."""
        run = reconciler.run(configuration, dry_run=True)

        assert [r.outcome for r in run.report.results] == [Outcome.SKIPPED, Outcome.WOULD_APPLY]
        assert run.cache_written is False
        assert not cache_path.exists()
        environment.winget.install.assert_not_called()

    def test_real_run_installs_editor_only(
        self,
        reconciler: Reconciler,
        environment: Environment,
        configuration: Configuration,
        cache_path: Path,
    ) -> None:
        """Only Editor is installed; the saved snapshot marks it installed."""
        run = reconciler.run(configuration)

        environment.winget.install.assert_called_once_with("Editor.X", "2.1")
        assert run.report.succeeded is True
        assert run.cache_written is True
        editor = run.snapshot.get(ResourceKind.PACKAGE, "Editor.X")
        assert editor is not None
        assert editor.installed is True

        saved = json.loads(cache_path.read_text(encoding="utf-8"))
        assert [(s["id"], s["installed"]) for s in saved["package"]] == [
            ("Git.Git", True),
            ("Editor.X", True),
        ]

    def test_second_run_is_idempotent(
        self,
        reconciler: Reconciler,
        environment: Environment,
        configuration: Configuration,
    ) -> None:
        """Right after a successful run every item is skipped from the cache."""
        reconciler.run(configuration)
        environment.winget.install.reset_mock()
        environment.winget.is_installed_exact.reset_mock()

        run = reconciler.run(configuration)

        assert run.from_cache is True
        assert run.probed == []
        assert all(p.action_type == ActionType.SKIP for p in run.plan)
        environment.winget.install.assert_not_called()
        environment.winget.is_installed_exact.assert_not_called()

    def test_failed_install_stays_missing(
        self,
        reconciler: Reconciler,
        environment: Environment,
        configuration: Configuration,
    ) -> None:
        """A failed item is retried on the next run."""
        environment.winget.install.return_value = CommandResult("", "1603", 1603)

        first = reconciler.run(configuration)
        second = reconciler.run(configuration, dry_run=True)

        assert first.report.succeeded is False
        assert second.plan[1].action_type == ActionType.INSTALL


class TestCacheHandling:
    """Tests for cache reuse, bypass and augmentation."""

    def test_no_cache_probes_everything(
        self,
        reconciler: Reconciler,
        environment: Environment,
        configuration: Configuration,
        cache_path: Path,
    ) -> None:
        """use_cache=False ignores a valid cache."""
        reconciler.run(configuration)
        environment.winget.is_installed_exact.reset_mock()
        bypass = Reconciler(
            environment,
            ReconcilerOptions(cache_path=cache_path, use_cache=False),
            prober=Prober(
                environment,
                probe_types={**PROBE_TYPES, ResourceKind.PACKAGE: _PackageProbeWithoutOverrides},
            ),
        )

        run = bypass.run(configuration, dry_run=True)

        assert run.from_cache is False
        assert len(run.probed) == 2
        assert environment.winget.is_installed_exact.call_count == 2

    def test_new_declaration_augments_cache(
        self,
        reconciler: Reconciler,
        environment: Environment,
        configuration: Configuration,
    ) -> None:
        """Only the newly declared resource is probed."""
        reconciler.run(configuration)
        extended = Configuration(
            packages=configuration.packages,
            container_images=[ContainerImageDeclaration(id="pg", image="postgres", tag="16")],
        )

        source = reconciler.obtain_snapshot(extended)

        assert source.from_cache is True
        assert source.probed == [(ResourceKind.CONTAINER_IMAGE, "pg")]
        assert source.cache_written is True
        environment.docker.images.assert_called_once_with()

    def test_augmentation_in_dry_run_leaves_cache_untouched(
        self,
        reconciler: Reconciler,
        configuration: Configuration,
        cache_path: Path,
    ) -> None:
        """A dry run never rewrites the cache, even after probing new items."""
        reconciler.run(configuration)
        before = cache_path.read_bytes()
        extended = Configuration(
            packages=configuration.packages,
            container_images=[ContainerImageDeclaration(id="pg", image="postgres")],
        )

        run = reconciler.run(extended, dry_run=True)

        assert run.probed == [(ResourceKind.CONTAINER_IMAGE, "pg")]
        assert run.cache_written is False
        assert cache_path.read_bytes() == before

    def test_nothing_new_is_not_rewritten(
        self,
        reconciler: Reconciler,
        configuration: Configuration,
        cache_path: Path,
    ) -> None:
        """Obtaining a snapshot with nothing new does not write the cache."""
        reconciler.run(configuration)
        before = cache_path.read_bytes()

        source = reconciler.obtain_snapshot(configuration)

        assert source.cache_written is False
        assert cache_path.read_bytes() == before

    def test_cache_write_failure_is_warning(
        self,
        environment: Environment,
        configuration: Configuration,
        tmp_path: Path,
    ) -> None:
        """An unwritable cache does not fail the run."""
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("", encoding="utf-8")
        reconciler = Reconciler(
            environment,
            ReconcilerOptions(cache_path=blocker / "status-cache.json"),
            prober=Prober(
                environment,
                probe_types={**PROBE_TYPES, ResourceKind.PACKAGE: _PackageProbeWithoutOverrides},
            ),
        )

        run = reconciler.run(configuration)

        assert run.report.succeeded is True
        assert run.cache_written is False
        assert len(run.warnings) == 1
        assert "status cache" in run.warnings[0]
