"""Unit tests for init command.

Tests for the CLI init command implementation.
"""

import tomllib
from pathlib import Path

import pytest
from provctl.cli.main import app
from provctl.core.config import load_config
from typer.testing import CliRunner

runner = CliRunner()


class TestInitCommand:
    """Tests for provctl init command."""

    def test_init_help(self) -> None:
        """Init command shows help."""
        result = runner.invoke(app, ["init", "--help"])

        assert result.exit_code == 0
        assert "starter configuration" in result.stdout

    def test_creates_default_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without --output the file lands in the config directory."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Configuration created" in result.stdout
        assert (tmp_path / "provctl" / "provctl.toml").exists()

    def test_output_is_loadable(self, tmp_path: Path) -> None:
        """The starter configuration validates."""
        output = tmp_path / "starter.toml"

        result = runner.invoke(app, ["init", "--output", str(output)])

        assert result.exit_code == 0
        configuration = load_config(output)
        assert [p.id for p in configuration.packages][0] == "Git.Git"
        with open(output, "rb") as f:
            assert "packages" in tomllib.load(f)

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        """An existing file is kept without --force."""
        output = tmp_path / "provctl.toml"
        output.write_text("# mine\n", encoding="utf-8")

        result = runner.invoke(app, ["init", "-o", str(output)])

        assert result.exit_code == 1
        assert "already exists" in (result.stdout + result.stderr)
        assert output.read_text(encoding="utf-8") == "# mine\n"

    def test_force_overwrites(self, tmp_path: Path) -> None:
        """--force replaces an existing file."""
        output = tmp_path / "provctl.toml"
        output.write_text("# mine\n", encoding="utf-8")

        result = runner.invoke(app, ["init", "-o", str(output), "--force"])

        assert result.exit_code == 0
        assert "Overwriting" in (result.stdout + result.stderr)
        assert "Git.Git" in output.read_text(encoding="utf-8")
