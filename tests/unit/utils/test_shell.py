"""Unit tests for shell execution utilities."""

from unittest.mock import MagicMock, patch

import pytest
from provctl.utils.shell import (
    CommandResult,
    command_exists,
    run_command,
    run_interactive,
)


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Exit code 0 is success."""
        assert CommandResult("", "", 0).success is True
        assert CommandResult("", "", 1).success is False

    def test_output_joins_streams(self) -> None:
        """output contains both stdout and stderr."""
        result = CommandResult("out", "err", 0)

        assert "out" in result.output
        assert "err" in result.output

    @pytest.mark.parametrize(
        ("stdout", "stderr", "expected"),
        [
            ("", " denied \n", "denied"),
            ("something failed", "", "something failed"),
            ("", "", "fallback"),
        ],
    )
    def test_error_text(self, stdout: str, stderr: str, expected: str) -> None:
        """stderr is preferred, then stdout, then the fallback."""
        assert CommandResult(stdout, stderr, 1).error_text("fallback") == expected


class TestRunCommand:
    """Tests for run_command function."""

    @patch("provctl.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """Output and exit code are returned."""
        mock_run.return_value = MagicMock(stdout="hello\n", stderr="", returncode=0)

        result = run_command(["winget", "--version"])

        assert result == CommandResult(stdout="hello\n", stderr="", returncode=0)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["text"] is True

    @patch("provctl.utils.shell.subprocess.run")
    def test_none_streams_become_empty(self, mock_run: MagicMock) -> None:
        """Missing streams are normalized to empty strings."""
        mock_run.return_value = MagicMock(stdout=None, stderr=None, returncode=3)

        result = run_command(["reg", "query", "HKCU\\Nope"])

        assert result.stdout == ""
        assert result.stderr == ""
        assert result.returncode == 3

    @patch("provctl.utils.shell.subprocess.run")
    def test_passes_timeout_and_cwd(self, mock_run: MagicMock) -> None:
        """Timeout and working directory are forwarded."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["gh", "repo", "clone", "o/r"], timeout=None, cwd="C:\\src")

        assert mock_run.call_args.kwargs["timeout"] is None
        assert mock_run.call_args.kwargs["cwd"] == "C:\\src"

    @patch("provctl.utils.shell.subprocess.run")
    def test_missing_executable_propagates(self, mock_run: MagicMock) -> None:
        """FileNotFoundError is left to the caller."""
        mock_run.side_effect = FileNotFoundError("docker")

        with pytest.raises(FileNotFoundError):
            run_command(["docker", "images"])


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("provctl.utils.shell.shutil.which")
    def test_found(self, mock_which: MagicMock) -> None:
        """A command on PATH exists."""
        mock_which.return_value = "C:\\Program Files\\Git\\cmd\\git.exe"

        assert command_exists("git") is True
        mock_which.assert_called_once_with("git")

    @patch("provctl.utils.shell.shutil.which")
    def test_not_found(self, mock_which: MagicMock) -> None:
        """A command missing from PATH does not exist."""
        mock_which.return_value = None

        assert command_exists("oh-my-posh") is False


class TestRunInteractive:
    """Tests for run_interactive function."""

    @patch("provctl.utils.shell.subprocess.run")
    def test_returns_exit_code(self, mock_run: MagicMock) -> None:
        """run_interactive returns the subprocess exit code."""
        mock_run.return_value = MagicMock(returncode=1)

        assert run_interactive(["gh", "auth", "login"]) == 1

    @patch("provctl.utils.shell.subprocess.run")
    def test_does_not_capture_output(self, mock_run: MagicMock) -> None:
        """run_interactive inherits the terminal."""
        mock_run.return_value = MagicMock(returncode=0)

        run_interactive(["gh", "auth", "login"])

        call_kwargs = mock_run.call_args.kwargs
        assert "capture_output" not in call_kwargs
        assert "stdout" not in call_kwargs
        assert "stderr" not in call_kwargs

    @patch("provctl.utils.shell.subprocess.run")
    def test_merges_env(self, mock_run: MagicMock) -> None:
        """Custom variables are merged with the current environment."""
        mock_run.return_value = MagicMock(returncode=0)

        with patch.dict("os.environ", {"PATH": "C:\\Windows"}, clear=True):
            run_interactive(["gh", "auth", "login"], env={"GH_PROMPT_DISABLED": "1"})

        env = mock_run.call_args.kwargs["env"]
        assert env["PATH"] == "C:\\Windows"
        assert env["GH_PROMPT_DISABLED"] == "1"
