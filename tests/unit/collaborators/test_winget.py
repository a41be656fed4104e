"""Unit tests for WingetClient.

Tests for the winget package manager client.
"""

from unittest.mock import patch

import pytest
from provctl.collaborators.winget import WingetClient
from provctl.utils.shell import CommandResult


class TestWingetClient:
    """Tests for WingetClient class."""

    @pytest.fixture
    def client(self) -> WingetClient:
        """Create WingetClient instance."""
        return WingetClient()

    def test_name(self, client: WingetClient) -> None:
        """Client reports winget as its name."""
        assert client.name == "winget"

    def test_is_available(self, client: WingetClient) -> None:
        """is_available checks for the winget executable."""
        with patch("provctl.collaborators.winget.command_exists", return_value=True) as mock:
            assert client.is_available() is True
        mock.assert_called_once_with("winget")

    def test_is_installed_exact_match(
        self, client: WingetClient, mock_winget_list_output: str
    ) -> None:
        """Exact lookup succeeds when the id is listed."""
        with patch("provctl.collaborators.winget.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=mock_winget_list_output, stderr="", returncode=0
            )
            assert client.is_installed_exact("Git.Git") is True

        args = mock_run.call_args[0][0]
        assert args[:5] == ["winget", "list", "--exact", "--id", "Git.Git"]
        assert "--accept-source-agreements" in args

    def test_is_installed_exact_is_case_insensitive(
        self, client: WingetClient, mock_winget_list_output: str
    ) -> None:
        """Listing case differences do not matter."""
        with patch("provctl.collaborators.winget.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=mock_winget_list_output, stderr="", returncode=0
            )
            assert client.is_installed_exact("git.git") is True

    def test_is_installed_exact_not_found(
        self, client: WingetClient, mock_winget_no_match_output: str
    ) -> None:
        """winget exits non-zero when nothing matches."""
        with patch("provctl.collaborators.winget.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout=mock_winget_no_match_output, stderr="", returncode=-1978335212
            )
            assert client.is_installed_exact("Git.Git") is False

    def test_is_installed_exact_requires_id_in_output(self, client: WingetClient) -> None:
        """A successful listing without the id is not a match."""
        with patch("provctl.collaborators.winget.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="Name Id\n", stderr="", returncode=0)
            assert client.is_installed_exact("Git.Git") is False

    def test_is_installed_matching_uses_query(self, client: WingetClient) -> None:
        """Broad lookup uses --query and matches substrings."""
        with patch("provctl.collaborators.winget.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="Editor X   ARP\\Machine\\X64\\EditorX  2.1\n", stderr="", returncode=0
            )
            assert client.is_installed_matching("Editor") is True

        args = mock_run.call_args[0][0]
        assert args[:4] == ["winget", "list", "--query", "Editor"]

    def test_install_without_version(self, client: WingetClient) -> None:
        """Install passes silent and agreement flags."""
        with patch("provctl.collaborators.winget.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            result = client.install("Git.Git")

        assert result.success is True
        args = mock_run.call_args[0][0]
        assert args[:4] == ["winget", "install", "--id", "Git.Git"]
        assert "--silent" in args
        assert "--accept-package-agreements" in args
        assert "--version" not in args

    def test_install_with_version(self, client: WingetClient) -> None:
        """Install pins the version when given."""
        with patch("provctl.collaborators.winget.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            client.install("Editor.X", "2.1")

        args = mock_run.call_args[0][0]
        assert args[-2:] == ["--version", "2.1"]
        assert mock_run.call_args.kwargs["timeout"] == 1800.0
