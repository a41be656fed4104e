"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules: sample
collaborator output and an Environment made of mocks.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from provctl.collaborators import (
    DockerClient,
    DotnetClient,
    Environment,
    FirefoxProfiles,
    FontCatalog,
    GhClient,
    RegistryStore,
    TaskScheduler,
    WingetClient,
)
from provctl.utils.shell import CommandResult

OK = CommandResult(stdout="", stderr="", returncode=0)


@pytest.fixture
def mock_winget_list_output() -> str:
    """Sample `winget list --exact --id Git.Git` output."""
    return """Name    Id       Version  Available Source
-----------------------------------------------
Git     Git.Git  2.45.1   2.46.0    winget"""


@pytest.fixture
def mock_winget_no_match_output() -> str:
    """Sample winget output when nothing is installed."""
    return "No installed package found matching input criteria."


@pytest.fixture
def mock_gh_extension_output() -> str:
    """Sample `gh extension list` output."""
    return """gh dash\tdlvhdr/gh-dash\tv4.7.1
gh copilot\tgithub/gh-copilot\tv1.0.5"""


@pytest.fixture
def mock_gh_auth_output() -> str:
    """Sample `gh auth status` output (printed to stderr)."""
    return """github.com
  ✓ Logged in to github.com account octocat (keyring)
  - Active account: true
  - Git operations protocol: https"""


@pytest.fixture
def mock_docker_images_output() -> str:
    """Sample `docker images --format` output."""
    return """mcr.microsoft.com/dotnet/sdk:8.0
postgres:16
redis:latest"""


@pytest.fixture
def mock_dotnet_tools_output() -> str:
    """Sample `dotnet tool list --global` output."""
    return """Package Id           Version      Commands
--------------------------------------------------
dotnet-ef            8.0.6        dotnet-ef
Cake.Tool            4.0.0        dotnet-cake"""


@pytest.fixture
def mock_reg_query_output() -> str:
    """Sample `reg query` output for a DWORD value."""
    return """
HKEY_CURRENT_USER\\Software\\Microsoft\\Windows\\CurrentVersion\\Explorer\\Advanced
    HideFileExt    REG_DWORD    0x1
"""


@pytest.fixture
def environment(tmp_path: Path) -> Environment:
    """Environment of mocked collaborators.

    Every collaborator is available, nothing is installed, and every
    command succeeds. Tests adjust individual return values.
    """
    winget = MagicMock(spec=WingetClient)
    winget.name = "winget"
    winget.is_available.return_value = True
    winget.is_installed_exact.return_value = False
    winget.is_installed_matching.return_value = False
    winget.install.return_value = OK

    gh = MagicMock(spec=GhClient)
    gh.name = "gh"
    gh.is_available.return_value = True
    gh.is_authenticated.return_value = False
    gh.login.return_value = 0
    gh.extensions.return_value = set()
    gh.install_extension.return_value = OK
    gh.clone.return_value = OK

    docker = MagicMock(spec=DockerClient)
    docker.name = "docker"
    docker.is_available.return_value = True
    docker.images.return_value = set()
    docker.pull.return_value = OK

    dotnet = MagicMock(spec=DotnetClient)
    dotnet.name = "dotnet"
    dotnet.is_available.return_value = True
    dotnet.global_tools.return_value = set()
    dotnet.install.return_value = OK

    registry = MagicMock(spec=RegistryStore)
    registry.name = "reg"
    registry.is_available.return_value = True
    registry.read.return_value = None
    registry.write.return_value = OK
    registry.restart_shell.return_value = OK

    fonts = MagicMock(spec=FontCatalog)
    fonts.name = "oh-my-posh"
    fonts.is_available.return_value = True
    fonts.find_file.return_value = None
    fonts.installed_families.return_value = set()
    fonts.install.return_value = OK

    firefox = MagicMock(spec=FirefoxProfiles)
    firefox.name = "firefox"
    firefox.is_available.return_value = True
    firefox.extensions_dir.return_value = tmp_path / "firefox" / "extensions"
    firefox.download.return_value = OK

    scheduler = MagicMock(spec=TaskScheduler)
    scheduler.name = "schtasks"
    scheduler.is_available.return_value = True
    scheduler.has_task.return_value = False
    scheduler.create_task.return_value = OK

    return Environment(
        winget=winget,
        gh=gh,
        docker=docker,
        dotnet=dotnet,
        registry=registry,
        fonts=fonts,
        firefox=firefox,
        scheduler=scheduler,
        terminal_settings=tmp_path / "terminal" / "settings.json",
        vscode_settings=tmp_path / "vscode" / "settings.json",
    )
