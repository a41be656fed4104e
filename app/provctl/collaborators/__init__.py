"""External collaborators provctl queries and commands.

The Environment bundles one instance of each collaborator together with
the user's well-known directories, so probes and operators can be built
against real tools or against fakes in tests.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from provctl.collaborators.base import Collaborator, CollaboratorError
from provctl.collaborators.docker import DockerClient
from provctl.collaborators.dotnet import DotnetClient
from provctl.collaborators.firefox import FirefoxProfiles
from provctl.collaborators.fonts import FontCatalog
from provctl.collaborators.github import GhClient
from provctl.collaborators.registry import RegistryStore
from provctl.collaborators.scheduler import TaskScheduler
from provctl.collaborators.winget import WingetClient

__all__ = [
    "Collaborator",
    "CollaboratorError",
    "DockerClient",
    "DotnetClient",
    "Environment",
    "FirefoxProfiles",
    "FontCatalog",
    "GhClient",
    "RegistryStore",
    "TaskScheduler",
    "WingetClient",
]


@dataclass(frozen=True, slots=True)
class Environment:
    """Collaborators and directories of the machine being provisioned.

    Attributes:
        winget: System package manager.
        gh: Source-control CLI.
        docker: Container runtime.
        dotnet: Tool runtime.
        registry: OS settings store.
        fonts: Font catalog and installer.
        firefox: Browser profile access.
        scheduler: Task scheduler for backups.
        terminal_settings: Windows Terminal settings.json.
        vscode_settings: VS Code user settings.json.
    """

    winget: WingetClient
    gh: GhClient
    docker: DockerClient
    dotnet: DotnetClient
    registry: RegistryStore
    fonts: FontCatalog
    firefox: FirefoxProfiles
    scheduler: TaskScheduler
    terminal_settings: Path
    vscode_settings: Path

    @classmethod
    def default(cls) -> "Environment":
        """Build the environment of the current user from well-known locations."""
        home = Path.home()
        appdata = Path(os.environ.get("APPDATA") or home / "AppData" / "Roaming")
        local_appdata = Path(os.environ.get("LOCALAPPDATA") or home / "AppData" / "Local")
        windir = Path(os.environ.get("WINDIR") or "C:/Windows")

        return cls(
            winget=WingetClient(),
            gh=GhClient(),
            docker=DockerClient(),
            dotnet=DotnetClient(),
            registry=RegistryStore(),
            fonts=FontCatalog(
                user_font_dir=local_appdata / "Microsoft" / "Windows" / "Fonts",
                system_font_dir=windir / "Fonts",
            ),
            firefox=FirefoxProfiles(root=appdata / "Mozilla" / "Firefox"),
            scheduler=TaskScheduler(),
            terminal_settings=local_appdata
            / "Packages"
            / "Microsoft.WindowsTerminal_8wekyb3d8bbwe"
            / "LocalState"
            / "settings.json",
            vscode_settings=appdata / "Code" / "User" / "settings.json",
        )
