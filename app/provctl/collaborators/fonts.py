"""Font discovery and installation.

Fonts are discovered in the user and system font directories and
through the OS font enumeration API; installation goes through the
oh-my-posh font installer, which registers Nerd Fonts for the user.
"""

import logging
from pathlib import Path

from provctl.collaborators.base import Collaborator, CollaboratorError
from provctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# Enumerates installed font family names, one per line.
_ENUMERATE_FONTS = (
    "Add-Type -AssemblyName System.Drawing; "
    "(New-Object System.Drawing.Text.InstalledFontCollection).Families "
    "| ForEach-Object { $_.Name }"
)


class FontCatalog(Collaborator):
    """Looks up installed fonts and installs new ones.

    Attributes:
        user_font_dir: Per-user font directory.
        system_font_dir: Machine-wide font directory.
    """

    _INSTALL_TIMEOUT: float = 600.0

    def __init__(self, user_font_dir: Path, system_font_dir: Path) -> None:
        self.user_font_dir = user_font_dir
        self.system_font_dir = system_font_dir

    @property
    def name(self) -> str:
        return "oh-my-posh"

    def is_available(self) -> bool:
        """Check if the font installer is available."""
        return command_exists("oh-my-posh")

    def find_file(self, file_names: list[str]) -> Path | None:
        """Find the first font file present in the user or system directory.

        Args:
            file_names: Candidate font file names.

        Returns:
            Path of the first file found, or None.
        """
        for directory in (self.user_font_dir, self.system_font_dir):
            for file_name in file_names:
                candidate = directory / file_name
                if candidate.is_file():
                    return candidate
        return None

    def installed_families(self) -> set[str]:
        """Enumerate installed font families through the OS.

        Raises:
            CollaboratorError: If the enumeration fails.
        """
        result = run_command(["powershell", "-NoProfile", "-Command", _ENUMERATE_FONTS])
        if not result.success:
            raise CollaboratorError.from_result("font enumeration", result)
        return {line.strip() for line in result.stdout.splitlines() if line.strip()}

    def install(self, font_id: str) -> CommandResult:
        """Install a font for the current user."""
        logger.info("Installing font %s", font_id)
        return run_command(
            ["oh-my-posh", "font", "install", font_id, "--user"],
            timeout=self._INSTALL_TIMEOUT,
        )
