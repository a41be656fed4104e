"""Firefox profile discovery and extension download."""

import configparser
import logging
from pathlib import Path

from provctl.collaborators.base import Collaborator
from provctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class FirefoxProfiles(Collaborator):
    """Locates the default Firefox profile and downloads extensions into it.

    Attributes:
        root: Firefox data directory holding ``profiles.ini``.
    """

    _DOWNLOAD_TIMEOUT: float = 300.0

    def __init__(self, root: Path) -> None:
        self.root = root

    @property
    def name(self) -> str:
        return "firefox"

    def is_available(self) -> bool:
        """Check that a default profile exists and curl can download into it."""
        return self.default_profile() is not None and command_exists("curl")

    def default_profile(self) -> Path | None:
        """Auto-detect the default profile directory.

        The install-specific default (``[Install...] Default=``) wins over
        the legacy ``Default=1`` profile flag.

        Returns:
            Profile directory, or None if none can be found.
        """
        ini_path = self.root / "profiles.ini"
        parser = configparser.ConfigParser(interpolation=None)
        try:
            read = parser.read(ini_path, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError, OSError) as e:
            logger.debug("Unreadable %s: %s", ini_path, e)
            return None
        if not read:
            return None

        for section in parser.sections():
            if section.startswith("Install") and parser.has_option(section, "Default"):
                return self._resolve(parser.get(section, "Default"), relative=True)

        for section in parser.sections():
            is_default = parser.get(section, "Default", fallback="0") == "1"
            if section.startswith("Profile") and is_default:
                path = parser.get(section, "Path", fallback=None)
                if not path:
                    logger.debug("Default profile %s in %s has no Path", section, ini_path)
                    return None
                relative = parser.get(section, "IsRelative", fallback="1") == "1"
                return self._resolve(path, relative=relative)

        return None

    def extensions_dir(self) -> Path | None:
        """Extension directory of the default profile."""
        profile = self.default_profile()
        return profile / "extensions" if profile is not None else None

    def download(self, url: str, destination: Path) -> CommandResult:
        """Download a file with curl, creating parent directories."""
        destination.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Downloading %s to %s", url, destination)
        return run_command(
            [
                "curl",
                "--fail",
                "--silent",
                "--show-error",
                "--location",
                "--output",
                str(destination),
                url,
            ],
            timeout=self._DOWNLOAD_TIMEOUT,
        )

    def _resolve(self, path: str, relative: bool) -> Path:
        return self.root / path if relative else Path(path)
