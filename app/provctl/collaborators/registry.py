"""OS settings store backed by the Windows registry.

Values are read and written through reg.exe so that the settings store
follows the same command-result model as every other collaborator.
"""

import logging

from provctl.collaborators.base import Collaborator
from provctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class RegistryStore(Collaborator):
    """Reads and writes named registry values."""

    @property
    def name(self) -> str:
        return "reg"

    def is_available(self) -> bool:
        """Check if reg.exe is available."""
        return command_exists("reg")

    def read(self, key: str, value_name: str) -> str | None:
        """Read a value in its textual form.

        ``REG_DWORD`` values are reported by reg.exe in hex
        (``0x1``) and returned here as decimal text (``"1"``).

        Args:
            key: Registry key path.
            value_name: Value name under the key.

        Returns:
            The value as text, or None if the key or value is absent.
        """
        result = run_command(["reg", "query", key, "/v", value_name])
        if not result.success:
            return None
        return parse_query_output(result.stdout, value_name)

    def write(self, key: str, value_name: str, value_type: str, value: str) -> CommandResult:
        """Write a value, creating the key if needed."""
        logger.info("Setting %s\\%s = %s (%s)", key, value_name, value, value_type)
        return run_command(
            ["reg", "add", key, "/v", value_name, "/t", value_type, "/d", value, "/f"]
        )

    def restart_shell(self) -> CommandResult:
        """Restart the desktop shell so explorer-backed settings take effect.

        Windows relaunches explorer automatically after it is stopped.
        """
        logger.info("Restarting desktop shell")
        return run_command(
            ["powershell", "-NoProfile", "-Command", "Stop-Process -Name explorer -Force"]
        )


def parse_query_output(output: str, value_name: str) -> str | None:
    """Extract a value from ``reg query`` output.

    Matching rows look like ``    HideFileExt    REG_DWORD    0x0``.

    Args:
        output: Standard output of ``reg query``.
        value_name: Value name to look for.

    Returns:
        The value as text, or None if no row matches.
    """
    for line in output.splitlines():
        parts = line.split(None, 2)
        if len(parts) < 2 or parts[0].lower() != value_name.lower():
            continue
        value_type = parts[1]
        data = parts[2].strip() if len(parts) == 3 else ""
        if value_type in ("REG_DWORD", "REG_QWORD") and data.lower().startswith("0x"):
            return str(int(data, 16))
        return data
    return None
