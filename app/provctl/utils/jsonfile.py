"""JSON settings file helpers.

Application settings files (Windows Terminal, VS Code) are read and
rewritten wholesale. Writes go through a temporary file and os.replace().
"""

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any


def load_json_object(path: Path) -> dict[str, Any]:
    """Load a JSON object from a file.

    Args:
        path: File to read.

    Returns:
        The parsed object, or an empty dict if the file does not exist.

    Raises:
        ValueError: If the content is not a JSON object.
        OSError: If the file exists but cannot be read.
    """
    if not path.exists():
        return {}
    data = json.loads(path.read_text(encoding="utf-8-sig"))
    if not isinstance(data, dict):
        msg = f"{path} does not contain a JSON object"
        raise ValueError(msg)
    return data


def write_json_object(path: Path, data: dict[str, Any]) -> None:
    """Write a JSON object atomically, creating parent directories.

    Raises:
        OSError: If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            json.dump(data, f, indent=4)
            f.write("\n")
        os.replace(tmp_path, path)
    except OSError:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise
