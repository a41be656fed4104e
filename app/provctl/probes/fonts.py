"""Font probe.

A font counts as installed if any of these finds it, checked in order:
user font directory, system font directory, OS font enumeration, or a
Windows Terminal profile that already uses the family.
"""

import logging
from typing import Any

from provctl.models.config import FontDeclaration, ResourceKind
from provctl.probes.base import PROBE_ERRORS, Probe, ProbeResult
from provctl.utils.jsonfile import load_json_object

logger = logging.getLogger(__name__)


def terminal_font_faces(settings: dict[str, Any]) -> set[str]:
    """Collect font faces referenced by Windows Terminal settings.

    Reads ``profiles.defaults.font.face`` and ``font.face`` of every
    profile in ``profiles.list``. The legacy ``fontFace`` key is honoured
    too.
    """
    faces: set[str] = set()
    profiles = settings.get("profiles")
    if not isinstance(profiles, dict):
        return faces

    entries: list[object] = [profiles.get("defaults")]
    listed = profiles.get("list")
    if isinstance(listed, list):
        entries.extend(listed)

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        font = entry.get("font")
        if isinstance(font, dict) and isinstance(font.get("face"), str):
            faces.add(font["face"])
        if isinstance(entry.get("fontFace"), str):
            faces.add(entry["fontFace"])
    return faces


class FontProbe(Probe[FontDeclaration]):
    """Probe for user-installed fonts."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.FONT

    def check(self, declaration: FontDeclaration) -> ProbeResult:
        catalog = self._env.fonts

        found = catalog.find_file(declaration.files)
        if found is not None:
            return ProbeResult(satisfied=True, metadata={"found": str(found)})

        try:
            if declaration.family in catalog.installed_families():
                return ProbeResult(satisfied=True, metadata={"found": "enumeration"})
        except PROBE_ERRORS as e:
            logger.debug("Font enumeration failed: %s", e)

        settings = load_json_object(self._env.terminal_settings)
        if declaration.family in terminal_font_faces(settings):
            return ProbeResult(satisfied=True, metadata={"found": "windows-terminal"})

        return ProbeResult(satisfied=False)
