"""Font operator.

Installs the font, then points the declared consumer applications at
the new family. Consumer configuration is best effort: a failure there
is reported as a warning and the font install still counts as applied.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from provctl.models.action import ActionResult, ActionType, PlannedAction, applied
from provctl.models.config import FontDeclaration, ResourceKind
from provctl.operators.base import OPERATOR_ERRORS, Operator
from provctl.utils.jsonfile import load_json_object, write_json_object

logger = logging.getLogger(__name__)


def _child_object(parent: dict[str, Any], key: str, label: str) -> dict[str, Any]:
    child = parent.get(key)
    if child is None:
        child = parent[key] = {}
    if not isinstance(child, dict):
        msg = f"Windows Terminal '{label}' is not an object"
        raise ValueError(msg)
    return child


def set_terminal_font(settings: dict[str, Any], family: str) -> None:
    """Set ``profiles.defaults.font.face`` in Windows Terminal settings.

    Missing or null sections are created.

    Raises:
        ValueError: If ``profiles``, ``defaults`` or ``font`` holds
            something other than an object (e.g. the legacy list-only
            ``profiles`` layout).
    """
    profiles = _child_object(settings, "profiles", "profiles")
    defaults = _child_object(profiles, "defaults", "profiles.defaults")
    font = _child_object(defaults, "font", "profiles.defaults.font")
    font["face"] = family


def set_vscode_font(settings: dict[str, Any], family: str) -> None:
    """Set the editor and integrated terminal font family in VS Code."""
    settings["editor.fontFamily"] = family
    settings["terminal.integrated.fontFamily"] = family


class FontOperator(Operator[FontDeclaration]):
    """Installs fonts with oh-my-posh and configures consumers."""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.FONT

    @property
    def action_type(self) -> ActionType:
        return ActionType.INSTALL

    def is_available(self) -> bool:
        return self._env.fonts.is_available()

    def apply(self, declaration: FontDeclaration, planned: PlannedAction) -> ActionResult:
        result = self._env.fonts.install(declaration.id)
        if not result.success:
            return self.from_command(planned, result, "font install")

        consumers: dict[str, tuple[Path, Callable[[dict[str, Any], str], None]]] = {
            "windows-terminal": (self._env.terminal_settings, set_terminal_font),
            "vscode": (self._env.vscode_settings, set_vscode_font),
        }

        warnings: list[str] = []
        for consumer in declaration.consumers:
            path, update = consumers[consumer]
            try:
                settings = load_json_object(path)
                update(settings, declaration.family)
                write_json_object(path, settings)
            except OPERATOR_ERRORS as e:
                logger.warning("Could not configure %s font: %s", consumer, e)
                warnings.append(f"{declaration.display_name}: could not configure {consumer}: {e}")

        return applied(planned, warnings=tuple(warnings))
