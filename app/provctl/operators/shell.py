"""Shell theme operator: appends the prompt init line to the profile."""

from provctl.core.paths import expand_path
from provctl.models.action import ActionResult, ActionType, PlannedAction, applied
from provctl.models.config import ResourceKind, ShellThemeDeclaration
from provctl.operators.base import Operator


class ShellThemeOperator(Operator[ShellThemeDeclaration]):
    """Writes the init line into the profile, creating it if needed.

    Needs no external tool, so it is always available.
    """

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.SHELL_THEME

    @property
    def action_type(self) -> ActionType:
        return ActionType.CONFIGURE

    def is_available(self) -> bool:
        return True

    def apply(self, declaration: ShellThemeDeclaration, planned: PlannedAction) -> ActionResult:
        profile = expand_path(declaration.profile)
        profile.parent.mkdir(parents=True, exist_ok=True)

        existing = profile.read_text(encoding="utf-8-sig") if profile.exists() else ""
        prefix = "" if not existing or existing.endswith("\n") else "\n"
        with profile.open("a", encoding="utf-8") as f:
            f.write(f"{prefix}{declaration.init_line}\n")

        return applied(planned, f"Updated {profile}")
