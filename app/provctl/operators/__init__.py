"""Resource operators.

OPERATOR_TYPES maps every resource kind to the operator that applies
its actions.
"""

from collections.abc import Mapping

from provctl.collaborators import Environment
from provctl.models.config import ResourceKind
from provctl.operators.base import OPERATOR_ERRORS, Operator
from provctl.operators.browser import BrowserExtensionOperator
from provctl.operators.containers import ContainerImageOperator
from provctl.operators.fonts import FontOperator
from provctl.operators.packages import PackageOperator
from provctl.operators.repository import CloneOperator, GhAuthOperator, GhExtensionOperator
from provctl.operators.settings import BackupOperator, OsSettingOperator
from provctl.operators.shell import ShellThemeOperator
from provctl.operators.tools import ToolOperator

OPERATOR_TYPES: dict[ResourceKind, type[Operator]] = {
    ResourceKind.PACKAGE: PackageOperator,
    ResourceKind.SHELL_THEME: ShellThemeOperator,
    ResourceKind.FONT: FontOperator,
    ResourceKind.GH_AUTH: GhAuthOperator,
    ResourceKind.GH_EXTENSION: GhExtensionOperator,
    ResourceKind.CLONE: CloneOperator,
    ResourceKind.BROWSER_EXTENSION: BrowserExtensionOperator,
    ResourceKind.CONTAINER_IMAGE: ContainerImageOperator,
    ResourceKind.TOOL: ToolOperator,
    ResourceKind.OS_SETTING: OsSettingOperator,
    ResourceKind.BACKUP: BackupOperator,
}

__all__ = ["OPERATOR_ERRORS", "OPERATOR_TYPES", "Operator", "build_operators"]


def build_operators(
    environment: Environment,
    operator_types: Mapping[ResourceKind, type[Operator]] | None = None,
) -> dict[ResourceKind, Operator]:
    """Instantiate one operator per resource kind."""
    types = OPERATOR_TYPES if operator_types is None else operator_types
    return {kind: operator_type(environment) for kind, operator_type in types.items()}
