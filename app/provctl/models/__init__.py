"""Data models for provctl.

This module exports the core data structures used throughout the application.
"""

from provctl.models.action import (
    ActionResult,
    ActionType,
    ExecutionReport,
    Outcome,
    PlannedAction,
)
from provctl.models.config import (
    BackupDeclaration,
    BrowserExtensionDeclaration,
    CloneDeclaration,
    Configuration,
    ContainerImageDeclaration,
    Declaration,
    FontDeclaration,
    GhAuthDeclaration,
    GhExtensionDeclaration,
    OsSettingDeclaration,
    PackageDeclaration,
    ResourceKind,
    ShellThemeDeclaration,
    ToolDeclaration,
)
from provctl.models.status import ResourceStatus, StatusSnapshot

__all__ = [
    "ActionResult",
    "ActionType",
    "BackupDeclaration",
    "BrowserExtensionDeclaration",
    "CloneDeclaration",
    "Configuration",
    "ContainerImageDeclaration",
    "Declaration",
    "ExecutionReport",
    "FontDeclaration",
    "GhAuthDeclaration",
    "GhExtensionDeclaration",
    "OsSettingDeclaration",
    "Outcome",
    "PackageDeclaration",
    "PlannedAction",
    "ResourceKind",
    "ResourceStatus",
    "ShellThemeDeclaration",
    "StatusSnapshot",
    "ToolDeclaration",
]
