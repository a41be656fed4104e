"""Configuration models for declarative workstation provisioning.

This module defines the Pydantic models representing the provctl.toml
structure that describes the desired machine state. Each resource kind
has its own declaration record; unknown fields are rejected.
"""

from collections.abc import Iterator
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ResourceKind(Enum):
    """Kinds of resources provctl reconciles.

    The declaration order of the members is the canonical order in which
    resources are probed, planned and applied.
    """

    PACKAGE = "package"
    SHELL_THEME = "shell_theme"
    FONT = "font"
    GH_AUTH = "gh_auth"
    GH_EXTENSION = "gh_extension"
    CLONE = "clone"
    BROWSER_EXTENSION = "browser_extension"
    CONTAINER_IMAGE = "container_image"
    TOOL = "tool"
    OS_SETTING = "os_setting"
    BACKUP = "backup"


class Declaration(BaseModel):
    """Fields shared by every resource declaration.

    Attributes:
        id: Stable identifier, unique within its resource kind.
        name: Display name. Defaults to the identifier.
        enabled: Set to false to keep a declaration without acting on it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: Annotated[str, Field(min_length=1, description="Stable identifier")]
    name: Annotated[str | None, Field(description="Display name")] = None
    enabled: Annotated[bool, Field(description="Whether the declaration is active")] = True

    @property
    def display_name(self) -> str:
        """Name shown in tables and logs."""
        return self.name or self.id


class PackageDeclaration(Declaration):
    """A package installed through the system package manager."""

    version: Annotated[str | None, Field(description="Pinned version to install")] = None


class ShellThemeDeclaration(Declaration):
    """Prompt theme initialised from the PowerShell profile.

    Attributes:
        theme: Theme name, e.g. ``paradox``.
        profile: Path of the profile script that must contain the init line.
        themes_path: Expression for the themes directory, written verbatim
            into the init line.
    """

    id: Annotated[str, Field(min_length=1)] = "shell-theme"
    theme: Annotated[str, Field(min_length=1, description="Theme name")]
    profile: Annotated[
        str, Field(description="Profile script path")
    ] = "~/Documents/PowerShell/Microsoft.PowerShell_profile.ps1"
    themes_path: Annotated[str, Field(description="Themes directory expression")] = (
        "$env:POSH_THEMES_PATH"
    )

    @property
    def init_line(self) -> str:
        """The exact line the profile must contain."""
        return (
            f'oh-my-posh init pwsh --config "{self.themes_path}\\{self.theme}.omp.json" '
            "| Invoke-Expression"
        )


FontConsumer = Literal["windows-terminal", "vscode"]


class FontDeclaration(Declaration):
    """A font installed for the current user.

    Attributes:
        family: Font family name consumers refer to.
        files: Font file names to look for in the font directories.
        consumers: Applications configured to use the font after install.
    """

    family: Annotated[str, Field(min_length=1, description="Font family name")]
    files: Annotated[list[str], Field(default_factory=list, description="Font file names")]
    consumers: Annotated[
        list[FontConsumer],
        Field(default_factory=list, description="Applications to configure"),
    ]


class GhAuthDeclaration(Declaration):
    """Source-control CLI authentication."""

    id: Annotated[str, Field(min_length=1)] = "gh-auth"
    hostname: Annotated[str, Field(description="Host to authenticate against")] = "github.com"


class GhExtensionDeclaration(Declaration):
    """A source-control CLI extension; ``id`` is ``owner/gh-name``."""


class CloneDeclaration(Declaration):
    """A repository cloned to a local path."""

    repository: Annotated[str, Field(min_length=1, description="owner/name")]
    path: Annotated[str, Field(min_length=1, description="Target directory")]


class BrowserExtensionDeclaration(Declaration):
    """A Firefox extension; ``id`` is the extension id.

    Attributes:
        url: Download location of the extension package.
        extension: File suffix of the installed package.
    """

    url: Annotated[str, Field(min_length=1, description="Download URL")]
    extension: Annotated[str, Field(description="Installed file suffix")] = "xpi"

    @property
    def file_name(self) -> str:
        """Name of the file the browser profile holds once installed."""
        return f"{self.id}.{self.extension}"


class ContainerImageDeclaration(Declaration):
    """A container image pulled to the local image store."""

    image: Annotated[str, Field(min_length=1, description="Image repository")]
    tag: Annotated[str, Field(min_length=1, description="Image tag")] = "latest"

    @property
    def reference(self) -> str:
        """``repository:tag`` reference."""
        return f"{self.image}:{self.tag}"


class ToolDeclaration(Declaration):
    """A global tool installed through the dotnet tool runtime."""

    version: Annotated[str | None, Field(description="Pinned version to install")] = None


SettingValue = bool | int | str


class OsSettingDeclaration(Declaration):
    """A registry-backed OS setting.

    Boolean desired values are mapped through ``true_value`` and
    ``false_value`` before comparison with the stored value.

    Attributes:
        key: Registry key, e.g. ``HKCU\\Software\\...\\Advanced``.
        value_name: Name of the value under the key.
        value: Desired value.
        value_type: Registry type used when writing.
        restart_shell: Whether the desktop shell must restart to apply.
    """

    key: Annotated[str, Field(min_length=1, description="Registry key")]
    value_name: Annotated[str, Field(min_length=1, description="Registry value name")]
    value: Annotated[SettingValue, Field(description="Desired value")]
    true_value: Annotated[int | str, Field(description="Stored form of true")] = 1
    false_value: Annotated[int | str, Field(description="Stored form of false")] = 0
    value_type: Annotated[
        Literal["REG_DWORD", "REG_SZ"], Field(description="Registry value type")
    ] = "REG_DWORD"
    restart_shell: Annotated[bool, Field(description="Restart explorer after write")] = False

    @property
    def stored_value(self) -> str:
        """Desired value in the textual form the settings store reports."""
        value = self.value
        if isinstance(value, bool):
            value = self.true_value if value else self.false_value
        return str(value)


class BackupDeclaration(Declaration):
    """A scheduled mirror of a directory to a backup destination."""

    source: Annotated[str, Field(min_length=1, description="Directory to back up")]
    destination: Annotated[str, Field(min_length=1, description="Backup destination")]
    schedule: Annotated[
        Literal["DAILY", "WEEKLY", "ONLOGON"], Field(description="Schedule type")
    ] = "DAILY"
    time: Annotated[str, Field(pattern=r"^\d{2}:\d{2}$", description="Start time")] = "02:00"

    @property
    def task_name(self) -> str:
        """Name of the scheduled task that performs the backup."""
        return f"provctl-backup-{self.id}"


class RepositoryConfig(BaseModel):
    """Source-control section: authentication, extensions and clones."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    auth: GhAuthDeclaration | None = None
    extensions: Annotated[list[GhExtensionDeclaration], Field(default_factory=list)]
    clones: Annotated[list[CloneDeclaration], Field(default_factory=list)]


class CacheConfig(BaseModel):
    """Status cache options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_age_hours: Annotated[float, Field(gt=0, description="Cache validity window")] = 24.0


class Configuration(BaseModel):
    """Complete configuration representing the desired machine state.

    Loaded once per run and never modified afterwards.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    packages: Annotated[list[PackageDeclaration], Field(default_factory=list)]
    theme: ShellThemeDeclaration | None = None
    fonts: Annotated[list[FontDeclaration], Field(default_factory=list)]
    repository: Annotated[RepositoryConfig, Field(default_factory=RepositoryConfig)]
    browser_extensions: Annotated[list[BrowserExtensionDeclaration], Field(default_factory=list)]
    container_images: Annotated[list[ContainerImageDeclaration], Field(default_factory=list)]
    tools: Annotated[list[ToolDeclaration], Field(default_factory=list)]
    os_settings: Annotated[list[OsSettingDeclaration], Field(default_factory=list)]
    backups: Annotated[list[BackupDeclaration], Field(default_factory=list)]
    cache: Annotated[CacheConfig, Field(default_factory=CacheConfig)]

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "Configuration":
        """Validate that identifiers are unique within each resource kind."""
        seen: set[tuple[ResourceKind, str]] = set()
        duplicates: list[str] = []
        for kind, declaration in self.declarations():
            key = (kind, declaration.id)
            if key in seen:
                duplicates.append(f"{kind.value}:{declaration.id}")
            seen.add(key)
        if duplicates:
            msg = f"Duplicate declarations: {', '.join(duplicates)}"
            raise ValueError(msg)
        return self

    def declarations(self) -> Iterator[tuple[ResourceKind, Declaration]]:
        """Yield every declaration with its kind in canonical order.

        Within a kind, declarations keep their configuration order.
        """
        for package in self.packages:
            yield ResourceKind.PACKAGE, package
        if self.theme is not None:
            yield ResourceKind.SHELL_THEME, self.theme
        for font in self.fonts:
            yield ResourceKind.FONT, font
        if self.repository.auth is not None:
            yield ResourceKind.GH_AUTH, self.repository.auth
        for extension in self.repository.extensions:
            yield ResourceKind.GH_EXTENSION, extension
        for clone in self.repository.clones:
            yield ResourceKind.CLONE, clone
        for browser_extension in self.browser_extensions:
            yield ResourceKind.BROWSER_EXTENSION, browser_extension
        for image in self.container_images:
            yield ResourceKind.CONTAINER_IMAGE, image
        for tool in self.tools:
            yield ResourceKind.TOOL, tool
        for setting in self.os_settings:
            yield ResourceKind.OS_SETTING, setting
        for backup in self.backups:
            yield ResourceKind.BACKUP, backup

    @property
    def declaration_count(self) -> int:
        """Total number of declarations across all kinds."""
        return sum(1 for _ in self.declarations())
