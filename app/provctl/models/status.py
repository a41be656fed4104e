"""Resource status models.

A ResourceStatus records whether one declared resource was found in its
desired state. A StatusSnapshot aggregates the statuses of one
reconciliation pass and is the unit persisted by the status cache.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from provctl.models.config import ResourceKind

StatusKey = tuple[ResourceKind, str]


@dataclass(frozen=True, slots=True)
class ResourceStatus:
    """Observed state of one declared resource.

    Attributes:
        kind: Resource kind.
        id: Declaration identifier.
        name: Display name at probe time.
        installed: Whether the resource satisfies its declaration
            (installed, configured or pulled).
        metadata: Kind-specific observations such as a resolved path.
    """

    kind: ResourceKind
    id: str
    name: str
    installed: bool
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate status data after initialization."""
        if not self.id:
            msg = "Resource id cannot be empty"
            raise ValueError(msg)
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def key(self) -> StatusKey:
        """Lookup key of this status within a snapshot."""
        return (self.kind, self.id)

    def mark_installed(self) -> "ResourceStatus":
        """Return a copy of this status marked as satisfied."""
        return ResourceStatus(
            kind=self.kind,
            id=self.id,
            name=self.name,
            installed=True,
            metadata=self.metadata,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "installed": self.installed,
        }
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data

    @classmethod
    def from_dict(cls, kind: ResourceKind, data: Mapping[str, Any]) -> "ResourceStatus":
        """Create a status from its cache representation.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a field has the wrong type.
        """
        installed = data["installed"]
        if not isinstance(installed, bool):
            msg = f"'installed' must be a boolean, got {installed!r}"
            raise ValueError(msg)
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            msg = f"'metadata' must be an object, got {metadata!r}"
            raise ValueError(msg)
        return cls(
            kind=kind,
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            installed=installed,
            metadata={str(k): str(v) for k, v in metadata.items()},
        )


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """All resource statuses of one reconciliation pass.

    Snapshots are immutable; the executor and the cache derive new
    snapshots instead of mutating existing ones.

    Attributes:
        timestamp: When the snapshot was probed or last saved.
        statuses: Statuses in probe order.
    """

    timestamp: datetime
    statuses: tuple[ResourceStatus, ...] = ()

    def get(self, kind: ResourceKind, resource_id: str) -> ResourceStatus | None:
        """Find the status of a resource, or None if it was never probed."""
        for status in self.statuses:
            if status.kind == kind and status.id == resource_id:
                return status
        return None

    def __contains__(self, key: object) -> bool:
        return any(status.key == key for status in self.statuses)

    def __len__(self) -> int:
        return len(self.statuses)

    def with_statuses(self, statuses: Iterable[ResourceStatus]) -> "StatusSnapshot":
        """Return a snapshot with the given statuses replaced or appended.

        Statuses whose key already exists replace the old entry in place;
        new keys are appended in the order given.
        """
        updates = {status.key: status for status in statuses}
        merged = [updates.pop(status.key, status) for status in self.statuses]
        merged.extend(updates.values())
        return StatusSnapshot(timestamp=self.timestamp, statuses=tuple(merged))

    def with_timestamp(self, timestamp: datetime) -> "StatusSnapshot":
        """Return the same statuses stamped with a new timestamp."""
        return StatusSnapshot(timestamp=timestamp, statuses=self.statuses)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the cache document: a timestamp plus one array per kind."""
        data: dict[str, Any] = {"timestamp": self.timestamp.isoformat()}
        for kind in ResourceKind:
            data[kind.value] = [s.to_dict() for s in self.statuses if s.kind == kind]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StatusSnapshot":
        """Create a snapshot from its cache document.

        Arrays for unknown kinds are ignored.

        Raises:
            KeyError: If the timestamp or a required status field is missing.
            ValueError: If a field cannot be parsed.
        """
        timestamp = datetime.fromisoformat(str(data["timestamp"]))
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)

        statuses: list[ResourceStatus] = []
        for kind in ResourceKind:
            entries = data.get(kind.value, [])
            if not isinstance(entries, list):
                msg = f"'{kind.value}' must be an array"
                raise ValueError(msg)
            statuses.extend(ResourceStatus.from_dict(kind, entry) for entry in entries)

        return cls(timestamp=timestamp, statuses=tuple(statuses))
