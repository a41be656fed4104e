"""Status cache persistence.

The StateCache keeps the last StatusSnapshot on disk so that repeated
runs inside the validity window skip probing. The file is read and
written wholesale; a corrupt or unreadable file is treated as absent.

Concurrent provctl runs share the file without locking and may
overwrite each other's snapshot.
"""

import json
import logging
import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from tempfile import NamedTemporaryFile

from provctl.models.config import Configuration
from provctl.models.status import StatusKey, StatusSnapshot
from provctl.probes import Prober

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class StateCache:
    """Persisted StatusSnapshot with a maximum age.

    Attributes:
        path: Location of the cache file.
        max_age: How long a saved snapshot stays valid.
    """

    def __init__(self, path: Path, max_age: timedelta, clock: Clock | None = None) -> None:
        """Initialize the cache.

        Args:
            path: Location of the cache file.
            max_age: Validity window of a saved snapshot.
            clock: Returns the current time; defaults to UTC now.
        """
        self.path = path
        self.max_age = max_age
        self._clock = clock or _utc_now

    def load(self) -> StatusSnapshot | None:
        """Load the cached snapshot regardless of its age.

        Returns:
            The snapshot, or None if the file is absent, unreadable or
            malformed.
        """
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return StatusSnapshot.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable status cache %s: %s", self.path, e)
            return None

    def is_fresh(self, snapshot: StatusSnapshot) -> bool:
        """Check whether a snapshot is younger than the maximum age."""
        return self._clock() - snapshot.timestamp < self.max_age

    def load_valid(self) -> StatusSnapshot | None:
        """Load the cached snapshot only if it is still valid."""
        snapshot = self.load()
        if snapshot is None:
            return None
        if not self.is_fresh(snapshot):
            logger.debug("Status cache expired (saved %s)", snapshot.timestamp.isoformat())
            return None
        return snapshot

    def is_valid(self) -> bool:
        """Check that a parseable snapshot exists and is still valid."""
        return self.load_valid() is not None

    def save(self, snapshot: StatusSnapshot) -> StatusSnapshot:
        """Persist a snapshot stamped with the current time.

        The file is written atomically through a temporary file.

        Args:
            snapshot: Snapshot to persist.

        Returns:
            The snapshot as saved, with its new timestamp.

        Raises:
            OSError: If the file cannot be written.
        """
        stamped = snapshot.with_timestamp(self._clock())
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                json.dump(stamped.to_dict(), f, indent=2)
                f.write("\n")
            os.replace(str(tmp_path), str(self.path))
        except OSError:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise

        logger.debug("Saved %d status(es) to %s", len(stamped), self.path)
        return stamped

    def clear(self) -> bool:
        """Delete the cache file.

        Returns:
            True if a file was removed, False if there was none.
        """
        if not self.path.exists():
            return False
        self.path.unlink()
        return True

    def reconcile_new_declarations(
        self,
        cached: StatusSnapshot,
        configuration: Configuration,
        prober: Prober,
    ) -> tuple[StatusSnapshot, list[StatusKey]]:
        """Probe declarations the cached snapshot does not know yet.

        Entries for resources no longer declared are kept; the planner
        only looks at current declarations.

        Args:
            cached: Snapshot loaded from the cache.
            configuration: Current configuration.
            prober: Prober used for the missing declarations.

        Returns:
            Tuple of (updated snapshot, keys probed). The snapshot is
            ``cached`` itself when nothing was missing.
        """
        missing = [
            (kind, declaration)
            for kind, declaration in configuration.declarations()
            if (kind, declaration.id) not in cached
        ]
        if not missing:
            return cached, []

        logger.info("Probing %d new declaration(s) not in the status cache", len(missing))
        statuses = prober.probe_many(missing)
        return cached.with_statuses(statuses), [status.key for status in statuses]
