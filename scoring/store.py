"""File-backed key-value store with browser-localStorage semantics.

Each key is persisted as one UTF-8 file under the store directory::

    {storage_dir}/
    └── nci_analysis_v1.json

Values are opaque strings; callers serialise and parse them. Reads and
writes are synchronous and whole-value, single process.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from models.session import SessionSnapshot
from scoring.errors import SnapshotCorruptError, SnapshotNotFoundError, StorageError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStore:
    """Minimal ``get_item`` / ``set_item`` / ``remove_item`` store."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def get_item(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` if absent.

        A value that is not valid UTF-8 raises ``UnicodeDecodeError``.
        """
        path = self._path_for(key)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not read '{key}' from {path}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not write '{key}' to {path}: {exc}") from exc
        logger.debug("Stored %d chars under '%s'", len(value), key)

    def remove_item(self, key: str) -> None:
        """Delete *key*. Missing keys are ignored."""
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Could not remove '{key}' at {path}: {exc}") from exc

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StorageError(f"Invalid storage key '{key}'.")
        return self._directory / f"{key}.json"


# ------------------------------------------------------------------
# Session snapshots
# ------------------------------------------------------------------

def write_snapshot(store: LocalStore, key: str, snapshot: SessionSnapshot) -> None:
    """Serialise *snapshot* wholesale under *key*."""
    store.set_item(key, snapshot.to_json())


def read_snapshot(store: LocalStore, key: str) -> SessionSnapshot:
    """Read back the snapshot stored under *key*.

    Raises ``SnapshotNotFoundError`` if nothing was saved and
    ``SnapshotCorruptError`` if the stored value is not a valid snapshot.
    Fields absent from the stored object stay unset on the returned model
    (see ``SessionSnapshot.model_fields_set``).
    """
    try:
        raw = store.get_item(key)
    except UnicodeDecodeError as exc:
        raise SnapshotCorruptError(
            "Failed to load saved analysis. Data may be corrupted."
        ) from exc
    if raw is None:
        raise SnapshotNotFoundError("No saved analysis found.")
    try:
        return SessionSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotCorruptError(
            "Failed to load saved analysis. Data may be corrupted."
        ) from exc
