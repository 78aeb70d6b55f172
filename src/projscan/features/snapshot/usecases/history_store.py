"""src/projscan/features/snapshot/usecases/history_store.py
What: Two-tier store holding the most recent snapshot per project.
Why: Make diffs incremental across sessions while tolerating a broken durable layer.
"""

from __future__ import annotations

import logging
from typing import Final

from projscan.features.snapshot.domain.codec import SnapshotDecodeError, decode_snapshot, encode_snapshot
from projscan.features.snapshot.domain.models import ProjectSnapshot
from projscan.platform.logging import log_event
from projscan.shared.errors import DurableStoreError
from projscan.shared.events import ScanEvent

from .ports import KeyValueStorePort

KEY_PREFIX: Final[str] = "scan:"


def history_key(project_id: str) -> str:
    """Durable-layer key for ``project_id``."""

    return f"{KEY_PREFIX}{project_id}"


class ScanHistoryStore:
    """Keep one snapshot per project in memory, written through to a durable layer.

    Durable-layer failures never propagate: a failed read is a miss and a
    failed write or delete only loses history, which makes the next diff treat
    the project as a first scan.
    """

    def __init__(self, durable: KeyValueStorePort | None = None) -> None:
        self._memory: dict[str, ProjectSnapshot] = {}
        self._durable: KeyValueStorePort | None = durable

    def get(self, project_id: str) -> ProjectSnapshot | None:
        """Return the latest snapshot for ``project_id``, if any."""

        cached = self._memory.get(project_id)
        if cached is not None:
            log_event(
                logging.DEBUG,
                ScanEvent.HISTORY_HIT_MEMORY,
                "Scan history for %s found in memory",
                project_id,
                project_id=project_id,
            )
            return cached

        snapshot = self._read_durable(project_id)
        if snapshot is None:
            log_event(
                logging.DEBUG,
                ScanEvent.HISTORY_MISS,
                "No scan history for %s",
                project_id,
                project_id=project_id,
            )
            return None

        self._memory[project_id] = snapshot
        log_event(
            logging.DEBUG,
            ScanEvent.HISTORY_HIT_DURABLE,
            "Scan history for %s loaded from durable store",
            project_id,
            project_id=project_id,
        )
        return snapshot

    def save(self, snapshot: ProjectSnapshot) -> None:
        """Replace the stored snapshot for ``snapshot.project_id``."""

        project_id = snapshot.project_id
        self._memory[project_id] = snapshot
        if self._durable is not None:
            try:
                self._durable.put(history_key(project_id), encode_snapshot(snapshot))
            except DurableStoreError as exc:
                self._warn(project_id, "write", exc)
        log_event(
            logging.DEBUG,
            ScanEvent.HISTORY_SAVE,
            "Saved scan history for %s (%d files)",
            project_id,
            snapshot.file_count,
            project_id=project_id,
        )

    def clear(self, project_id: str | None = None) -> None:
        """Forget history for ``project_id``, or for every project when ``None``."""

        if project_id is not None:
            _ = self._memory.pop(project_id, None)
            keys = [history_key(project_id)]
        else:
            self._memory.clear()
            keys = self._durable_keys()

        if self._durable is not None:
            for key in keys:
                try:
                    self._durable.delete(key)
                except DurableStoreError as exc:
                    self._warn(key.removeprefix(KEY_PREFIX), "delete", exc)

        log_event(
            logging.INFO,
            ScanEvent.HISTORY_CLEAR,
            "Cleared scan history for %s",
            project_id if project_id is not None else "all projects",
            project_id=project_id,
        )

    def _read_durable(self, project_id: str) -> ProjectSnapshot | None:
        if self._durable is None:
            return None
        try:
            raw = self._durable.get(history_key(project_id))
        except DurableStoreError as exc:
            self._warn(project_id, "read", exc)
            return None
        if raw is None:
            return None
        try:
            return decode_snapshot(raw)
        except SnapshotDecodeError as exc:
            self._warn(project_id, "decode", exc)
            return None

    def _durable_keys(self) -> list[str]:
        if self._durable is None:
            return []
        try:
            return self._durable.list_keys(KEY_PREFIX)
        except DurableStoreError as exc:
            self._warn("*", "list", exc)
            return []

    @staticmethod
    def _warn(project_id: str, operation: str, exc: Exception) -> None:
        log_event(
            logging.WARNING,
            ScanEvent.HISTORY_DURABLE_ERROR,
            "Durable scan history %s failed for %s; continuing without it: %s",
            operation,
            project_id,
            exc,
            project_id=project_id,
        )


__all__ = ["KEY_PREFIX", "ScanHistoryStore", "history_key"]
