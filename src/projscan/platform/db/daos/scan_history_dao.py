"""src/projscan/platform/db/daos/scan_history_dao.py
What: Key-value access to the scan_history table.
Why: Persist the latest project snapshot so incremental scans survive restarts.
"""

from __future__ import annotations

import sqlite3
import threading
from typing import Final

from projscan.platform.logging import logger
from projscan.shared.errors import DurableStoreError


class ScanHistoryDAO:
    """Data access object for the scan_history table.

    Failures are logged and re-raised as ``DurableStoreError`` so the history
    store can decide how to degrade.
    """

    _UPSERT_SQL: Final[str] = (
        """
        INSERT INTO scan_history (key, payload)
        VALUES (?, ?)
        ON CONFLICT(key) DO UPDATE SET
            payload = excluded.payload,
            updated_at = CURRENT_TIMESTAMP
        """
    )

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn: sqlite3.Connection = conn
        self._lock: threading.Lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        """Return the payload stored under ``key`` or ``None``."""

        try:
            with self._lock:
                cursor = self.conn.cursor()
                _ = cursor.execute("SELECT payload FROM scan_history WHERE key = ?", (key,))
                row = cursor.fetchone()
        except sqlite3.Error as exc:
            logger.error("Failed to read scan history for %s: %s", key, exc)
            raise DurableStoreError(f"read failed for {key}: {exc}") from exc
        if row is None:
            return None
        payload = row[0]
        return bytes(payload) if payload is not None else None

    def put(self, key: str, payload: bytes) -> None:
        """Insert or replace the payload stored under ``key``."""

        try:
            with self._lock:
                cursor = self.conn.cursor()
                _ = cursor.execute(self._UPSERT_SQL, (key, sqlite3.Binary(payload)))
                self.conn.commit()
        except sqlite3.Error as exc:
            logger.error("Failed to write scan history for %s: %s", key, exc)
            self._rollback()
            raise DurableStoreError(f"write failed for {key}: {exc}") from exc

    def delete(self, key: str) -> None:
        """Remove the entry stored under ``key`` if present."""

        try:
            with self._lock:
                cursor = self.conn.cursor()
                _ = cursor.execute("DELETE FROM scan_history WHERE key = ?", (key,))
                self.conn.commit()
        except sqlite3.Error as exc:
            logger.error("Failed to delete scan history for %s: %s", key, exc)
            self._rollback()
            raise DurableStoreError(f"delete failed for {key}: {exc}") from exc

    def list_keys(self, prefix: str = "") -> list[str]:
        """Return stored keys starting with ``prefix`` in sorted order."""

        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        try:
            with self._lock:
                cursor = self.conn.cursor()
                _ = cursor.execute(
                    "SELECT key FROM scan_history WHERE key LIKE ? ESCAPE '\\' ORDER BY key",
                    (f"{escaped}%",),
                )
                rows = cursor.fetchall()
        except sqlite3.Error as exc:
            logger.error("Failed to list scan history keys: %s", exc)
            raise DurableStoreError(f"list failed: {exc}") from exc
        return [str(row[0]) for row in rows]

    def _rollback(self) -> None:
        try:
            with self._lock:
                self.conn.rollback()
        except sqlite3.Error:  # pragma: no cover - rollback after a failed write
            logger.debug("Rollback after failed scan history write also failed")


__all__ = ["ScanHistoryDAO"]
