"""Database manager for projscan."""

import sqlite3
from pathlib import Path
from typing import Any, Final, final

from projscan.config.paths import default_db_path
from projscan.platform.logging import logger

MEMORY_DB: Final[str] = ":memory:"
SCHEMA_VERSION: Final[int] = 1

_SCHEMA: Final[str] = """
CREATE TABLE IF NOT EXISTS scan_history (
    key TEXT PRIMARY KEY,
    payload BLOB NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""


@final
class DatabaseManager:
    """Own the SQLite connection backing the durable scan history.

    Use as a context manager; the connection is opened on enter and closed on
    exit.
    """

    db_path: str | Path
    conn: sqlite3.Connection | None

    def __init__(self, db_path: Path | str | None = None) -> None:
        """Initialize database manager.

        Args:
            db_path: Database file, ``":memory:"`` for a throwaway database, or
                None for the default location in the data directory.
        """
        if db_path is None:
            self.db_path = default_db_path()
        elif db_path == MEMORY_DB:
            self.db_path = MEMORY_DB
        else:
            self.db_path = Path(db_path)
        self.conn = None

    @property
    def in_memory(self) -> bool:
        return self.db_path == MEMORY_DB

    def connect(self) -> None:
        """Open the connection and make sure the schema exists."""
        if not self.in_memory:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            # check_same_thread is off because gateways hop threads via asyncio.to_thread.
            self.conn = sqlite3.connect(
                self.db_path,
                timeout=30.0,
                isolation_level="IMMEDIATE",
                check_same_thread=False,
            )
        except sqlite3.OperationalError as e:
            logger.error("Failed to open scan history database %s: %s", self.db_path, e)
            if "unable to open database file" in str(e):
                raise PermissionError(f"Unable to open database at {self.db_path}") from e
            raise

        try:
            _ = self.conn.execute("PRAGMA busy_timeout = 30000")
            if not self.in_memory:
                _ = self.conn.execute("PRAGMA journal_mode = WAL")
                _ = self.conn.execute("PRAGMA synchronous = NORMAL")
            self._ensure_schema()
        except sqlite3.Error as e:
            logger.error("Failed to prepare scan history database: %s", e)
            self.close()
            raise

    def _ensure_schema(self) -> None:
        if self.conn is None:
            return

        version = int(self.conn.execute("PRAGMA user_version").fetchone()[0])
        if version >= SCHEMA_VERSION:
            logger.debug("Scan history schema v%d already present", version)
            return

        _ = self.conn.executescript(_SCHEMA)
        _ = self.conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        self.conn.commit()
        logger.info("Initialized scan history schema v%d at %s", SCHEMA_VERSION, self.db_path)

    def close(self) -> None:
        if self.conn is None:
            return
        try:
            self.conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to close database connection: %s", e)
        finally:
            self.conn = None

    def __enter__(self) -> "DatabaseManager":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        self.close()
