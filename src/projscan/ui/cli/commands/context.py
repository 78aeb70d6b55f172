"""src/projscan/ui/cli/commands/context.py
What: Build gateways and services for CLI commands.
Why: Keep credential lookup and database lifetime out of individual commands.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from projscan.application.services.scan_service import ProjectScanService, create_scan_service
from projscan.config.config import Config
from projscan.config.settings import DRIVE_TOKEN_ENV, GENERATED_FILE_PREFIX
from projscan.features.snapshot import RemoteStorageGateway, ScanHistoryStore
from projscan.platform.db.daos.scan_history_dao import ScanHistoryDAO
from projscan.platform.db.db_manager import DatabaseManager
from projscan.platform.storage import DriveGateway, LocalFolderGateway
from projscan.shared.errors import ProjScanError


def build_gateway(*, drive: bool) -> RemoteStorageGateway:
    """Return the Drive gateway when ``drive`` is set, else the local one.

    Raises:
        ProjScanError: Drive was requested but no access token is configured.
    """
    if not drive:
        return LocalFolderGateway()

    token = os.environ.get(DRIVE_TOKEN_ENV, "").strip()
    if not token:
        raise ProjScanError(f"Set {DRIVE_TOKEN_ENV} to a Google Drive access token to use --drive")
    return DriveGateway(token)


def _db_path() -> Path | None:
    return Config.load().db_path


@contextmanager
def open_history(db_path: Path | None = None) -> Iterator[ScanHistoryStore]:
    """Yield a history store backed by the sqlite database."""

    with DatabaseManager(db_path or _db_path()) as db_manager:
        if db_manager.conn is None:
            raise RuntimeError("Database connection could not be established")
        yield ScanHistoryStore(ScanHistoryDAO(db_manager.conn))


@contextmanager
def open_scan_service(*, drive: bool, db_path: Path | None = None) -> Iterator[ProjectScanService]:
    """Yield a fully wired ``ProjectScanService`` for one CLI invocation."""

    gateway = build_gateway(drive=drive)
    with DatabaseManager(db_path or _db_path()) as db_manager:
        if db_manager.conn is None:
            raise RuntimeError("Database connection could not be established")
        yield create_scan_service(
            gateway,
            durable=ScanHistoryDAO(db_manager.conn),
            prefix=GENERATED_FILE_PREFIX,
        )


__all__ = ["build_gateway", "open_history", "open_scan_service"]
