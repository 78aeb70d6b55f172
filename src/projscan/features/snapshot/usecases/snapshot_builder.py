"""src/projscan/features/snapshot/usecases/snapshot_builder.py
What: Walk a project's category folders and record a structural snapshot.
Why: Give the diff engine a point-in-time view that excludes file content.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from projscan.features.snapshot.domain.categories import CATEGORY_ORDER
from projscan.features.snapshot.domain.models import CategorySnapshot, FileRecord, ProjectSnapshot
from projscan.platform.logging import log_event, logger
from projscan.shared.errors import NotFound, StorageUnavailable
from projscan.shared.events import ScanEvent

from .ports import RemoteStorageGateway


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SnapshotBuilder:
    """Build ``ProjectSnapshot`` instances through a storage gateway.

    Only folders named after a known category are recorded. Files whose name
    starts with ``ignored_prefix`` are handler output and are left out.
    """

    def __init__(
        self,
        gateway: RemoteStorageGateway,
        *,
        categories: Iterable[str] = CATEGORY_ORDER,
        ignored_prefix: str | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._gateway: RemoteStorageGateway = gateway
        self._categories: frozenset[str] = frozenset(categories)
        self._ignored_prefix: str | None = ignored_prefix or None
        self._clock: Callable[[], datetime] = clock

    async def build(self, project_id: str) -> ProjectSnapshot:
        """Snapshot ``project_id``.

        Raises:
            StorageUnavailable: The gateway could not enumerate the project's
                category folders or list one of them.
            NotFound: The project itself does not exist.
        """

        log_event(logging.INFO, ScanEvent.SCAN_START, "Scanning project %s", project_id, project_id=project_id)
        try:
            folders = await self._gateway.list_category_folders(project_id)
        except StorageUnavailable as exc:
            log_event(
                logging.ERROR,
                ScanEvent.SCAN_ERROR,
                "Unable to enumerate category folders for %s: %s",
                project_id,
                exc,
                project_id=project_id,
            )
            raise

        categories: dict[str, CategorySnapshot] = {}
        for folder in folders:
            if folder.category_id not in self._categories:
                log_event(
                    logging.DEBUG,
                    ScanEvent.SCAN_FOLDER_SKIPPED,
                    "Ignoring non-category folder %s",
                    folder.category_id,
                    project_id=project_id,
                    category=folder.category_id,
                )
                continue
            if folder.category_id in categories:
                logger.warning(
                    "Duplicate %s folder in project %s; keeping the first one",
                    folder.category_id,
                    project_id,
                )
                continue

            try:
                records = await self._gateway.list_files(folder.folder_ref)
            except NotFound:
                log_event(
                    logging.WARNING,
                    ScanEvent.SCAN_FOLDER_MISSING,
                    "Category folder %s disappeared during scan",
                    folder.category_id,
                    project_id=project_id,
                    category=folder.category_id,
                )
                continue

            categories[folder.category_id] = CategorySnapshot.from_records(
                folder.category_id,
                folder.folder_ref,
                self._tracked(records),
            )

        snapshot = ProjectSnapshot(project_id=project_id, taken_at=self._clock(), categories=categories)
        log_event(
            logging.INFO,
            ScanEvent.SCAN_COMPLETE,
            "Scanned %d categories (%d files) in project %s",
            len(snapshot.categories),
            snapshot.file_count,
            project_id,
            project_id=project_id,
        )
        return snapshot

    def _tracked(self, records: Iterable[FileRecord]) -> list[FileRecord]:
        if self._ignored_prefix is None:
            return list(records)
        return [record for record in records if not record.name.startswith(self._ignored_prefix)]


__all__ = ["SnapshotBuilder"]
