"""
Summary: End-to-end pipeline scenarios through ProjectScanService.
Why: Scan, diff, dispatch, and history persistence must cooperate across runs.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from projscan.application.services.scan_service import (
    ProjectScanService,
    build_registry,
    create_scan_service,
)
from projscan.features.processing import CategoryHandlerRegistry
from projscan.features.snapshot import (
    CategoryFolder,
    CategorySnapshot,
    FileRecord,
    ProjectSnapshot,
    ScanHistoryStore,
    SnapshotBuilder,
)
from projscan.shared.errors import AlreadyProcessing, StorageUnavailable
from projscan.shared.progress import ProgressEvent, ProgressStage

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


class FakeDrive:
    """Mutable in-memory project tree: category -> file id -> record."""

    def __init__(self) -> None:
        self.tree: dict[str, dict[str, FileRecord]] = {}
        self.unavailable = False
        self.modified_at = T0
        self.created: list[tuple[str, str]] = []

    def put(self, category: str, record_id: str, *, minutes: int = 0) -> None:
        self.tree.setdefault(category, {})[record_id] = FileRecord(
            record_id,
            f"{record_id}.md",
            "text/markdown",
            T0 + timedelta(minutes=minutes),
        )

    async def list_category_folders(self, project_id: str) -> list[CategoryFolder]:
        if self.unavailable:
            raise StorageUnavailable("drive offline")
        return [CategoryFolder(name, name) for name in self.tree]

    async def project_modified_at(self, project_id: str) -> datetime:
        if self.unavailable:
            raise StorageUnavailable("drive offline")
        return self.modified_at

    async def list_files(self, folder_ref: str) -> list[FileRecord]:
        return list(self.tree[folder_ref].values())

    async def read_file_content(self, file_ref: str) -> bytes:
        return b""

    async def create_file(
        self, folder_ref: str, name: str, content: str | bytes, content_type: str = "text/markdown"
    ) -> FileRecord:
        self.created.append((folder_ref, name))
        record = FileRecord(f"gen-{name}", name, content_type, T0)
        self.tree[folder_ref][record.id] = record
        return record


class Handlers:
    """Record handler invocations; categories in ``failing`` raise."""

    def __init__(self, *categories: str) -> None:
        self.calls: list[str] = []
        self.failing: set[str] = set()
        self.registry = CategoryHandlerRegistry({name: self._handle for name in categories})

    async def _handle(self, category: CategorySnapshot, project: ProjectSnapshot) -> object:
        self.calls.append(category.category_id)
        if category.category_id in self.failing:
            raise RuntimeError("generator offline")
        return len(category.files)


def _service(drive: FakeDrive, handlers: Handlers) -> ProjectScanService:
    return ProjectScanService(drive, ScanHistoryStore(), handlers.registry)


def test_recorded_scan_becomes_baseline() -> None:
    drive = FakeDrive()
    drive.put("Document", "brief")
    service = _service(drive, Handlers())

    assert asyncio.run(service.needs_update("p1"))
    first = asyncio.run(service.scan("p1", record=True))
    second = asyncio.run(service.scan("p1"))

    assert first.first_scan
    assert first.saved
    assert first.changes.changed_categories == {"Document"}
    assert not asyncio.run(service.needs_update("p1"))
    assert second.changes.is_empty
    assert second.previous == first.snapshot


def test_plain_scan_leaves_changes_for_run() -> None:
    drive = FakeDrive()
    drive.put("Document", "brief")
    handlers = Handlers("Document")
    service = _service(drive, handlers)

    preview = asyncio.run(service.scan("p1"))
    result = asyncio.run(service.run("p1"))

    assert not preview.saved
    assert preview.changes.changed_categories == {"Document"}
    assert result.scan.changes.changed_categories == {"Document"}
    assert handlers.calls == ["Document"]
    assert result.report.processed_categories == ("Document",)


def test_needs_update_follows_project_modification_time() -> None:
    drive = FakeDrive()
    drive.put("Document", "brief")
    service = _service(drive, Handlers("Document"))

    result = asyncio.run(service.run("p1"))
    assert not asyncio.run(service.needs_update("p1"))

    drive.modified_at = result.saved_snapshot.taken_at + timedelta(seconds=100)
    assert asyncio.run(service.needs_update("p1"))


def test_needs_update_is_true_when_modification_time_is_unreadable() -> None:
    drive = FakeDrive()
    drive.put("Document", "brief")
    service = _service(drive, Handlers("Document"))
    _ = asyncio.run(service.run("p1"))

    drive.unavailable = True

    assert asyncio.run(service.needs_update("p1"))


def test_scan_progress_sequence() -> None:
    drive = FakeDrive()
    drive.put("Paper", "draft")
    events: list[ProgressEvent] = []

    _ = asyncio.run(_service(drive, Handlers()).scan("p1", events.append))

    assert [event.stage for event in events] == [
        ProgressStage.INITIALIZING,
        ProgressStage.SCANNING,
        ProgressStage.COMPLETED,
    ]
    assert events[-1].percent_complete == 100


def test_unavailable_storage_emits_error_and_raises() -> None:
    drive = FakeDrive()
    drive.unavailable = True
    events: list[ProgressEvent] = []
    service = _service(drive, Handlers())

    with pytest.raises(StorageUnavailable):
        _ = asyncio.run(service.scan("p1", events.append))

    assert events[-1].stage is ProgressStage.ERROR
    assert asyncio.run(service.needs_update("p1"))


def test_end_to_end_scenario() -> None:
    drive = FakeDrive()
    drive.put("Document", "d1")
    drive.put("Document", "d2")
    drive.put("Presentation", "deck")
    handlers = Handlers("Document", "Presentation", "Paper")
    service = _service(drive, handlers)

    first = asyncio.run(service.run("p1"))
    assert first.succeeded
    assert handlers.calls == ["Document", "Presentation"]

    handlers.calls.clear()
    quiet = asyncio.run(service.run("p1"))
    assert quiet.scan.changes.is_empty
    assert handlers.calls == []
    assert quiet.report.success_count == 0

    drive.put("Document", "d1", minutes=10)
    drive.put("Paper", "draft")
    _ = drive.tree["Presentation"].pop("deck")
    third = asyncio.run(service.run("p1"))

    changes = third.scan.changes
    assert [change.record.id for change in changes.changed_files] == ["d1"]
    assert [change.record.id for change in changes.new_files] == ["draft"]
    assert [change.record.id for change in changes.deleted_files] == ["deck"]
    assert handlers.calls == ["Document", "Presentation", "Paper"]
    assert third.report.success_count == 3


def test_failed_category_is_retried_on_next_run() -> None:
    drive = FakeDrive()
    drive.put("Document", "d1")
    drive.put("Implementation", "main")
    handlers = Handlers("Document", "Implementation")
    handlers.failing.add("Implementation")
    service = _service(drive, handlers)

    first = asyncio.run(service.run("p1"))
    assert not first.succeeded
    assert first.report.error_count == 1
    assert "Implementation" not in first.saved_snapshot.categories

    handlers.calls.clear()
    handlers.failing.clear()
    second = asyncio.run(service.run("p1"))

    assert second.scan.changes.changed_categories == {"Implementation"}
    assert handlers.calls == ["Implementation"]
    assert second.succeeded

    handlers.calls.clear()
    third = asyncio.run(service.run("p1"))
    assert third.scan.changes.is_empty
    assert handlers.calls == []


def test_failed_category_keeps_previous_state() -> None:
    drive = FakeDrive()
    drive.put("Document", "d1")
    handlers = Handlers("Document")
    service = _service(drive, handlers)
    _ = asyncio.run(service.run("p1"))

    drive.put("Document", "d2")
    handlers.failing.add("Document")
    result = asyncio.run(service.run("p1"))

    assert set(result.saved_snapshot.categories["Document"].files) == {"d1"}


def test_concurrent_run_for_same_project_is_rejected() -> None:
    async def scenario() -> None:
        drive = FakeDrive()
        drive.put("Document", "d1")
        started = asyncio.Event()
        release = asyncio.Event()

        async def _slow(category: CategorySnapshot, project: ProjectSnapshot) -> object:
            started.set()
            await release.wait()
            return None

        service = ProjectScanService(
            drive, ScanHistoryStore(), CategoryHandlerRegistry({"Document": _slow})
        )
        first = asyncio.create_task(service.run("p1"))
        await started.wait()
        with pytest.raises(AlreadyProcessing):
            _ = await service.run("p1")
        release.set()
        result = await first
        assert result.succeeded

    asyncio.run(scenario())


def test_clear_history_forces_first_scan() -> None:
    drive = FakeDrive()
    drive.put("Document", "d1")
    service = _service(drive, Handlers())
    _ = asyncio.run(service.scan("p1", record=True))

    service.clear_history("p1")

    assert asyncio.run(service.needs_update("p1"))
    assert asyncio.run(service.scan("p1")).first_scan


def test_default_wiring_writes_catalogs_and_ignores_them_on_rescan() -> None:
    drive = FakeDrive()
    drive.put("Document", "d1")
    drive.put("Business", "plan")
    service = create_scan_service(drive, prefix="AI_")

    first = asyncio.run(service.run("p1"))
    second = asyncio.run(service.run("p1"))

    assert first.succeeded
    assert drive.created == [
        ("Document", "AI_Document_Catalog.md"),
        ("Business", "AI_Business_Catalog.md"),
    ]
    assert second.scan.changes.is_empty


def test_build_registry_covers_every_category() -> None:
    registry = build_registry(FakeDrive(), prefix="AI_")

    assert len(registry) == 8
    assert isinstance(SnapshotBuilder(FakeDrive()), SnapshotBuilder)
