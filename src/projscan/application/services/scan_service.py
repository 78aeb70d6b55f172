"""Application service for scanning projects and dispatching category handlers.

This layer wires the snapshot builder, diff engine, history store and
dispatcher together so that UIs only deal with one object and typed results.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import final

from projscan.features.processing import (
    CancellationToken,
    CatalogHandler,
    CategoryHandlerRegistry,
    ProcessingDispatcher,
    ProcessingReport,
    ProcessingSuccess,
)
from projscan.features.snapshot import (
    CATEGORY_ORDER,
    CategorySnapshot,
    ChangeSet,
    KeyValueStorePort,
    ProjectSnapshot,
    RemoteStorageGateway,
    ScanHistoryStore,
    SnapshotBuilder,
    diff_snapshots,
)
from projscan.platform.logging import logger
from projscan.shared.errors import AlreadyProcessing, StorageError
from projscan.shared.progress import ProgressEvent, ProgressObserver, ProgressStage, emit


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of one scan.

    Attributes:
        snapshot: Snapshot taken by this scan.
        previous: Snapshot the diff was computed against, ``None`` on a first scan.
        changes: Differences between ``previous`` and ``snapshot``.
        saved: Whether ``snapshot`` replaced the stored history.
    """

    snapshot: ProjectSnapshot
    previous: ProjectSnapshot | None
    changes: ChangeSet
    saved: bool = False

    @property
    def first_scan(self) -> bool:
        return self.previous is None


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of a scan followed by a dispatch."""

    scan: ScanResult
    report: ProcessingReport
    saved_snapshot: ProjectSnapshot

    @property
    def succeeded(self) -> bool:
        return not self.report.has_failures and not self.report.cancelled


@final
class ProjectScanService:
    """Scan a project, diff it against history and hand changes to handlers.

    Only one ``run`` per project may be active; different projects are
    independent.
    """

    def __init__(
        self,
        gateway: RemoteStorageGateway,
        history: ScanHistoryStore,
        registry: CategoryHandlerRegistry,
        *,
        dispatcher: ProcessingDispatcher | None = None,
        builder: SnapshotBuilder | None = None,
    ) -> None:
        self._gateway: RemoteStorageGateway = gateway
        self._history: ScanHistoryStore = history
        self._dispatcher: ProcessingDispatcher = dispatcher or ProcessingDispatcher(registry)
        self._builder: SnapshotBuilder = builder or SnapshotBuilder(gateway)
        self._active: set[str] = set()

    @property
    def history(self) -> ScanHistoryStore:
        return self._history

    @property
    def dispatcher(self) -> ProcessingDispatcher:
        return self._dispatcher

    async def scan(
        self,
        project_id: str,
        on_progress: ProgressObserver | None = None,
        *,
        record: bool = False,
    ) -> ScanResult:
        """Snapshot ``project_id`` and diff it against the stored history.

        A plain scan is a preview: history only advances through ``run``, so
        the changes reported here are the ones the next ``run`` processes.

        Args:
            project_id: Project to scan.
            on_progress: Optional observer for progress events.
            record: Accept the new snapshot as processed without running
                handlers.

        Returns:
            The snapshot, the previous snapshot and the resulting change set.

        Raises:
            StorageUnavailable: The project could not be enumerated.
            NotFound: The project does not exist.
        """
        result = await self._scan(project_id, on_progress, record=record)
        emit(
            on_progress,
            ProgressEvent(
                stage=ProgressStage.COMPLETED,
                percent_complete=100,
                message=f"{result.changes.total_changes} changes",
            ),
        )
        return result

    async def run(
        self,
        project_id: str,
        on_progress: ProgressObserver | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> PipelineResult:
        """Scan ``project_id``, dispatch its changed categories, then save history.

        Categories whose handler failed, or that were never attempted because
        of cancellation, keep their previous state in the saved snapshot so
        that the next run reports them as changed again.

        Raises:
            AlreadyProcessing: A run for ``project_id`` is still active.
            StorageUnavailable: The project could not be enumerated.
        """
        if project_id in self._active or self._dispatcher.is_processing(project_id):
            raise AlreadyProcessing(project_id)

        self._active.add(project_id)
        try:
            scan = await self._scan(project_id, on_progress, record=False)
            report = await self._dispatcher.dispatch(
                scan.changes,
                scan.snapshot,
                on_progress=on_progress,
                cancel_token=cancel_token,
            )
            saved = merge_processed(scan.snapshot, scan.previous, scan.changes, report)
            self._history.save(saved)
            return PipelineResult(scan=scan, report=report, saved_snapshot=saved)
        finally:
            self._active.discard(project_id)

    async def needs_update(self, project_id: str) -> bool:
        """Return True when ``project_id`` changed since its stored snapshot.

        A project without history, or whose modification time cannot be
        read, always needs an update.
        """

        previous = self._history.get(project_id)
        if previous is None:
            return True
        try:
            modified_at = await self._gateway.project_modified_at(project_id)
        except StorageError as exc:
            logger.warning("Unable to read modification time of %s: %s", project_id, exc)
            return True
        return modified_at > previous.taken_at

    def clear_history(self, project_id: str | None = None) -> None:
        self._history.clear(project_id)

    async def _scan(
        self,
        project_id: str,
        on_progress: ProgressObserver | None,
        *,
        record: bool,
    ) -> ScanResult:
        emit(on_progress, ProgressEvent(stage=ProgressStage.INITIALIZING, percent_complete=0))
        previous = self._history.get(project_id)
        emit(
            on_progress,
            ProgressEvent(stage=ProgressStage.SCANNING, percent_complete=10, message=project_id),
        )
        try:
            snapshot = await self._builder.build(project_id)
        except StorageError as exc:
            emit(
                on_progress,
                ProgressEvent(stage=ProgressStage.ERROR, percent_complete=0, message=str(exc)),
            )
            raise

        changes = diff_snapshots(snapshot, previous)
        if record:
            self._history.save(snapshot)
        return ScanResult(snapshot=snapshot, previous=previous, changes=changes, saved=record)


def merge_processed(
    current: ProjectSnapshot,
    previous: ProjectSnapshot | None,
    changes: ChangeSet,
    report: ProcessingReport,
) -> ProjectSnapshot:
    """Build the snapshot to persist after a dispatch.

    Unchanged and successfully processed categories take their current state.
    Other changed categories fall back to their previous state, or are left
    out when they had none.
    """

    categories: dict[str, CategorySnapshot] = {}
    for category_id, category in current.categories.items():
        if category_id not in changes.changed_categories:
            categories[category_id] = category
            continue
        if isinstance(report.outcomes.get(category_id), ProcessingSuccess):
            categories[category_id] = category
            continue
        earlier = previous.categories.get(category_id) if previous is not None else None
        if earlier is not None:
            categories[category_id] = earlier
        logger.debug("Keeping %s unprocessed in %s history", category_id, current.project_id)
    return ProjectSnapshot(project_id=current.project_id, taken_at=current.taken_at, categories=categories)


def build_registry(
    gateway: RemoteStorageGateway,
    *,
    prefix: str,
    categories: Iterable[str] = CATEGORY_ORDER,
) -> CategoryHandlerRegistry:
    """Register a ``CatalogHandler`` for every category in ``categories``."""

    registry = CategoryHandlerRegistry()
    handler = CatalogHandler(gateway, prefix=prefix)
    for category in categories:
        registry.register(category, handler)
    return registry


def create_scan_service(
    gateway: RemoteStorageGateway,
    *,
    durable: KeyValueStorePort | None = None,
    prefix: str,
    registry_factory: Callable[[RemoteStorageGateway], CategoryHandlerRegistry] | None = None,
) -> ProjectScanService:
    """Assemble a service with the default builder, history store and handlers.

    Args:
        gateway: Storage gateway for the project.
        durable: Optional durable key-value layer for scan history.
        prefix: Generated-artifact prefix excluded from snapshots and used by handlers.
        registry_factory: Override for the handler registry.
    """
    registry = (
        registry_factory(gateway) if registry_factory is not None else build_registry(gateway, prefix=prefix)
    )
    logger.debug(
        "Creating scan service with %d handlers (%s)",
        len(registry),
        ", ".join(registry.categories()),
    )
    return ProjectScanService(
        gateway,
        ScanHistoryStore(durable),
        registry,
        builder=SnapshotBuilder(gateway, ignored_prefix=prefix),
    )


__all__ = [
    "PipelineResult",
    "ProjectScanService",
    "ScanResult",
    "build_registry",
    "create_scan_service",
    "merge_processed",
]
