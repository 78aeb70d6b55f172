"""src/projscan/features/processing/usecases/dispatcher.py
What: Run the registered handler for every changed category of a project.
Why: Isolate per-category failures while reporting progress in a fixed order.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from projscan.features.processing.domain.models import (
    CancellationToken,
    ProcessingFailure,
    ProcessingOutcome,
    ProcessingReport,
    ProcessingSuccess,
)
from projscan.features.snapshot.domain.models import ChangeSet, ProjectSnapshot
from projscan.platform.logging import log_event, logger
from projscan.shared.errors import AlreadyProcessing, HandlerFailure, NoHandlerRegistered
from projscan.shared.events import ScanEvent
from projscan.shared.progress import ProgressEvent, ProgressObserver, ProgressStage, emit

from .aggregator import aggregate_outcomes
from .registry import CategoryHandlerRegistry


@dataclass(slots=True)
class DispatchLogContext:
    """Mutable bookkeeping for one dispatch run."""

    dispatch_id: str
    project_id: str
    total_categories: int
    start_time: float = field(default_factory=time.perf_counter)
    succeeded: int = 0
    failed: int = 0

    def record(self, outcome: ProcessingOutcome) -> None:
        if isinstance(outcome, ProcessingFailure):
            self.failed += 1
        else:
            self.succeeded += 1

    def duration_seconds(self) -> float:
        return time.perf_counter() - self.start_time

    def summary_extra(self) -> dict[str, Any]:
        """Return a dictionary suitable for structured logging extras."""

        return {
            "dispatch_id": self.dispatch_id,
            "project_id": self.project_id,
            "total_categories": self.total_categories,
            "success_count": self.succeeded,
            "error_count": self.failed,
            "duration_seconds": round(self.duration_seconds(), 4),
        }


class ProcessingDispatcher:
    """Invoke category handlers for a change set, one category at a time.

    At most one dispatch per project may be in flight; a second call for the
    same project fails with ``AlreadyProcessing`` before doing anything.
    Different projects may be dispatched concurrently.
    """

    def __init__(self, registry: CategoryHandlerRegistry) -> None:
        self._registry: CategoryHandlerRegistry = registry
        self._in_flight: set[str] = set()

    @property
    def registry(self) -> CategoryHandlerRegistry:
        return self._registry

    def is_processing(self, project_id: str) -> bool:
        return project_id in self._in_flight

    async def dispatch(
        self,
        change_set: ChangeSet,
        snapshot: ProjectSnapshot,
        on_progress: ProgressObserver | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> ProcessingReport:
        """Run handlers for the changed categories present in ``snapshot``.

        Raises:
            AlreadyProcessing: A dispatch for the same project is still running.
        """

        project_id = snapshot.project_id
        if project_id in self._in_flight:
            log_event(
                logging.WARNING,
                ScanEvent.DISPATCH_REJECTED,
                "Dispatch already in progress for %s",
                project_id,
                project_id=project_id,
            )
            raise AlreadyProcessing(project_id)

        self._in_flight.add(project_id)
        try:
            return await self._run(change_set, snapshot, on_progress, cancel_token)
        finally:
            self._in_flight.discard(project_id)

    async def _run(
        self,
        change_set: ChangeSet,
        snapshot: ProjectSnapshot,
        on_progress: ProgressObserver | None,
        cancel_token: CancellationToken | None,
    ) -> ProcessingReport:
        categories: list[str] = []
        for category in change_set.ordered_changed_categories():
            if category in snapshot.categories:
                categories.append(category)
            else:
                logger.debug("Skipping %s: folder no longer exists in %s", category, snapshot.project_id)

        stats = DispatchLogContext(
            dispatch_id=uuid.uuid4().hex[:12],
            project_id=snapshot.project_id,
            total_categories=len(categories),
        )
        log_event(
            logging.INFO,
            ScanEvent.DISPATCH_START,
            "Dispatch started [id=%s, categories=%d]",
            stats.dispatch_id,
            len(categories),
            **stats.summary_extra(),
        )

        outcomes: dict[str, ProcessingOutcome] = {}
        cancelled = False
        total = len(categories)
        for index, category in enumerate(categories, start=1):
            if cancel_token is not None and cancel_token.cancelled:
                cancelled = True
                log_event(
                    logging.WARNING,
                    ScanEvent.DISPATCH_CANCELLED,
                    "Dispatch cancelled before %s [id=%s, remaining=%d]",
                    category,
                    stats.dispatch_id,
                    total - index + 1,
                    project_id=snapshot.project_id,
                    category=category,
                )
                break

            outcome = await self._process_category(category, snapshot, stats.dispatch_id)
            outcomes[category] = outcome
            stats.record(outcome)
            emit(
                on_progress,
                ProgressEvent(
                    stage=ProgressStage.PROCESSING,
                    percent_complete=index * 100 // total,
                    current_category=category,
                ),
            )

        report = aggregate_outcomes(outcomes, cancelled=cancelled)
        emit(
            on_progress,
            ProgressEvent(
                stage=ProgressStage.COMPLETED,
                percent_complete=100,
                message="cancelled" if cancelled else None,
            ),
        )
        log_event(
            logging.INFO,
            ScanEvent.DISPATCH_COMPLETE,
            "Dispatch finished [id=%s, success=%d, errors=%d, cancelled=%s]",
            stats.dispatch_id,
            report.success_count,
            report.error_count,
            cancelled,
            **stats.summary_extra(),
        )
        return report

    async def _process_category(
        self,
        category: str,
        snapshot: ProjectSnapshot,
        dispatch_id: str,
    ) -> ProcessingOutcome:
        handler = self._registry.get(category)
        if handler is None:
            missing = NoHandlerRegistered(category)
            log_event(
                logging.WARNING,
                ScanEvent.DISPATCH_NO_HANDLER,
                "No handler registered for %s [id=%s]",
                category,
                dispatch_id,
                project_id=snapshot.project_id,
                category=category,
            )
            return ProcessingFailure(category, str(missing), type(missing).__name__)

        try:
            payload = await handler(snapshot.categories[category], snapshot)
        except Exception as exc:
            failure = HandlerFailure(category, exc)
            log_event(
                logging.ERROR,
                ScanEvent.DISPATCH_CATEGORY_ERROR,
                "Handler for %s failed [id=%s, error=%s]",
                category,
                dispatch_id,
                failure,
                project_id=snapshot.project_id,
                category=category,
            )
            logger.debug("Handler traceback for %s", category, exc_info=exc)
            return ProcessingFailure(category, str(failure), type(exc).__name__)

        log_event(
            logging.INFO,
            ScanEvent.DISPATCH_CATEGORY_SUCCESS,
            "Processed %s [id=%s]",
            category,
            dispatch_id,
            project_id=snapshot.project_id,
            category=category,
        )
        return ProcessingSuccess(category, payload)


__all__ = ["DispatchLogContext", "ProcessingDispatcher"]
