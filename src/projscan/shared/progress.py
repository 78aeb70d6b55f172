"""
Summary: Typed progress events reported to pipeline observers.
Why: Replace free-form progress dictionaries with a closed set of stages.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class ProgressStage(StrEnum):
    """Stages a scan or dispatch passes through."""

    INITIALIZING = "initializing"
    SCANNING = "scanning"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """Single progress notification delivered to an observer."""

    stage: ProgressStage
    percent_complete: int
    current_category: str | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.percent_complete <= 100:
            raise ValueError(f"percent_complete must be within 0-100, got {self.percent_complete}")


ProgressObserver = Callable[[ProgressEvent], None]

_logger = logging.getLogger("projscan")


def emit(observer: ProgressObserver | None, event: ProgressEvent) -> None:
    """Deliver ``event`` when an observer is attached.

    Observer errors are logged and swallowed so reporting never aborts the
    operation being observed.
    """

    if observer is None:
        return
    try:
        observer(event)
    except Exception as exc:
        _logger.warning("Progress observer raised during %s: %s", event.stage, exc)


__all__ = ["ProgressEvent", "ProgressObserver", "ProgressStage", "emit"]
