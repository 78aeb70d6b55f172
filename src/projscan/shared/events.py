"""src/projscan/shared/events.py
What: Structured event identifiers attached to pipeline log records.
Why: Keep log extras greppable and consistent across layers.
"""

from __future__ import annotations

from enum import StrEnum


class ScanEvent(StrEnum):
    """Structured event identifiers for scan, diff, and dispatch logs."""

    SCAN_START = "scan.start"
    SCAN_COMPLETE = "scan.complete"
    SCAN_ERROR = "scan.error"
    SCAN_FOLDER_SKIPPED = "scan.folder.skipped"
    SCAN_FOLDER_MISSING = "scan.folder.missing"
    DIFF_COMPLETE = "diff.complete"
    HISTORY_HIT_MEMORY = "history.hit.memory"
    HISTORY_HIT_DURABLE = "history.hit.durable"
    HISTORY_MISS = "history.miss"
    HISTORY_SAVE = "history.save"
    HISTORY_CLEAR = "history.clear"
    HISTORY_DURABLE_ERROR = "history.durable.error"
    DISPATCH_START = "dispatch.start"
    DISPATCH_CATEGORY_SUCCESS = "dispatch.category.success"
    DISPATCH_CATEGORY_ERROR = "dispatch.category.error"
    DISPATCH_NO_HANDLER = "dispatch.category.no_handler"
    DISPATCH_CANCELLED = "dispatch.cancelled"
    DISPATCH_COMPLETE = "dispatch.complete"
    DISPATCH_REJECTED = "dispatch.rejected"


__all__ = ["ScanEvent"]
