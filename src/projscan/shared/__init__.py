# Where: projscan.shared.__init__
# What: Provide a concise import surface for cross-cutting errors and progress types.
# Why: Encourage consistent reuse of shared types across features.

"""Shared cross-cutting types exposed at the package level."""

from .errors import (
    AlreadyProcessing,
    DurableStoreError,
    HandlerFailure,
    NoHandlerRegistered,
    NotFound,
    ProjScanError,
    StorageError,
    StorageUnavailable,
)
from .events import ScanEvent
from .progress import ProgressEvent, ProgressObserver, ProgressStage, emit

__all__ = [
    "AlreadyProcessing",
    "DurableStoreError",
    "HandlerFailure",
    "NoHandlerRegistered",
    "NotFound",
    "ProjScanError",
    "StorageError",
    "StorageUnavailable",
    "ScanEvent",
    "ProgressEvent",
    "ProgressObserver",
    "ProgressStage",
    "emit",
]
