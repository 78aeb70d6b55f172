"""Where: src/projscan/shared/errors.py
What: Exception hierarchy shared by the snapshot, processing, and platform layers.
Why: Let callers distinguish fatal storage and re-entrancy errors from per-category failures.
"""

from __future__ import annotations


class ProjScanError(Exception):
    """Base class for all projscan errors."""


class StorageError(ProjScanError):
    """Raised when the remote storage gateway cannot satisfy a request."""


class StorageUnavailable(StorageError):
    """Raised when the remote storage service cannot be reached or enumerated."""


class NotFound(StorageError):
    """Raised when a project, folder, or file does not exist in remote storage."""


class AlreadyProcessing(ProjScanError):
    """Raised when a dispatch is requested while one is in flight for the same project."""

    def __init__(self, project_id: str) -> None:
        super().__init__(f"A dispatch is already in progress for project {project_id}")
        self.project_id: str = project_id


class DurableStoreError(ProjScanError):
    """Raised by the durable key-value layer when a read or write fails."""


class HandlerFailure(ProjScanError):
    """Describe a category handler that raised while processing."""

    def __init__(self, category: str, cause: BaseException) -> None:
        message = str(cause) if str(cause) else type(cause).__name__
        super().__init__(message)
        self.category: str = category
        self.cause: BaseException = cause


class NoHandlerRegistered(ProjScanError):
    """Describe a changed category that has no registered handler."""

    MESSAGE: str = "no handler"

    def __init__(self, category: str) -> None:
        super().__init__(self.MESSAGE)
        self.category: str = category


__all__ = [
    "ProjScanError",
    "StorageError",
    "StorageUnavailable",
    "NotFound",
    "AlreadyProcessing",
    "DurableStoreError",
    "HandlerFailure",
    "NoHandlerRegistered",
]
