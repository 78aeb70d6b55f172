"""Tests for the shared exception hierarchy."""

from projscan.shared.errors import (
    AlreadyProcessing,
    HandlerFailure,
    NoHandlerRegistered,
    NotFound,
    ProjScanError,
    StorageError,
    StorageUnavailable,
)


def test_storage_errors_share_a_base() -> None:
    assert issubclass(StorageUnavailable, StorageError)
    assert issubclass(NotFound, StorageError)
    assert issubclass(StorageError, ProjScanError)


def test_already_processing_carries_project_id() -> None:
    error = AlreadyProcessing("p9")

    assert error.project_id == "p9"
    assert "p9" in str(error)


def test_handler_failure_message() -> None:
    assert str(HandlerFailure("Paper", ValueError("bad input"))) == "bad input"
    assert str(HandlerFailure("Paper", TimeoutError())) == "TimeoutError"
    assert str(NoHandlerRegistered("Paper")) == "no handler"
