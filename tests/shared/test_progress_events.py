"""Tests for progress events and observer delivery."""

import pytest

from projscan.shared.progress import ProgressEvent, ProgressStage, emit


@pytest.mark.parametrize("percent", [-1, 101])
def test_percent_outside_range_is_rejected(percent: int) -> None:
    with pytest.raises(ValueError):
        _ = ProgressEvent(stage=ProgressStage.SCANNING, percent_complete=percent)


def test_emit_delivers_and_tolerates_missing_observer() -> None:
    received: list[ProgressEvent] = []
    event = ProgressEvent(stage=ProgressStage.COMPLETED, percent_complete=100, message="done")

    emit(received.append, event)
    emit(None, event)

    assert received == [event]


def test_emit_swallows_observer_errors() -> None:
    def _broken(event: ProgressEvent) -> None:
        raise RuntimeError("render failed")

    emit(_broken, ProgressEvent(stage=ProgressStage.ERROR, percent_complete=0))
