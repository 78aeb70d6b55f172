"""Tests for structured scan event logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from projscan.platform.logging import log_event
from projscan.shared.events import ScanEvent


def test_log_event_attaches_extras(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("projscan")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="projscan"):
            log_event(
                logging.INFO,
                ScanEvent.SCAN_COMPLETE,
                "Scanned %d categories",
                3,
                project_id=Path("/tmp/demo"),
                total_changes=4,
            )
    finally:
        logger.removeHandler(caplog.handler)

    record = next(r for r in caplog.records if r.getMessage() == "Scanned 3 categories")
    assert getattr(record, "scan_event") == "scan.complete"
    assert getattr(record, "project_id") == str(Path("/tmp/demo"))
    assert getattr(record, "total_changes") == 4
    assert record.funcName == "test_log_event_attaches_extras"
