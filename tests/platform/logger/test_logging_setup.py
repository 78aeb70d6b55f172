"""Tests for the package logger bootstrap."""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from pathlib import Path

import pytest

from projscan.config.config import Config
from projscan.platform.logging import (
    ScanEventRichHandler,
    console_level_for,
    log_event,
    logger,
    resolve_log_file,
    setup_logger,
)
from projscan.shared.events import ScanEvent


@pytest.fixture
def restore_handlers() -> Iterator[None]:
    original = list(logger.handlers)
    try:
        yield None
    finally:
        for handler in list(logger.handlers):
            if handler not in original:
                handler.close()
        logger.handlers[:] = original


@pytest.mark.parametrize(
    ("quiet", "verbose", "level"),
    [
        (True, False, logging.ERROR),
        (False, True, logging.DEBUG),
        (False, False, logging.INFO),
    ],
)
def test_console_level_for(quiet: bool, verbose: bool, level: int) -> None:
    assert console_level_for(quiet=quiet, verbose=verbose) == level


def test_resolve_log_file_prefers_configuration(tmp_path: Path) -> None:
    configured = tmp_path / "custom" / "projscan.log"

    assert resolve_log_file(Config(log_file=configured)) == configured.resolve()
    assert resolve_log_file(Config()).name == "projscan.log"


def test_setup_logger_writes_scan_events_to_configured_file(tmp_path: Path, restore_handlers: None) -> None:
    _ = restore_handlers
    log_file = tmp_path / "logs" / "run.log"

    configured = setup_logger(Config(log_file=log_file), console_level=logging.ERROR)
    log_event(logging.INFO, ScanEvent.SCAN_START, "Scanning project %s", "p1", project_id="p1")
    for handler in configured.handlers:
        handler.flush()

    assert configured is logger
    console = [handler for handler in logger.handlers if isinstance(handler, ScanEventRichHandler)]
    assert len(console) == 1 and console[0].level == logging.ERROR
    line = log_file.read_text(encoding="utf-8").strip()
    assert line.endswith("Scanning project p1 [scan.start] project_id=p1")


def test_setup_logger_without_file_skips_rotating_handler(tmp_path: Path, restore_handlers: None) -> None:
    _ = restore_handlers

    _ = setup_logger(Config(log_file=tmp_path / "unused.log"), log_to_file=False)

    assert not any(isinstance(handler, logging.handlers.RotatingFileHandler) for handler in logger.handlers)
    assert not (tmp_path / "unused.log").exists()
