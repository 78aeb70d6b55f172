"""Tests for the ``ScanEventRichHandler`` structured extras rendering."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from rich.console import Console
from rich.text import Text

from projscan.platform.logging import ScanEventRichHandler


def _make_handler() -> ScanEventRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return ScanEventRichHandler(console=console)


def _build_record(**extras: Any) -> logging.LogRecord:
    record = logging.LogRecord(
        name="projscan",
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_render_message_appends_event_and_context() -> None:
    handler = _make_handler()
    record = _build_record(scan_event="dispatch.category.error", project_id="p1", category="Paper")

    rendered = handler.render_message(record, "Handler for Paper failed")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert plain.startswith("Handler for Paper failed")
    assert "[dispatch.category.error]" in plain
    assert "project_id=p1" in plain
    assert "category=Paper" in plain
    assert "error_count" not in plain


def test_render_message_without_event_is_unchanged() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(project_id="p1"), "plain message")

    assert isinstance(rendered, Text)
    assert rendered.plain == "plain message"


def test_handler_defaults_hide_source_path() -> None:
    handler = _make_handler()

    assert handler._log_render.show_path is False  # pyright: ignore[reportPrivateUsage]
