"""Where: src/projscan/platform/logging/handlers.py
What: Console handler and file formatter that render structured scan event extras.
Why: Keep pipeline milestones readable in both sinks without bespoke formatting at call sites.
"""

from __future__ import annotations

import logging
from typing import Final

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text

_CONTEXT_KEYS: Final[tuple[str, ...]] = (
    "project_id",
    "category",
    "total_changes",
    "success_count",
    "error_count",
)


def scan_context(record: logging.LogRecord) -> tuple[str | None, list[tuple[str, object]]]:
    """Return the record's ``scan_event`` and the context extras worth showing."""

    event = getattr(record, "scan_event", None)
    if not event:
        return None, []
    items = [(key, getattr(record, key)) for key in _CONTEXT_KEYS if getattr(record, key, None) is not None]
    return str(event), items


class ScanEventRichHandler(RichHandler):
    """``RichHandler`` that appends ``scan_event`` context to the message."""

    def __init__(self, *args: object, **kwargs: object) -> None:
        kwargs.setdefault("show_path", False)
        kwargs.setdefault("rich_tracebacks", True)
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]

    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        rendered = super().render_message(record, message)
        event, items = scan_context(record)
        if event is None or not isinstance(rendered, Text):
            return rendered

        text = rendered.copy()
        _ = text.append(f"  [{event}]", style="dim cyan")
        for key, value in items:
            _ = text.append(f" {key}={value}", style="dim")
        return text


class ScanEventFormatter(logging.Formatter):
    """Plain-text formatter for the log file; appends the same context as the console."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        event, items = scan_context(record)
        if event is None:
            return line
        context = "".join(f" {key}={value}" for key, value in items)
        return f"{line} [{event}]{context}"


__all__ = ["ScanEventFormatter", "ScanEventRichHandler", "scan_context"]
