"""Where: src/projscan/platform/logging/structured.py
What: Helper that logs a message tagged with a ``ScanEvent`` and context extras.
Why: Keep structured log extras uniform across the snapshot and processing layers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from projscan.shared.events import ScanEvent

from .config import logger


def log_event(level: int, event: ScanEvent, message: str, *message_args: object, **context: Any) -> None:
    """Log ``message`` with ``scan_event`` and ``context`` as record extras."""

    extra: dict[str, Any] = {"scan_event": event.value}
    for key, value in context.items():
        extra[key] = str(value) if isinstance(value, Path) else value
    logger.log(level, message, *message_args, extra=extra, stacklevel=2)


__all__ = ["log_event"]
