"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the package logger, setup helpers, and structured formatting.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .config import LOGGER_NAME, console_level_for, logger, resolve_log_file, setup_logger
from .handlers import ScanEventFormatter, ScanEventRichHandler
from .structured import log_event

__all__ = [
    "LOGGER_NAME",
    "ScanEventFormatter",
    "ScanEventRichHandler",
    "console_level_for",
    "log_event",
    "logger",
    "resolve_log_file",
    "setup_logger",
]
