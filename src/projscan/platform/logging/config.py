"""Where: src/projscan/platform/logging/config.py
What: Own the "projscan" logger and attach console and rotating file handlers on demand.
Why: Keep imports side-effect free; the CLI picks verbosity and config.toml picks the log file.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING, Final

from rich.console import Console

from projscan.config.paths import default_log_file

from .handlers import ScanEventFormatter, ScanEventRichHandler

if TYPE_CHECKING:
    from projscan.config.config import Config

LOGGER_NAME: Final[str] = "projscan"
FILE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES: Final[int] = 10 * 1024 * 1024
LOG_BACKUPS: Final[int] = 5

logger: Final[logging.Logger] = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.DEBUG)
# Silent until setup_logger runs; records still propagate to the root logger.
logger.addHandler(logging.NullHandler())


def console_level_for(*, quiet: bool = False, verbose: bool = False) -> int:
    """Map the CLI verbosity flags onto a console log level."""

    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.INFO


def resolve_log_file(configuration: Config | None = None) -> Path:
    """Return the configured log file, or the default under ``logs/``."""

    configured = configuration.log_file if configuration is not None else None
    return Path(configured or default_log_file()).expanduser().resolve()


def setup_logger(
    configuration: Config | None = None,
    *,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_to_file: bool = True,
) -> logging.Logger:
    """Replace the handlers of the ``projscan`` logger.

    Args:
        configuration: Source of ``log_file``; loaded with ``Config.load()`` when omitted.
        console_level: Threshold for the rich console handler.
        file_level: Threshold for the rotating file handler.
        log_to_file: Attach the rotating file handler.

    Returns:
        logging.Logger: The configured package logger.
    """
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = ScanEventRichHandler(console=Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_to_file:
        if configuration is None:
            # Deferred: projscan.config.config logs through this module.
            from projscan.config.config import Config

            configuration = Config.load()
        log_file = resolve_log_file(configuration)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(ScanEventFormatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["LOGGER_NAME", "console_level_for", "logger", "resolve_log_file", "setup_logger"]
