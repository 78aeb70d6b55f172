"""Where: src/projscan/config/paths.py
What: Locate the config file, the scan history database, and the log file.
Why: Keep every on-disk location overridable from one place.

Layout (portable by default, relative to the repository root):
- ``config/config.toml``, or ``PROJSCAN_CONFIG``
- ``.data/projscan.db``, data dir overridable via ``PROJSCAN_DATA_DIR``
- ``logs/projscan.log``, log dir overridable via ``PROJSCAN_LOG_DIR``
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final

ENV_CONFIG_FILE: Final[str] = "PROJSCAN_CONFIG"
ENV_DATA_DIR: Final[str] = "PROJSCAN_DATA_DIR"
ENV_LOG_DIR: Final[str] = "PROJSCAN_LOG_DIR"

_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")
DB_FILE_NAME: Final[str] = "projscan.db"
LOG_FILE_NAME: Final[str] = "projscan.log"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Return ``explicit_path``, else a non-blank ``env_var``, else the default.

    All results are expanded and resolved.
    """

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    if env_var:
        candidate = (env if env is not None else os.environ).get(env_var, "").strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    return default_factory().expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    here = (start or Path(__file__).resolve()).parent
    for candidate in (here, *here.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def _from_env(env_var: str, default_factory: Callable[[], Path]) -> Path:
    return resolve_overridable_path(explicit_path=None, env=None, env_var=env_var, default_factory=default_factory)


def default_config_path() -> Path:
    return _from_env(ENV_CONFIG_FILE, lambda: _detect_repo_root() / "config" / "config.toml")


def default_data_dir() -> Path:
    """Directory holding the scan history database."""

    return _from_env(ENV_DATA_DIR, lambda: _detect_repo_root() / ".data")


def default_db_path() -> Path:
    return default_data_dir() / DB_FILE_NAME


def default_log_dir() -> Path:
    return _from_env(ENV_LOG_DIR, lambda: _detect_repo_root() / "logs")


def default_log_file() -> Path:
    return default_log_dir() / LOG_FILE_NAME


__all__ = [
    "DB_FILE_NAME",
    "ENV_CONFIG_FILE",
    "ENV_DATA_DIR",
    "ENV_LOG_DIR",
    "LOG_FILE_NAME",
    "default_config_path",
    "default_data_dir",
    "default_db_path",
    "default_log_dir",
    "default_log_file",
    "resolve_overridable_path",
]
