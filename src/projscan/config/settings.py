"""Where: src/projscan/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Validation is limited to simple boundary checks.
"""

from __future__ import annotations

from projscan.config.config import (
    DRIVE_API_BASE_DEFAULT,
    DRIVE_MIN_INTERVAL_SECONDS_DEFAULT,
    DRIVE_TIMEOUT_SECONDS_DEFAULT,
    GENERATED_FILE_PREFIX_DEFAULT,
    config as app_config,
)

# Handler output --------------------------------------------------------------

# Generated artifacts carry this prefix and are excluded from snapshots so a
# handler writing into its own folder does not retrigger itself.
GENERATED_FILE_PREFIX: str = app_config.generated_file_prefix.strip() or GENERATED_FILE_PREFIX_DEFAULT


# Google Drive ----------------------------------------------------------------

DRIVE_API_BASE: str = (app_config.drive_api_base or DRIVE_API_BASE_DEFAULT).rstrip("/")

_timeout = getattr(app_config, "drive_timeout_seconds", DRIVE_TIMEOUT_SECONDS_DEFAULT)
DRIVE_TIMEOUT_SECONDS: float = (
    float(_timeout) if isinstance(_timeout, (int, float)) and _timeout > 0 else DRIVE_TIMEOUT_SECONDS_DEFAULT
)

_interval = getattr(app_config, "drive_min_interval_seconds", DRIVE_MIN_INTERVAL_SECONDS_DEFAULT)
DRIVE_MIN_INTERVAL_SECONDS: float = (
    float(_interval) if isinstance(_interval, (int, float)) and _interval >= 0 else DRIVE_MIN_INTERVAL_SECONDS_DEFAULT
)

# Environment variable consulted for a Drive access token.
DRIVE_TOKEN_ENV: str = "PROJSCAN_DRIVE_TOKEN"


__all__ = [
    "GENERATED_FILE_PREFIX",
    "DRIVE_API_BASE",
    "DRIVE_TIMEOUT_SECONDS",
    "DRIVE_MIN_INTERVAL_SECONDS",
    "DRIVE_TOKEN_ENV",
]
