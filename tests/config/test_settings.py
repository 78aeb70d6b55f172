"""Tests for settings module behavior."""

from __future__ import annotations

import importlib


def test_settings_use_config_defaults(config_runtime_env: None) -> None:
    """Default configuration yields the documented constants."""
    _ = config_runtime_env

    import projscan.config.settings as settings

    reloaded = importlib.reload(settings)

    assert reloaded.GENERATED_FILE_PREFIX == "AI_"
    assert reloaded.DRIVE_API_BASE == "https://www.googleapis.com"
    assert reloaded.DRIVE_TIMEOUT_SECONDS == 15.0
    assert reloaded.DRIVE_TOKEN_ENV == "PROJSCAN_DRIVE_TOKEN"


def test_invalid_values_fall_back_to_defaults(config_runtime_env: None) -> None:
    """Out-of-range values are replaced by defaults."""
    _ = config_runtime_env

    from projscan.config.config import config as app_config

    app_config.generated_file_prefix = "   "
    app_config.drive_api_base = "https://drive.test/"
    app_config.drive_timeout_seconds = -5
    app_config.drive_min_interval_seconds = 0.25

    import projscan.config.settings as settings

    try:
        reloaded = importlib.reload(settings)

        assert reloaded.GENERATED_FILE_PREFIX == "AI_"
        assert reloaded.DRIVE_API_BASE == "https://drive.test"
        assert reloaded.DRIVE_TIMEOUT_SECONDS == 15.0
        assert reloaded.DRIVE_MIN_INTERVAL_SECONDS == 0.25
    finally:
        app_config.generated_file_prefix = "AI_"
        app_config.drive_api_base = "https://www.googleapis.com"
        app_config.drive_timeout_seconds = 15.0
        app_config.drive_min_interval_seconds = 0.1
        _ = importlib.reload(settings)
