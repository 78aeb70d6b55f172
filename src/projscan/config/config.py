"""Configuration management for projscan."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from projscan.config.file_ops import write_text_file
from projscan.config.paths import default_config_path
from projscan.platform.logging import logger

GENERATED_FILE_PREFIX_DEFAULT = "AI_"
DRIVE_API_BASE_DEFAULT = "https://www.googleapis.com"
DRIVE_TIMEOUT_SECONDS_DEFAULT = 15.0
DRIVE_MIN_INTERVAL_SECONDS_DEFAULT = 0.1


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # Scan history database path
    db_path: Path | None = _path_field()

    # Name prefix of artifacts written by category handlers
    generated_file_prefix: str = GENERATED_FILE_PREFIX_DEFAULT

    # Google Drive REST settings
    drive_api_base: str = DRIVE_API_BASE_DEFAULT
    drive_timeout_seconds: float = DRIVE_TIMEOUT_SECONDS_DEFAULT
    drive_min_interval_seconds: float = DRIVE_MIN_INTERVAL_SECONDS_DEFAULT

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)

    def save(self) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        try:
            target = default_config_path()
            content = self._render_toml(config_dict)
            write_text_file(target, content)
            logger.info("Configuration saved to %s", target)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# projscan Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/projscan.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Scan history database (optional, defaults to <repo>/.data/projscan.db)")
        lines.append('# Example: db_path = "/path/to/projscan.db"')
        if config["db_path"] is not None:
            lines.append(f"db_path = {self._format_toml_value(config['db_path'])}")
        lines.append("")

        lines.append("# Files starting with this prefix are handler output and are not scanned")
        lines.append(
            f"generated_file_prefix = {self._format_toml_value(config['generated_file_prefix'])}"
        )
        lines.append("")

        lines.append("# Google Drive REST settings")
        lines.append(f"drive_api_base = {self._format_toml_value(config['drive_api_base'])}")
        lines.append(
            f"drive_timeout_seconds = {self._format_toml_value(config['drive_timeout_seconds'])}"
        )
        lines.append(
            "drive_min_interval_seconds = "
            f"{self._format_toml_value(config['drive_min_interval_seconds'])}"
        )
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file, creating a default one when absent.

        Returns:
            Config: Loaded configuration object.
        """
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                config_dict = {key: value for key, value in config_dict.items() if key in known}

                for key in ("log_file", "db_path"):
                    value = config_dict.get(key)
                    if isinstance(value, str) and not value.strip():
                        config_dict[key] = None

                logger.debug("Configuration loaded from %s", config_file)
                instance = cls(**config_dict)
                cls._instance = instance
                cls._loaded_from = config_file
                return instance

            config = cls()
            config.save()
            logger.info("Created default configuration at %s", config_file)
            cls._instance = config
            cls._loaded_from = config_file
            return config

        except Exception as e:
            logger.error("Failed to load configuration: %s", e)
            raise


config = Config.load()
