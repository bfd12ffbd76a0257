"""
Configuration management for the polling monitor.

Handles environment variables and ``.env`` files, and provides default settings
with validation for the monitor, the observers it drives and logging.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from polling_monitor.filters.file_filters import FileFilter, ignore_patterns_filter
from polling_monitor.models.case import IOCase
from polling_monitor.models.exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Logging level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class MonitorConfig(BaseSettings):
    """
    Central configuration class for the polling monitor.

    Every option can be overridden with a ``POLLING_MONITOR_`` prefixed
    environment variable, e.g. ``POLLING_MONITOR_POLL_INTERVAL_SECONDS=2``.
    """

    model_config = SettingsConfigDict(
        env_prefix="POLLING_MONITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Polling Configuration ===
    poll_interval_seconds: float = Field(
        default=10.0, gt=0.0, le=3600.0, description="Delay between two poll passes of the monitor"
    )
    stop_timeout_seconds: float | None = Field(
        default=None, ge=0.0, description="How long stop() waits for the polling thread (one interval if None)"
    )

    # === Observer Configuration ===
    case_sensitivity: IOCase = Field(
        default=IOCase.SYSTEM, description="Case policy used to match file names between polls"
    )
    ignored_patterns: list[str] = Field(
        default=["*.tmp", "*.swp", ".DS_Store"], description="Wildcard patterns of paths to leave unobserved"
    )
    include_hidden: bool = Field(default=True, description="Observe dot-prefixed files and directories")

    # === Logging Configuration ===
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Path | None = Field(default=None, description="Log file path (stderr if None)")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log message format"
    )

    @field_validator('case_sensitivity', mode='before')
    @classmethod
    def validate_case_sensitivity(cls, v):
        """Accept case policy names regardless of case."""
        if isinstance(v, str) and not isinstance(v, IOCase):
            try:
                return IOCase.for_name(v)
            except ValueError as e:
                raise ConfigurationError(
                    str(e), config_key="case_sensitivity", expected_type="IOCase", actual_value=v
                ) from e
        return v

    @field_validator('ignored_patterns')
    @classmethod
    def validate_ignored_patterns(cls, v):
        """Strip whitespace and drop empty patterns."""
        return [pattern.strip() for pattern in v if pattern and pattern.strip()]

    @model_validator(mode='after')
    def validate_stop_timeout(self):
        """Ensure the stop timeout stays in proportion to the poll interval."""
        if self.stop_timeout_seconds is not None and self.stop_timeout_seconds > self.poll_interval_seconds * 100:
            raise ConfigurationError(
                "stop_timeout_seconds cannot exceed 100 poll intervals",
                config_key="stop_timeout_seconds",
                expected_type="float <= 100 * poll_interval_seconds",
                actual_value=self.stop_timeout_seconds,
            )
        return self

    def resolve_stop_timeout(self) -> float:
        """Get the effective time stop() waits for the polling thread."""
        if self.stop_timeout_seconds is None:
            return self.poll_interval_seconds
        return self.stop_timeout_seconds

    def build_file_filter(self) -> FileFilter | None:
        """Build the observer file filter described by this configuration."""
        return ignore_patterns_filter(self.ignored_patterns, self.case_sensitivity, self.include_hidden)

    def get_log_config(self) -> dict[str, Any]:
        """Get logging configuration dictionary for logging.config.dictConfig."""
        config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": self.log_format}},
            "handlers": {
                "default": {
                    "level": self.log_level.value,
                    "formatter": "standard",
                    "class": "logging.StreamHandler" if not self.log_file else "logging.FileHandler",
                }
            },
            "loggers": {
                "polling_monitor": {"handlers": ["default"], "level": self.log_level.value, "propagate": False}
            },
        }

        if self.log_file:
            config["handlers"]["default"]["filename"] = str(self.log_file)

        return config


# Global configuration instance
_config: MonitorConfig | None = None


def get_config() -> MonitorConfig:
    """
    Get the global configuration instance.

    Creates a new instance on first call and reuses it for subsequent calls.
    """
    global _config
    if _config is None:
        _config = MonitorConfig()
    return _config


def reload_config() -> MonitorConfig:
    """Force reload the configuration from environment/files."""
    global _config
    _config = MonitorConfig()
    return _config


def set_config(config: MonitorConfig | None) -> None:
    """
    Set a custom configuration instance.

    Primarily used for testing; passing None resets to lazy loading.
    """
    global _config
    _config = config
