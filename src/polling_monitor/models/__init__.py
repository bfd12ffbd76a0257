"""Data models, case policies and exceptions for the polling monitor."""

from polling_monitor.models.case import IOCase
from polling_monitor.models.events import ChangeType, FileChangeEvent
from polling_monitor.models.exceptions import (
    BaseError,
    ConfigurationError,
    InitializationError,
    MonitoringError,
    ShutdownError,
)

__all__ = [
    "IOCase",
    "ChangeType",
    "FileChangeEvent",
    "BaseError",
    "ConfigurationError",
    "MonitoringError",
    "InitializationError",
    "ShutdownError",
]
