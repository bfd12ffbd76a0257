"""Shared pytest fixtures."""

import logging
import os

import pytest

from polling_monitor.config import set_config


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    """Isolate every test from the global configuration and POLLING_MONITOR_ variables."""
    for name in list(os.environ):
        if name.upper().startswith("POLLING_MONITOR_"):
            monkeypatch.delenv(name)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo logging configuration applied by the command line entry points."""
    logger = logging.getLogger("polling_monitor")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
