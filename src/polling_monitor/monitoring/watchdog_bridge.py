"""
Bridge from polling observer callbacks to watchdog event handlers.

Hosts that already own a watchdog FileSystemEventHandler can register a
WatchdogEventBridge with a FileAlterationObserver and receive the polling
results as regular watchdog events, e.g. on network shares where native
notifications are unavailable.
"""

import logging
from pathlib import Path

from watchdog.events import (
    DirCreatedEvent,
    DirDeletedEvent,
    DirModifiedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)

from polling_monitor.monitoring.listeners import FileAlterationListenerAdaptor

logger = logging.getLogger(__name__)


class WatchdogEventBridge(FileAlterationListenerAdaptor):
    """Listener that converts each notification into a watchdog event and dispatches it."""

    def __init__(self, handler: FileSystemEventHandler):
        """
        Initialize the bridge.

        Args:
            handler: watchdog handler receiving the converted events
        """
        if handler is None:
            raise ValueError("A watchdog event handler is required")
        self.handler = handler

    def _dispatch(self, event: FileSystemEvent) -> None:
        logger.debug("Dispatching %s to %r", event, self.handler)
        self.handler.dispatch(event)

    def on_directory_create(self, directory: Path) -> None:
        self._dispatch(DirCreatedEvent(str(directory)))

    def on_directory_change(self, directory: Path) -> None:
        self._dispatch(DirModifiedEvent(str(directory)))

    def on_directory_delete(self, directory: Path) -> None:
        self._dispatch(DirDeletedEvent(str(directory)))

    def on_file_create(self, file: Path) -> None:
        self._dispatch(FileCreatedEvent(str(file)))

    def on_file_change(self, file: Path) -> None:
        self._dispatch(FileModifiedEvent(str(file)))

    def on_file_delete(self, file: Path) -> None:
        self._dispatch(FileDeletedEvent(str(file)))
