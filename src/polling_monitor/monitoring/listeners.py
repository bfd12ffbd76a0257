"""
Ready-made listeners for file alteration observers.

FileAlterationListenerAdaptor lets subclasses override only the callbacks they
care about; CollectingFileListener records everything it is told, which makes
it the listener of choice for tests and for hosts that batch changes per pass.
"""

import logging
from pathlib import Path

from polling_monitor.core.interfaces import IFileAlterationListener, IFileAlterationObserver
from polling_monitor.models.events import ChangeType, FileChangeEvent

logger = logging.getLogger(__name__)


class FileAlterationListenerAdaptor(IFileAlterationListener):
    """Listener implementation with empty callbacks."""

    def on_start(self, observer: IFileAlterationObserver) -> None:
        pass

    def on_directory_create(self, directory: Path) -> None:
        pass

    def on_directory_change(self, directory: Path) -> None:
        pass

    def on_directory_delete(self, directory: Path) -> None:
        pass

    def on_file_create(self, file: Path) -> None:
        pass

    def on_file_change(self, file: Path) -> None:
        pass

    def on_file_delete(self, file: Path) -> None:
        pass

    def on_stop(self, observer: IFileAlterationObserver) -> None:
        pass


class CollectingFileListener(FileAlterationListenerAdaptor):
    """
    Listener that records every notification it receives.

    Notifications are kept both per category (created files, deleted
    directories, ...) and as one ordered list of FileChangeEvent objects.
    """

    def __init__(self, clear_on_start: bool = False):
        """
        Initialize the listener.

        Args:
            clear_on_start: Forget previous notifications at the start of every poll pass
        """
        self.clear_on_start = clear_on_start
        self.created_files: list[Path] = []
        self.changed_files: list[Path] = []
        self.deleted_files: list[Path] = []
        self.created_directories: list[Path] = []
        self.changed_directories: list[Path] = []
        self.deleted_directories: list[Path] = []
        self.events: list[FileChangeEvent] = []
        self.passes = 0

    def clear(self) -> None:
        """Forget all recorded notifications."""
        self.created_files.clear()
        self.changed_files.clear()
        self.deleted_files.clear()
        self.created_directories.clear()
        self.changed_directories.clear()
        self.deleted_directories.clear()
        self.events.clear()

    def on_start(self, observer: IFileAlterationObserver) -> None:
        if self.clear_on_start:
            self.clear()

    def on_stop(self, observer: IFileAlterationObserver) -> None:
        self.passes += 1

    def _record(self, bucket: list[Path], change_type: ChangeType, path: Path, is_directory: bool) -> None:
        bucket.append(path)
        self.events.append(FileChangeEvent(change_type, path, is_directory))
        logger.debug("Recorded %s %s", change_type.value, path)

    def on_directory_create(self, directory: Path) -> None:
        self._record(self.created_directories, ChangeType.CREATED, directory, True)

    def on_directory_change(self, directory: Path) -> None:
        self._record(self.changed_directories, ChangeType.CHANGED, directory, True)

    def on_directory_delete(self, directory: Path) -> None:
        self._record(self.deleted_directories, ChangeType.DELETED, directory, True)

    def on_file_create(self, file: Path) -> None:
        self._record(self.created_files, ChangeType.CREATED, file, False)

    def on_file_change(self, file: Path) -> None:
        self._record(self.changed_files, ChangeType.CHANGED, file, False)

    def on_file_delete(self, file: Path) -> None:
        self._record(self.deleted_files, ChangeType.DELETED, file, False)

    @property
    def event_count(self) -> int:
        """Get the number of recorded notifications."""
        return len(self.events)
