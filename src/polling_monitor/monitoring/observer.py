"""
Directory observer that detects changes by diffing snapshots.

The observer keeps an in-memory tree of FileEntry objects mirroring one
directory. Each call to check_and_notify() lists the directory again, walks the
stored and the fresh listing side by side in comparator order and reports every
difference to the registered listeners.
"""

import functools
import logging
import threading
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from polling_monitor.comparators.file_comparators import name_comparator_for
from polling_monitor.core.interfaces import IFileAlterationListener, IFileAlterationObserver, IFileEntry
from polling_monitor.models.case import IOCase
from polling_monitor.models.exceptions import ConfigurationError
from polling_monitor.monitoring.file_entry import FileEntry

if TYPE_CHECKING:
    from polling_monitor.config.settings import MonitorConfig

logger = logging.getLogger(__name__)

_NO_FILES: tuple[Path, ...] = ()


class FileAlterationObserver(IFileAlterationObserver):
    """
    Observes one directory tree and notifies listeners of created, changed and deleted entries.

    An observer can be driven by a FileAlterationMonitor or manually by calling
    initialize(), check_and_notify() and destroy() from a single thread.
    """

    def __init__(
        self,
        directory: str | Path | IFileEntry,
        file_filter: Callable[[Path], bool] | None = None,
        comparator: Callable[[Path, Path], int] | None = None,
        case_sensitivity: IOCase | None = None,
    ):
        """
        Initialize the observer.

        Args:
            directory: Directory to observe, or a prepared root entry
            file_filter: Predicate selecting which children are observed (all if None)
            comparator: Order used to sort listings and match entries between polls
            case_sensitivity: Case policy for the default name comparator (ignored if comparator is given)

        Raises:
            ConfigurationError: If the root entry or its directory is missing
        """
        if directory is None:
            raise ConfigurationError("Root entry is missing", config_key="directory", expected_type="str | Path")

        root_entry = directory if isinstance(directory, IFileEntry) else FileEntry(directory)
        if root_entry.file is None:
            raise ConfigurationError("Root directory is missing", config_key="directory")

        self._root_entry = root_entry
        self._file_filter = file_filter
        self._comparator = comparator if comparator is not None else name_comparator_for(case_sensitivity)
        self._sort_key = functools.cmp_to_key(self._comparator)

        # Copy-on-write listener registry; mutations replace the tuple
        self._listeners: tuple[IFileAlterationListener, ...] = ()
        self._listeners_lock = threading.Lock()

    @classmethod
    def from_config(cls, directory: str | Path, config: "MonitorConfig") -> "FileAlterationObserver":
        """
        Create an observer using the filter and case policy of a configuration.

        Args:
            directory: Directory to observe
            config: Monitor configuration

        Returns:
            Configured observer
        """
        return cls(directory, file_filter=config.build_file_filter(), case_sensitivity=config.case_sensitivity)

    @property
    def root_entry(self) -> IFileEntry:
        """Get the root of the snapshot tree."""
        return self._root_entry

    @property
    def directory(self) -> Path:
        """Get the observed directory."""
        return self._root_entry.file

    @property
    def file_filter(self) -> Callable[[Path], bool] | None:
        """Get the file filter, or None if every child is observed."""
        return self._file_filter

    @property
    def comparator(self) -> Callable[[Path, Path], int]:
        """Get the comparator used to order listings."""
        return self._comparator

    def add_listener(self, listener: IFileAlterationListener | None) -> None:
        """Register a listener; None is ignored."""
        if listener is None:
            return
        with self._listeners_lock:
            self._listeners = self._listeners + (listener,)

    def remove_listener(self, listener: IFileAlterationListener | None) -> None:
        """Remove every registration of a listener; None is ignored."""
        if listener is None:
            return
        with self._listeners_lock:
            self._listeners = tuple(registered for registered in self._listeners if registered is not listener)

    @property
    def listeners(self) -> tuple[IFileAlterationListener, ...]:
        """Get a snapshot of the registered listeners."""
        return self._listeners

    def initialize(self) -> None:
        """Build the initial snapshot tree without firing any events."""
        self._root_entry.refresh(self._root_entry.file)
        self._root_entry.children = self._build_children(self._root_entry, self._list_files(self._root_entry.file))
        logger.debug(
            "Initialized observer for %s (%d top-level entries)", self.directory, len(self._root_entry.children)
        )

    def destroy(self) -> None:
        """Release resources; nothing to release for a polling observer."""
        pass

    def check_and_notify(self) -> None:
        """
        Run one poll pass.

        Fires on_start, reports every create, change and delete found since the
        previous pass and fires on_stop. Errors are logged, never raised.
        """
        self._fire("on_start", self)

        try:
            root = self._root_entry
            existed = root.exists
            root.refresh()
            if root.exists:
                self._check_and_notify(root, root.children, self._list_files(root.file))
            elif existed:
                logger.debug("Observed directory %s disappeared", self.directory)
                self._check_and_notify(root, root.children, _NO_FILES)
            # Didn't exist and still doesn't
        except Exception as e:
            logger.error("Error checking %s for changes: %s", self.directory, e)

        self._fire("on_stop", self)

    def _check_and_notify(self, parent: IFileEntry, previous: Sequence[IFileEntry], files: Sequence[Path]) -> None:
        """Diff one directory level and replace the parent's children with the result."""
        c = 0
        current: list[IFileEntry] = []

        for entry in previous:
            while c < len(files) and self._comparator(entry.file, files[c]) > 0:
                self._add_created(parent, files[c], current)
                c += 1

            if c < len(files) and self._comparator(entry.file, files[c]) == 0:
                if self._do_match(entry, files[c]):
                    self._check_and_notify(entry, entry.children, self._list_files(files[c]))
                    current.append(entry)
                else:
                    self._remove_deleted(entry)
                c += 1
            else:
                self._remove_deleted(entry)

        for file in files[c:]:
            self._add_created(parent, file, current)

        parent.children = current

    def _add_created(self, parent: IFileEntry, file: Path, current: list[IFileEntry]) -> None:
        entry = self._create_file_entry(parent, file)
        if entry is None:
            return
        current.append(entry)
        self._do_create(entry)

    def _remove_deleted(self, entry: IFileEntry) -> None:
        self._check_and_notify(entry, entry.children, _NO_FILES)
        self._do_delete(entry)

    def _create_file_entry(self, parent: IFileEntry, file: Path) -> IFileEntry | None:
        """Build an entry and its subtree, or None if the path vanished before it could be read."""
        entry = parent.new_child_instance(file)
        entry.refresh(file)
        if not entry.exists:
            logger.debug("Skipping %s: vanished before it could be read", file)
            return None
        entry.children = self._build_children(entry, self._list_files(file))
        return entry

    def _build_children(self, parent: IFileEntry, files: Sequence[Path]) -> list[IFileEntry]:
        children = []
        for file in files:
            child = self._create_file_entry(parent, file)
            if child is not None:
                children.append(child)
        return children

    def _do_create(self, entry: IFileEntry) -> None:
        if entry.is_directory:
            self._fire("on_directory_create", entry.file)
        else:
            self._fire("on_file_create", entry.file)
        for child in entry.children:
            self._do_create(child)

    def _do_match(self, entry: IFileEntry, file: Path) -> bool:
        """Refresh a matched entry and report a change; False if the path has disappeared."""
        if not entry.refresh(file):
            return True
        if not entry.exists:
            return False

        if entry.is_directory:
            self._fire("on_directory_change", file)
        else:
            self._fire("on_file_change", file)
        return True

    def _do_delete(self, entry: IFileEntry) -> None:
        if entry.is_directory:
            self._fire("on_directory_delete", entry.file)
        else:
            self._fire("on_file_delete", entry.file)

    def _list_files(self, file: Path) -> list[Path]:
        """List the accepted children of a directory in comparator order."""
        try:
            if not file.is_dir():
                return []
            children = [child for child in file.iterdir() if self._accept(child)]
        except OSError as e:
            logger.debug("Unable to list %s: %s", file, e)
            return []

        if len(children) > 1:
            children.sort(key=self._sort_key)
        return children

    def _accept(self, file: Path) -> bool:
        if self._file_filter is None:
            return True
        try:
            return bool(self._file_filter(file))
        except Exception as e:
            logger.debug("Error applying file filter to %s: %s", file, e)
            return False

    def _fire(self, callback: str, argument) -> None:
        """Invoke a callback on every listener, isolating listener failures."""
        for listener in self._listeners:
            try:
                getattr(listener, callback)(argument)
            except Exception as e:
                logger.error("Listener %r failed in %s for %s: %s", listener, callback, argument, e)

    def __repr__(self) -> str:
        parts = [f"file='{self.directory}'"]
        if self._file_filter is not None:
            parts.append(repr(self._file_filter))
        parts.append(f"listeners={len(self._listeners)}")
        return f"{self.__class__.__name__}[{', '.join(parts)}]"
