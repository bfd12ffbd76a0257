"""
Abstract interfaces for the polling monitor.

These interfaces define the contracts between the snapshot tree, the observers
that diff it and the listeners that receive change notifications, so host
applications can plug in their own entry types or listeners.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from pathlib import Path

FileFilterCallable = Callable[[Path], bool]
FileComparatorCallable = Callable[[Path, Path], int]


class IFileEntry(ABC):
    """
    Interface for a node in the snapshot tree.

    An entry captures the attributes of one file or directory at the time it was
    last refreshed. Implementations may capture extra attributes as long as they
    report changes through refresh().
    """

    @abstractmethod
    def refresh(self, file: Path | None = None) -> bool:
        """
        Re-read the tracked attributes from the file system.

        Args:
            file: Path to read; defaults to the entry's own path

        Returns:
            True if any tracked attribute changed
        """
        pass

    @abstractmethod
    def new_child_instance(self, file: Path) -> "IFileEntry":
        """
        Create a new entry of the same kind, parented under this one.

        Args:
            file: Path of the child

        Returns:
            The new, not yet refreshed, child entry
        """
        pass

    @property
    @abstractmethod
    def file(self) -> Path:
        """Get the path tracked by this entry."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the file name cached at the last refresh."""
        pass

    @property
    @abstractmethod
    def exists(self) -> bool:
        """Whether the path existed at the last refresh."""
        pass

    @property
    @abstractmethod
    def is_directory(self) -> bool:
        """Whether the path was a directory at the last refresh."""
        pass

    @property
    @abstractmethod
    def last_modified(self) -> float:
        """Get the last modification time in seconds since the epoch."""
        pass

    @property
    @abstractmethod
    def parent(self) -> "IFileEntry | None":
        """Get the enclosing entry, or None for the root."""
        pass

    @property
    @abstractmethod
    def children(self) -> tuple["IFileEntry", ...]:
        """Get the child entries in comparator order."""
        pass

    @children.setter
    @abstractmethod
    def children(self, children: Iterable["IFileEntry"]) -> None:
        """Replace the child entries as a whole."""
        pass


class IFileAlterationListener(ABC):
    """Interface for receiving file system change notifications from an observer."""

    @abstractmethod
    def on_start(self, observer: "IFileAlterationObserver") -> None:
        """Called at the start of every poll pass."""
        pass

    @abstractmethod
    def on_directory_create(self, directory: Path) -> None:
        """Called when a directory is created."""
        pass

    @abstractmethod
    def on_directory_change(self, directory: Path) -> None:
        """Called when a directory's attributes change."""
        pass

    @abstractmethod
    def on_directory_delete(self, directory: Path) -> None:
        """Called when a directory is deleted."""
        pass

    @abstractmethod
    def on_file_create(self, file: Path) -> None:
        """Called when a file is created."""
        pass

    @abstractmethod
    def on_file_change(self, file: Path) -> None:
        """Called when a file's attributes change."""
        pass

    @abstractmethod
    def on_file_delete(self, file: Path) -> None:
        """Called when a file is deleted."""
        pass

    @abstractmethod
    def on_stop(self, observer: "IFileAlterationObserver") -> None:
        """Called at the end of every poll pass."""
        pass


class IFileAlterationObserver(ABC):
    """Interface for components that can be driven by a polling monitor."""

    @abstractmethod
    def initialize(self) -> None:
        """
        Build the initial snapshot without firing events.

        Raises:
            InitializationError: If the observer cannot be prepared
        """
        pass

    @abstractmethod
    def check_and_notify(self) -> None:
        """Run one poll pass and notify listeners of every divergence."""
        pass

    @abstractmethod
    def destroy(self) -> None:
        """Release any resources held by the observer."""
        pass
