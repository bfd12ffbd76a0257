"""
Snapshot tree node holding the attributes of one file or directory.

Entries form an owned tree: a directory entry holds its children, and each
child keeps only a weak reference back to its parent.
"""

import logging
import stat
import weakref
from collections.abc import Iterable
from pathlib import Path

from polling_monitor.core.interfaces import IFileEntry
from polling_monitor.models.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class FileEntry(IFileEntry):
    """
    Default snapshot entry tracking existence, type, modification time and size.

    Subclasses capturing extra attributes should override refresh() (calling
    the base implementation) and new_child_instance() so the observer builds
    the whole tree from the same entry type.
    """

    def __init__(self, file: str | Path, parent: "FileEntry | None" = None):
        """
        Initialize an entry that has not been refreshed yet.

        Args:
            file: Path the entry tracks
            parent: Enclosing entry, or None for a root entry

        Raises:
            ConfigurationError: If no path is given
        """
        if file is None:
            raise ConfigurationError("File is missing", config_key="file", expected_type="str | Path")

        self._file = Path(file)
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._children: tuple[IFileEntry, ...] = ()
        self._name = self._file.name
        self._exists = False
        self._directory = False
        self._last_modified_ns = 0
        self._length = 0

    def refresh(self, file: Path | None = None) -> bool:
        """
        Re-read the tracked attributes.

        A path whose attributes cannot be read counts as missing. The directory
        flag of a missing path keeps its previous value so a deletion can still
        be reported as a file or directory deletion.

        Refreshing with another path (e.g. a case variant matched by an
        insensitive comparator) makes it the path the entry tracks.

        Args:
            file: Path to read; defaults to the entry's own path

        Returns:
            True if existence, type, modification time or size changed
        """
        file = self._file if file is None else Path(file)
        before = (self._exists, self._directory, self._last_modified_ns, self._length)

        try:
            stat_info = file.stat()
        except OSError as e:
            logger.debug("Treating %s as missing: %s", file, e)
            stat_info = None

        self._file = file
        self._name = file.name
        self._exists = stat_info is not None
        if stat_info is not None:
            self._directory = stat.S_ISDIR(stat_info.st_mode)
            self._last_modified_ns = stat_info.st_mtime_ns
            self._length = 0 if self._directory else stat_info.st_size
        else:
            self._last_modified_ns = 0
            self._length = 0

        return (self._exists, self._directory, self._last_modified_ns, self._length) != before

    def new_child_instance(self, file: Path) -> "FileEntry":
        """Create a child entry of the same type."""
        return type(self)(file, self)

    @property
    def file(self) -> Path:
        """Get the path tracked by this entry."""
        return self._file

    @property
    def name(self) -> str:
        """Get the file name cached at the last refresh."""
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def exists(self) -> bool:
        """Whether the path existed at the last refresh."""
        return self._exists

    @exists.setter
    def exists(self, exists: bool) -> None:
        self._exists = exists

    @property
    def is_directory(self) -> bool:
        """Whether the path was a directory at the last refresh."""
        return self._directory

    @is_directory.setter
    def is_directory(self, directory: bool) -> None:
        self._directory = directory

    @property
    def last_modified(self) -> float:
        """Get the last modification time in seconds since the epoch."""
        return self._last_modified_ns / 1_000_000_000

    @last_modified.setter
    def last_modified(self, seconds: float) -> None:
        self._last_modified_ns = int(seconds * 1_000_000_000)

    @property
    def last_modified_ns(self) -> int:
        """Get the last modification time in nanoseconds since the epoch."""
        return self._last_modified_ns

    @property
    def length(self) -> int:
        """Get the size in bytes of a regular file (0 for directories)."""
        return self._length

    @length.setter
    def length(self, length: int) -> None:
        self._length = length

    @property
    def parent(self) -> "FileEntry | None":
        """Get the enclosing entry, or None for the root or a released parent."""
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def level(self) -> int:
        """Get the depth of this entry below the root (root is 0)."""
        parent = self.parent
        return 0 if parent is None else parent.level + 1

    @property
    def children(self) -> tuple[IFileEntry, ...]:
        """Get the child entries in comparator order."""
        return self._children

    @children.setter
    def children(self, children: Iterable[IFileEntry]) -> None:
        self._children = tuple(children)

    def __repr__(self) -> str:
        kind = "dir" if self._directory else "file"
        return f"FileEntry({str(self._file)!r}, {kind}, exists={self._exists}, children={len(self._children)})"
