"""
File comparators used to order directory listings.

A comparator returns a negative, zero or positive integer like the classic
``cmp`` protocol. Observers rely on comparators twice: to sort each listing
and to decide that a stored entry and a listed path are the same file, so a
comparator used with an observer must be a stable total order.
"""

import functools
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from pathlib import Path

from polling_monitor.models.case import IOCase

logger = logging.getLogger(__name__)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _extension(name: str) -> str:
    index = name.rfind(".")
    return name[index + 1 :] if index >= 0 else ""


def _length(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def _mtime_ns(path: Path) -> int:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return 0


def size_of_directory(directory: Path) -> int:
    """Sum the sizes of all regular files below a directory, skipping unreadable ones."""
    total = 0
    for root, _dirs, files in os.walk(directory, onerror=lambda e: logger.debug("Skipping %s: %s", e.filename, e)):
        for name in files:
            total += _length(Path(root) / name)
    return total


class FileComparator(ABC):
    """Base class for path comparators."""

    @abstractmethod
    def compare(self, file1: Path, file2: Path) -> int:
        """
        Compare two paths.

        Args:
            file1: First path
            file2: Second path

        Returns:
            Negative if file1 sorts first, zero if equal, positive otherwise
        """
        pass

    def __call__(self, file1: Path, file2: Path) -> int:
        return self.compare(Path(file1), Path(file2))

    @property
    def key(self):
        """Get a sort key function for use with sorted()."""
        return functools.cmp_to_key(self)

    def sort(self, paths: Iterable[Path]) -> list[Path]:
        """Return the paths as a new list sorted by this comparator."""
        return sorted((Path(p) for p in paths), key=self.key)

    def reversed(self) -> "ReverseComparator":
        """Get a comparator with the opposite order."""
        return ReverseComparator(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class NameFileComparator(FileComparator):
    """Compares the file names of two paths."""

    def __init__(self, case_sensitivity: IOCase = IOCase.SENSITIVE):
        self.case_sensitivity = IOCase(case_sensitivity)

    def compare(self, file1: Path, file2: Path) -> int:
        return self.case_sensitivity.check_compare_to(file1.name, file2.name)

    def __repr__(self) -> str:
        return f"NameFileComparator({self.case_sensitivity.value})"


class PathFileComparator(FileComparator):
    """Compares the full paths of two paths."""

    def __init__(self, case_sensitivity: IOCase = IOCase.SENSITIVE):
        self.case_sensitivity = IOCase(case_sensitivity)

    def compare(self, file1: Path, file2: Path) -> int:
        return self.case_sensitivity.check_compare_to(str(file1), str(file2))

    def __repr__(self) -> str:
        return f"PathFileComparator({self.case_sensitivity.value})"


class ExtensionFileComparator(FileComparator):
    """Compares the extensions (text after the last dot) of two paths."""

    def __init__(self, case_sensitivity: IOCase = IOCase.SENSITIVE):
        self.case_sensitivity = IOCase(case_sensitivity)

    def compare(self, file1: Path, file2: Path) -> int:
        return self.case_sensitivity.check_compare_to(_extension(file1.name), _extension(file2.name))

    def __repr__(self) -> str:
        return f"ExtensionFileComparator({self.case_sensitivity.value})"


class SizeFileComparator(FileComparator):
    """
    Compares the sizes of two paths.

    Directories count as zero bytes unless sum_directory_contents is set, in
    which case the sizes of all files below them are added up.
    """

    def __init__(self, sum_directory_contents: bool = False):
        self.sum_directory_contents = sum_directory_contents

    def _size(self, path: Path) -> int:
        if path.is_dir():
            return size_of_directory(path) if self.sum_directory_contents else 0
        return _length(path)

    def compare(self, file1: Path, file2: Path) -> int:
        return _sign(self._size(file1) - self._size(file2))

    def __repr__(self) -> str:
        return f"SizeFileComparator(sum_directory_contents={self.sum_directory_contents})"


class LastModifiedFileComparator(FileComparator):
    """Compares the modification times of two paths, oldest first."""

    def compare(self, file1: Path, file2: Path) -> int:
        return _sign(_mtime_ns(file1) - _mtime_ns(file2))


class DirectoryFileComparator(FileComparator):
    """Orders directories before files; equal within each group."""

    def compare(self, file1: Path, file2: Path) -> int:
        return (0 if file1.is_dir() else 1) - (0 if file2.is_dir() else 1)


class ReverseComparator(FileComparator):
    """Reverses the order of the wrapped comparator."""

    def __init__(self, delegate: Callable[[Path, Path], int]):
        if delegate is None:
            raise ValueError("Delegate comparator is missing")
        self.delegate = delegate

    def compare(self, file1: Path, file2: Path) -> int:
        return self.delegate(file2, file1)

    def __repr__(self) -> str:
        return f"ReverseComparator({self.delegate!r})"


class CompositeFileComparator(FileComparator):
    """Applies each delegate in turn until one of them reports a difference."""

    def __init__(self, *delegates: Callable[[Path, Path], int]):
        self.delegates = [d for d in delegates if d is not None]

    def compare(self, file1: Path, file2: Path) -> int:
        for delegate in self.delegates:
            result = delegate(file1, file2)
            if result != 0:
                return result
        return 0

    def __repr__(self) -> str:
        return f"CompositeFileComparator({', '.join(repr(d) for d in self.delegates)})"


NAME_COMPARATOR = NameFileComparator()
NAME_REVERSE = ReverseComparator(NAME_COMPARATOR)
NAME_INSENSITIVE_COMPARATOR = NameFileComparator(IOCase.INSENSITIVE)
NAME_INSENSITIVE_REVERSE = ReverseComparator(NAME_INSENSITIVE_COMPARATOR)
NAME_SYSTEM_COMPARATOR = NameFileComparator(IOCase.SYSTEM)
NAME_SYSTEM_REVERSE = ReverseComparator(NAME_SYSTEM_COMPARATOR)

PATH_COMPARATOR = PathFileComparator()
PATH_REVERSE = ReverseComparator(PATH_COMPARATOR)
PATH_INSENSITIVE_COMPARATOR = PathFileComparator(IOCase.INSENSITIVE)
PATH_SYSTEM_COMPARATOR = PathFileComparator(IOCase.SYSTEM)

EXTENSION_COMPARATOR = ExtensionFileComparator()
EXTENSION_REVERSE = ReverseComparator(EXTENSION_COMPARATOR)
EXTENSION_INSENSITIVE_COMPARATOR = ExtensionFileComparator(IOCase.INSENSITIVE)
EXTENSION_SYSTEM_COMPARATOR = ExtensionFileComparator(IOCase.SYSTEM)


def name_comparator_for(case_sensitivity: IOCase | None) -> NameFileComparator:
    """Get the shared name comparator for a case policy (system policy when None)."""
    case_sensitivity = IOCase.SYSTEM if case_sensitivity is None else IOCase(case_sensitivity)
    if case_sensitivity is IOCase.INSENSITIVE:
        return NAME_INSENSITIVE_COMPARATOR
    if case_sensitivity is IOCase.SENSITIVE:
        return NAME_COMPARATOR
    return NAME_SYSTEM_COMPARATOR
