"""
File filters used to decide which directory children an observer lists.

Every filter is a callable taking a path and returning a boolean, so any filter
can be handed straight to an observer. Filters compose with ``&``, ``|`` and ``~``.
"""

import fnmatch
import logging
import re
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from polling_monitor.models.case import IOCase

logger = logging.getLogger(__name__)


def _as_list(values: str | Iterable[str]) -> list[str]:
    if isinstance(values, str):
        return [values]
    return list(values)


class FileFilter(ABC):
    """Base class for file filters."""

    @abstractmethod
    def accept(self, path: Path) -> bool:
        """
        Check whether a path passes this filter.

        Args:
            path: Path to check

        Returns:
            True if the path is accepted
        """
        pass

    def accept_name(self, directory: Path, name: str) -> bool:
        """Check a child by its containing directory and name."""
        return self.accept(Path(directory) / name)

    def __call__(self, path: Path) -> bool:
        return self.accept(Path(path))

    def __and__(self, other: "FileFilter | Callable[[Path], bool]") -> "AndFileFilter":
        return AndFileFilter(self, other)

    def __or__(self, other: "FileFilter | Callable[[Path], bool]") -> "OrFileFilter":
        return OrFileFilter(self, other)

    def __invert__(self) -> "NotFileFilter":
        return NotFileFilter(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class TrueFileFilter(FileFilter):
    """Accepts every path."""

    def accept(self, path: Path) -> bool:
        return True


class FalseFileFilter(FileFilter):
    """Rejects every path."""

    def accept(self, path: Path) -> bool:
        return False


class FileFileFilter(FileFilter):
    """Accepts regular files only."""

    def accept(self, path: Path) -> bool:
        return path.is_file()


class DirectoryFileFilter(FileFilter):
    """Accepts directories only."""

    def accept(self, path: Path) -> bool:
        return path.is_dir()


class HiddenFileFilter(FileFilter):
    """Accepts hidden (dot-prefixed) paths, or visible ones when hidden is False."""

    def __init__(self, hidden: bool = True):
        self.hidden = hidden

    def accept(self, path: Path) -> bool:
        return path.name.startswith(".") == self.hidden

    def __repr__(self) -> str:
        return f"HiddenFileFilter(hidden={self.hidden})"


class NameFileFilter(FileFilter):
    """Accepts paths whose name equals one of the given names."""

    def __init__(self, names: str | Iterable[str], case_sensitivity: IOCase = IOCase.SENSITIVE):
        self.names = _as_list(names)
        self.case_sensitivity = IOCase(case_sensitivity)

    def accept(self, path: Path) -> bool:
        return any(self.case_sensitivity.check_equals(path.name, name) for name in self.names)

    def __repr__(self) -> str:
        return f"NameFileFilter({self.names!r}, {self.case_sensitivity.value})"


class PrefixFileFilter(FileFilter):
    """Accepts paths whose name starts with one of the given prefixes."""

    def __init__(self, prefixes: str | Iterable[str], case_sensitivity: IOCase = IOCase.SENSITIVE):
        self.prefixes = _as_list(prefixes)
        self.case_sensitivity = IOCase(case_sensitivity)

    def accept(self, path: Path) -> bool:
        return any(self.case_sensitivity.check_starts_with(path.name, prefix) for prefix in self.prefixes)

    def __repr__(self) -> str:
        return f"PrefixFileFilter({self.prefixes!r}, {self.case_sensitivity.value})"


class SuffixFileFilter(FileFilter):
    """Accepts paths whose name ends with one of the given suffixes."""

    def __init__(self, suffixes: str | Iterable[str], case_sensitivity: IOCase = IOCase.SENSITIVE):
        self.suffixes = _as_list(suffixes)
        self.case_sensitivity = IOCase(case_sensitivity)

    def accept(self, path: Path) -> bool:
        return any(self.case_sensitivity.check_ends_with(path.name, suffix) for suffix in self.suffixes)

    def __repr__(self) -> str:
        return f"SuffixFileFilter({self.suffixes!r}, {self.case_sensitivity.value})"


class WildcardFileFilter(FileFilter):
    """
    Accepts paths whose name matches one of the given shell-style wildcards.

    Patterns containing a path separator are matched against the full path
    instead of the name, so ``.git/*`` style patterns keep working.
    """

    def __init__(self, patterns: str | Iterable[str], case_sensitivity: IOCase = IOCase.SENSITIVE):
        self.patterns = _as_list(patterns)
        self.case_sensitivity = IOCase(case_sensitivity)

    def _matches(self, value: str, pattern: str) -> bool:
        if self.case_sensitivity.is_case_sensitive:
            return fnmatch.fnmatchcase(value, pattern)
        return fnmatch.fnmatchcase(value.casefold(), pattern.casefold())

    def accept(self, path: Path) -> bool:
        full_path = path.as_posix()
        for pattern in self.patterns:
            if "/" in pattern:
                if self._matches(full_path, pattern) or self._matches(full_path, f"*/{pattern}"):
                    return True
            elif self._matches(path.name, pattern):
                return True
        return False

    def __repr__(self) -> str:
        return f"WildcardFileFilter({self.patterns!r}, {self.case_sensitivity.value})"


class RegexFileFilter(FileFilter):
    """Accepts paths whose name fully matches a regular expression."""

    def __init__(self, pattern: str | re.Pattern, case_sensitivity: IOCase = IOCase.SENSITIVE):
        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
        else:
            flags = 0 if IOCase(case_sensitivity).is_case_sensitive else re.IGNORECASE
            self.pattern = re.compile(pattern, flags)

    def accept(self, path: Path) -> bool:
        return self.pattern.fullmatch(path.name) is not None

    def __repr__(self) -> str:
        return f"RegexFileFilter({self.pattern.pattern!r})"


class SizeFileFilter(FileFilter):
    """Accepts files at least ``size`` bytes long, or smaller ones when accept_larger is False."""

    def __init__(self, size: int, accept_larger: bool = True):
        if size < 0:
            raise ValueError("The size must be non-negative")
        self.size = size
        self.accept_larger = accept_larger

    def accept(self, path: Path) -> bool:
        try:
            length = path.stat().st_size
        except OSError:
            return False
        smaller = length < self.size
        return not smaller if self.accept_larger else smaller

    def __repr__(self) -> str:
        op = ">=" if self.accept_larger else "<"
        return f"SizeFileFilter({op}{self.size})"


class AgeFileFilter(FileFilter):
    """
    Accepts paths modified at or before a cutoff time.

    With accept_older set to False the filter accepts paths modified after the
    cutoff instead.
    """

    def __init__(self, cutoff: float | datetime | Path, accept_older: bool = True):
        if isinstance(cutoff, datetime):
            self.cutoff = cutoff.timestamp()
        elif isinstance(cutoff, Path):
            self.cutoff = cutoff.stat().st_mtime
        else:
            self.cutoff = float(cutoff)
        self.accept_older = accept_older

    @classmethod
    def newer_than(cls, seconds: float) -> "AgeFileFilter":
        """Build a filter accepting paths modified within the last ``seconds``."""
        return cls(time.time() - seconds, accept_older=False)

    def accept(self, path: Path) -> bool:
        try:
            modified = path.stat().st_mtime
        except OSError:
            return False
        newer = modified > self.cutoff
        return not newer if self.accept_older else newer

    def __repr__(self) -> str:
        op = "<=" if self.accept_older else ">"
        return f"AgeFileFilter({op}{self.cutoff})"


class DelegateFileFilter(FileFilter):
    """Wraps a plain predicate so it composes with other filters."""

    def __init__(self, delegate: Callable[[Path], bool]):
        if delegate is None:
            raise ValueError("The delegate filter must not be None")
        self.delegate = delegate

    def accept(self, path: Path) -> bool:
        return bool(self.delegate(path))

    def __repr__(self) -> str:
        return f"DelegateFileFilter({self.delegate!r})"


class AndFileFilter(FileFilter):
    """Accepts a path only if every wrapped filter accepts it."""

    def __init__(self, *filters: FileFilter | Callable[[Path], bool]):
        self.filters = [as_file_filter(f) for f in filters]

    def accept(self, path: Path) -> bool:
        return bool(self.filters) and all(f.accept(path) for f in self.filters)

    def __repr__(self) -> str:
        return f"AndFileFilter({', '.join(repr(f) for f in self.filters)})"


class OrFileFilter(FileFilter):
    """Accepts a path if any wrapped filter accepts it."""

    def __init__(self, *filters: FileFilter | Callable[[Path], bool]):
        self.filters = [as_file_filter(f) for f in filters]

    def accept(self, path: Path) -> bool:
        return any(f.accept(path) for f in self.filters)

    def __repr__(self) -> str:
        return f"OrFileFilter({', '.join(repr(f) for f in self.filters)})"


class NotFileFilter(FileFilter):
    """Inverts the result of the wrapped filter."""

    def __init__(self, wrapped: FileFilter | Callable[[Path], bool]):
        self.wrapped = as_file_filter(wrapped)

    def accept(self, path: Path) -> bool:
        return not self.wrapped.accept(path)

    def __repr__(self) -> str:
        return f"NotFileFilter({self.wrapped!r})"


TRUE = TrueFileFilter()
FALSE = FalseFileFilter()


def as_file_filter(value: FileFilter | Callable[[Path], bool]) -> FileFilter:
    """Return value unchanged if it is a FileFilter, otherwise wrap it."""
    if isinstance(value, FileFilter):
        return value
    return DelegateFileFilter(value)


def ignore_patterns_filter(
    patterns: Iterable[str],
    case_sensitivity: IOCase = IOCase.SENSITIVE,
    include_hidden: bool = True,
) -> FileFilter | None:
    """
    Build a filter rejecting paths that match any of the ignore patterns.

    Args:
        patterns: Shell-style wildcard patterns to ignore
        case_sensitivity: Case policy used for matching
        include_hidden: Whether dot-prefixed paths are accepted

    Returns:
        The combined filter, or None when nothing needs to be filtered
    """
    patterns = [p for p in patterns if p]
    filters: list[FileFilter] = []
    if patterns:
        filters.append(NotFileFilter(WildcardFileFilter(patterns, case_sensitivity)))
    if not include_hidden:
        filters.append(HiddenFileFilter(hidden=False))

    if not filters:
        return None
    if len(filters) == 1:
        return filters[0]

    logger.debug("Combining %d ignore filters", len(filters))
    return AndFileFilter(*filters)
