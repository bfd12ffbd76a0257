"""File comparators for ordering directory listings."""

from polling_monitor.comparators.file_comparators import (
    EXTENSION_COMPARATOR,
    EXTENSION_INSENSITIVE_COMPARATOR,
    EXTENSION_REVERSE,
    EXTENSION_SYSTEM_COMPARATOR,
    NAME_COMPARATOR,
    NAME_INSENSITIVE_COMPARATOR,
    NAME_INSENSITIVE_REVERSE,
    NAME_REVERSE,
    NAME_SYSTEM_COMPARATOR,
    NAME_SYSTEM_REVERSE,
    PATH_COMPARATOR,
    PATH_INSENSITIVE_COMPARATOR,
    PATH_REVERSE,
    PATH_SYSTEM_COMPARATOR,
    CompositeFileComparator,
    DirectoryFileComparator,
    ExtensionFileComparator,
    FileComparator,
    LastModifiedFileComparator,
    NameFileComparator,
    PathFileComparator,
    ReverseComparator,
    SizeFileComparator,
    name_comparator_for,
    size_of_directory,
)

__all__ = [
    "FileComparator",
    "NameFileComparator",
    "PathFileComparator",
    "ExtensionFileComparator",
    "SizeFileComparator",
    "LastModifiedFileComparator",
    "DirectoryFileComparator",
    "CompositeFileComparator",
    "ReverseComparator",
    "name_comparator_for",
    "size_of_directory",
    "NAME_COMPARATOR",
    "NAME_REVERSE",
    "NAME_INSENSITIVE_COMPARATOR",
    "NAME_INSENSITIVE_REVERSE",
    "NAME_SYSTEM_COMPARATOR",
    "NAME_SYSTEM_REVERSE",
    "PATH_COMPARATOR",
    "PATH_REVERSE",
    "PATH_INSENSITIVE_COMPARATOR",
    "PATH_SYSTEM_COMPARATOR",
    "EXTENSION_COMPARATOR",
    "EXTENSION_REVERSE",
    "EXTENSION_INSENSITIVE_COMPARATOR",
    "EXTENSION_SYSTEM_COMPARATOR",
]
