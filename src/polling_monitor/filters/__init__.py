"""File filters for selecting which children an observer tracks."""

from polling_monitor.filters.file_filters import (
    FALSE,
    TRUE,
    AgeFileFilter,
    AndFileFilter,
    DelegateFileFilter,
    DirectoryFileFilter,
    FalseFileFilter,
    FileFileFilter,
    FileFilter,
    HiddenFileFilter,
    NameFileFilter,
    NotFileFilter,
    OrFileFilter,
    PrefixFileFilter,
    RegexFileFilter,
    SizeFileFilter,
    SuffixFileFilter,
    TrueFileFilter,
    WildcardFileFilter,
    as_file_filter,
    ignore_patterns_filter,
)

__all__ = [
    "FileFilter",
    "TrueFileFilter",
    "FalseFileFilter",
    "TRUE",
    "FALSE",
    "FileFileFilter",
    "DirectoryFileFilter",
    "HiddenFileFilter",
    "NameFileFilter",
    "PrefixFileFilter",
    "SuffixFileFilter",
    "WildcardFileFilter",
    "RegexFileFilter",
    "SizeFileFilter",
    "AgeFileFilter",
    "DelegateFileFilter",
    "AndFileFilter",
    "OrFileFilter",
    "NotFileFilter",
    "as_file_filter",
    "ignore_patterns_filter",
]
