"""Core contracts shared by the monitoring components."""

from polling_monitor.core.interfaces import (
    FileComparatorCallable,
    FileFilterCallable,
    IFileAlterationListener,
    IFileAlterationObserver,
    IFileEntry,
)

__all__ = [
    "IFileEntry",
    "IFileAlterationListener",
    "IFileAlterationObserver",
    "FileFilterCallable",
    "FileComparatorCallable",
]
