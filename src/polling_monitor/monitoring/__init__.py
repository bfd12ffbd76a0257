"""
Monitoring package for polling file system change detection.

This package provides the snapshot tree, the observer that diffs it against
the file system, the monitor that polls observers on a background thread and
ready-made listeners.
"""

from .file_entry import FileEntry
from .listeners import CollectingFileListener, FileAlterationListenerAdaptor
from .monitor import FileAlterationMonitor
from .observer import FileAlterationObserver
from .watchdog_bridge import WatchdogEventBridge

__all__ = [
    "FileEntry",
    "FileAlterationObserver",
    "FileAlterationMonitor",
    "FileAlterationListenerAdaptor",
    "CollectingFileListener",
    "WatchdogEventBridge",
]
