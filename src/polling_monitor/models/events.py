"""Change event records produced from observer callbacks."""

import time
from enum import Enum
from pathlib import Path


class ChangeType(str, Enum):
    """Kind of change detected for a file or directory."""

    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


class FileChangeEvent:
    """Represents a single detected file system change."""

    def __init__(self, change_type: ChangeType, file_path: Path, is_directory: bool = False):
        self.change_type = ChangeType(change_type)
        self.file_path = Path(file_path)
        self.is_directory = is_directory
        self.timestamp = time.time()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileChangeEvent):
            return NotImplemented
        return (
            self.change_type == other.change_type
            and self.file_path == other.file_path
            and self.is_directory == other.is_directory
        )

    def __hash__(self) -> int:
        return hash((self.change_type, self.file_path, self.is_directory))

    def __str__(self) -> str:
        kind = "directory" if self.is_directory else "file"
        return f"FileChangeEvent({self.change_type.value} {kind}: {self.file_path})"

    __repr__ = __str__
