"""Unit tests for the snapshot tree entries."""

import gc
import os
import time

import pytest

from polling_monitor.models import ConfigurationError
from polling_monitor.monitoring import FileEntry


class TestFileEntry:
    """Test cases for FileEntry."""

    def test_missing_file_is_rejected(self):
        """Test that an entry requires a path."""
        with pytest.raises(ConfigurationError, match="File is missing"):
            FileEntry(None)

    def test_initial_state(self, tmp_path):
        """Test the attributes of an entry that has not been refreshed."""
        entry = FileEntry(tmp_path / "a.txt")

        assert entry.name == "a.txt"
        assert entry.exists is False
        assert entry.is_directory is False
        assert entry.last_modified == 0
        assert entry.length == 0
        assert entry.parent is None
        assert entry.children == ()
        assert entry.level == 0

    def test_refresh_file(self, tmp_path):
        """Test refreshing an existing file."""
        path = tmp_path / "a.txt"
        path.write_text("hello")
        entry = FileEntry(path)

        assert entry.refresh() is True
        assert entry.exists is True
        assert entry.is_directory is False
        assert entry.length == 5
        assert entry.last_modified_ns == path.stat().st_mtime_ns
        assert entry.refresh() is False

    def test_refresh_directory(self, tmp_path):
        """Test that directories report no length."""
        entry = FileEntry(tmp_path)

        assert entry.refresh() is True
        assert entry.is_directory is True
        assert entry.length == 0

    def test_refresh_detects_modification(self, tmp_path):
        """Test that size and modification time changes are detected."""
        path = tmp_path / "a.txt"
        path.write_text("one")
        entry = FileEntry(path)
        entry.refresh()

        past = time.time() - 100
        os.utime(path, (past, past))
        assert entry.refresh() is True

        path.write_text("longer content")
        os.utime(path, (past, past))
        assert entry.refresh() is True
        assert entry.length == len("longer content")

    def test_refresh_missing_keeps_directory_flag(self, tmp_path):
        """Test that a vanished directory is still known as a directory."""
        directory = tmp_path / "sub"
        directory.mkdir()
        entry = FileEntry(directory)
        entry.refresh()

        directory.rmdir()

        assert entry.refresh() is True
        assert entry.exists is False
        assert entry.is_directory is True
        assert entry.last_modified_ns == 0
        assert entry.refresh() is False

    def test_refresh_with_other_path(self, tmp_path):
        """Test that refreshing against another path makes the entry track it."""
        path = tmp_path / "B.txt"
        path.write_text("x")
        entry = FileEntry(tmp_path / "b.txt")

        entry.refresh(path)

        assert entry.name == "B.txt"
        assert entry.file == path
        assert entry.exists is True

    def test_children_and_parent(self, tmp_path):
        """Test the tree relationships."""
        root = FileEntry(tmp_path)
        child = root.new_child_instance(tmp_path / "child")
        grandchild = child.new_child_instance(tmp_path / "child" / "leaf")
        root.children = [child]
        child.children = iter([grandchild])

        assert isinstance(child, FileEntry)
        assert child.parent is root
        assert grandchild.level == 2
        assert root.children == (child,)
        assert child.children == (grandchild,)

    def test_parent_is_weak(self, tmp_path):
        """Test that children do not keep their parent alive."""
        root = FileEntry(tmp_path)
        child = root.new_child_instance(tmp_path / "child")

        del root
        gc.collect()

        assert child.parent is None

    def test_subclass_children_keep_type(self, tmp_path):
        """Test that child instances use the subclass."""

        class TaggedEntry(FileEntry):
            pass

        child = TaggedEntry(tmp_path).new_child_instance(tmp_path / "x")

        assert type(child) is TaggedEntry

    def test_setters(self, tmp_path):
        """Test overriding attributes directly."""
        entry = FileEntry(tmp_path / "x")
        entry.name = "renamed"
        entry.exists = True
        entry.is_directory = True
        entry.last_modified = 12.5
        entry.length = 3

        assert entry.name == "renamed"
        assert entry.exists is True
        assert entry.is_directory is True
        assert entry.last_modified == 12.5
        assert entry.last_modified_ns == 12_500_000_000
        assert entry.length == 3
        assert "dir" in repr(entry)
