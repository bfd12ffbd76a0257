"""Unit tests for the snapshot diffing observer."""

import os
import shutil
import time
from pathlib import Path
from unittest.mock import Mock

import pytest

from polling_monitor.comparators import NAME_REVERSE
from polling_monitor.config import MonitorConfig
from polling_monitor.filters import SuffixFileFilter
from polling_monitor.models import ChangeType, ConfigurationError, FileChangeEvent, IOCase
from polling_monitor.monitoring import CollectingFileListener, FileAlterationObserver, FileEntry


def set_past_mtime(path: Path, seconds_ago: float = 100) -> None:
    past = time.time() - seconds_ago
    os.utime(path, (past, past))


class TestFileAlterationObserver:
    """Test cases for FileAlterationObserver."""

    @pytest.fixture
    def root(self, tmp_path):
        """Create an observed directory with a small tree."""
        root = tmp_path / "root"
        (root / "sub").mkdir(parents=True)
        (root / "a.txt").write_text("a")
        (root / "sub" / "b.txt").write_text("b")
        set_past_mtime(root / "sub")
        return root

    @pytest.fixture
    def listener(self):
        """Create a collecting listener."""
        return CollectingFileListener()

    @pytest.fixture
    def observer(self, root, listener):
        """Create an initialized observer with one listener."""
        observer = FileAlterationObserver(root, case_sensitivity=IOCase.SENSITIVE)
        observer.add_listener(listener)
        observer.initialize()
        return observer

    def test_missing_directory_is_rejected(self):
        """Test that a root directory is required."""
        with pytest.raises(ConfigurationError, match="Root entry is missing"):
            FileAlterationObserver(None)

    def test_initialize_builds_tree_silently(self, observer, listener, root):
        """Test that the initial snapshot fires no events."""
        assert listener.event_count == 0
        assert observer.directory == root
        assert [child.name for child in observer.root_entry.children] == ["a.txt", "sub"]
        sub = observer.root_entry.children[1]
        assert sub.is_directory
        assert [child.name for child in sub.children] == ["b.txt"]
        assert sub.children[0].parent is sub

    def test_no_changes(self, observer, listener):
        """Test that an unchanged tree only produces start and stop callbacks."""
        observer.check_and_notify()
        observer.check_and_notify()

        assert listener.event_count == 0
        assert listener.passes == 2

    def test_start_and_stop_callbacks(self, observer):
        """Test that every pass is framed by on_start and on_stop."""
        mock_listener = Mock()
        observer.add_listener(mock_listener)

        observer.check_and_notify()

        mock_listener.on_start.assert_called_once_with(observer)
        mock_listener.on_stop.assert_called_once_with(observer)

    def test_file_created(self, observer, listener, root):
        """Test detection of a new file."""
        (root / "c.txt").write_text("c")

        observer.check_and_notify()

        assert listener.created_files == [root / "c.txt"]
        assert [child.name for child in observer.root_entry.children] == ["a.txt", "c.txt", "sub"]

    def test_directory_created_parent_first(self, observer, listener, root):
        """Test that a new tree is reported from the top down."""
        (root / "new" / "deep").mkdir(parents=True)
        (root / "new" / "deep" / "leaf.txt").write_text("leaf")

        observer.check_and_notify()

        assert listener.events == [
            FileChangeEvent(ChangeType.CREATED, root / "new", True),
            FileChangeEvent(ChangeType.CREATED, root / "new" / "deep", True),
            FileChangeEvent(ChangeType.CREATED, root / "new" / "deep" / "leaf.txt", False),
        ]

    def test_file_changed(self, observer, listener, root):
        """Test detection of a modified file."""
        (root / "a.txt").write_text("longer content")

        observer.check_and_notify()

        assert listener.changed_files == [root / "a.txt"]
        assert listener.created_files == []
        assert listener.deleted_files == []

    def test_file_touched(self, observer, listener, root):
        """Test that a modification time change alone is reported."""
        set_past_mtime(root / "a.txt", 1000)

        observer.check_and_notify()

        assert listener.changed_files == [root / "a.txt"]

    def test_directory_change_reported_before_children(self, observer, listener, root):
        """Test that a changed directory is reported before changes inside it."""
        (root / "sub" / "c.txt").write_text("c")

        observer.check_and_notify()

        assert listener.events == [
            FileChangeEvent(ChangeType.CHANGED, root / "sub", True),
            FileChangeEvent(ChangeType.CREATED, root / "sub" / "c.txt", False),
        ]

    def test_file_deleted(self, observer, listener, root):
        """Test detection of a deleted file."""
        (root / "a.txt").unlink()

        observer.check_and_notify()

        assert listener.deleted_files == [root / "a.txt"]
        assert [child.name for child in observer.root_entry.children] == ["sub"]

    def test_directory_deleted_children_first(self, observer, listener, root):
        """Test that a removed tree is reported from the bottom up."""
        shutil.rmtree(root / "sub")

        observer.check_and_notify()

        assert listener.events == [
            FileChangeEvent(ChangeType.DELETED, root / "sub" / "b.txt", False),
            FileChangeEvent(ChangeType.DELETED, root / "sub", True),
        ]

    def test_each_change_reported_once(self, observer, listener, root):
        """Test that the snapshot is updated after reporting."""
        (root / "c.txt").write_text("c")
        (root / "a.txt").unlink()

        observer.check_and_notify()
        observer.check_and_notify()

        assert listener.created_files == [root / "c.txt"]
        assert listener.deleted_files == [root / "a.txt"]

    def test_file_replaced_by_directory(self, observer, listener, root):
        """Test that a type change is reported as a change of the new type."""
        (root / "a.txt").unlink()
        (root / "a.txt").mkdir()

        observer.check_and_notify()

        assert listener.changed_directories == [root / "a.txt"]
        assert listener.deleted_files == []

    def test_root_deleted(self, observer, listener, root):
        """Test that deleting the observed directory reports every entry once."""
        shutil.rmtree(root)

        observer.check_and_notify()
        observer.check_and_notify()

        assert listener.deleted_files == [root / "a.txt", root / "sub" / "b.txt"]
        assert listener.deleted_directories == [root / "sub"]
        assert observer.root_entry.children == ()

    def test_root_deleted_then_recreated(self, observer, listener, root):
        """Test that a reappearing root is reported from scratch."""
        shutil.rmtree(root)
        observer.check_and_notify()

        root.mkdir()
        (root / "a.txt").write_text("again")
        observer.check_and_notify()

        assert listener.deleted_files == [root / "a.txt", root / "sub" / "b.txt"]
        assert listener.created_files == [root / "a.txt"]
        assert [child.name for child in observer.root_entry.children] == ["a.txt"]

    def test_late_root_deleted_and_recreated(self, tmp_path, listener):
        """Test a root created after initialize, then deleted and created again."""
        root = tmp_path / "later"
        observer = FileAlterationObserver(root)
        observer.add_listener(listener)
        observer.initialize()

        root.mkdir()
        (root / "x.txt").write_text("x")
        observer.check_and_notify()
        assert listener.created_files == [root / "x.txt"]

        shutil.rmtree(root)
        observer.check_and_notify()
        assert listener.deleted_files == [root / "x.txt"]
        assert observer.root_entry.children == ()

        root.mkdir()
        (root / "x.txt").write_text("x")
        observer.check_and_notify()
        assert listener.created_files == [root / "x.txt", root / "x.txt"]

    def test_root_missing_then_created(self, tmp_path, listener):
        """Test observing a directory that does not exist yet."""
        root = tmp_path / "later"
        observer = FileAlterationObserver(root)
        observer.add_listener(listener)
        observer.initialize()

        observer.check_and_notify()
        assert listener.event_count == 0

        root.mkdir()
        (root / "x.txt").write_text("x")
        observer.check_and_notify()

        assert listener.created_files == [root / "x.txt"]

    def test_filter_hides_entries(self, root, listener):
        """Test that filtered paths are never observed."""
        observer = FileAlterationObserver(root, file_filter=SuffixFileFilter(".txt") | (lambda p: p.is_dir()))
        observer.add_listener(listener)
        observer.initialize()

        (root / "ignored.log").write_text("log")
        (root / "seen.txt").write_text("txt")
        observer.check_and_notify()

        assert listener.created_files == [root / "seen.txt"]

    def test_failing_filter_rejects_path(self, root, listener):
        """Test that a filter raising an error rejects the path."""

        def fragile_filter(path):
            if path.name == "bad.txt":
                raise RuntimeError("boom")
            return True

        observer = FileAlterationObserver(root, file_filter=fragile_filter)
        observer.add_listener(listener)
        observer.initialize()

        (root / "bad.txt").write_text("bad")
        (root / "good.txt").write_text("good")
        observer.check_and_notify()

        assert listener.created_files == [root / "good.txt"]

    def test_case_insensitive_rename_is_not_a_change(self, root, listener):
        """Test that a case-only rename matches under an insensitive policy."""
        observer = FileAlterationObserver(root, case_sensitivity=IOCase.INSENSITIVE)
        observer.add_listener(listener)
        observer.initialize()

        (root / "a.txt").rename(root / "A.txt")
        observer.check_and_notify()

        assert listener.created_files == []
        assert listener.deleted_files == []

    def test_case_insensitive_rename_reports_new_path(self, root, listener):
        """Test that later events use the path seen in the latest listing."""
        observer = FileAlterationObserver(root, case_sensitivity=IOCase.INSENSITIVE)
        observer.add_listener(listener)
        observer.initialize()

        (root / "a.txt").rename(root / "A.txt")
        observer.check_and_notify()
        (root / "A.txt").unlink()
        observer.check_and_notify()

        assert observer.root_entry.children[0].name == "sub"
        assert listener.deleted_files == [root / "A.txt"]

    def test_matched_entry_vanishing_on_refresh(self, root, listener):
        """Test that a listed path that cannot be read at refresh is reported as deleted."""
        vanished = set()

        class FlakyEntry(FileEntry):
            def refresh(self, file=None):
                target = self.file if file is None else file
                if target.name in vanished:
                    changed = self.exists
                    self.exists = False
                    return changed
                return super().refresh(file)

        observer = FileAlterationObserver(FlakyEntry(root))
        observer.add_listener(listener)
        observer.initialize()

        vanished.add("a.txt")
        observer.check_and_notify()

        assert listener.deleted_files == [root / "a.txt"]
        assert listener.changed_files == []
        assert [child.name for child in observer.root_entry.children] == ["sub"]

        vanished.clear()
        observer.check_and_notify()

        assert listener.created_files == [root / "a.txt"]

    def test_case_sensitive_rename(self, observer, listener, root):
        """Test that a case-only rename is a delete plus a create under a sensitive policy."""
        (root / "a.txt").rename(root / "A.txt")

        observer.check_and_notify()

        assert listener.created_files == [root / "A.txt"]
        assert listener.deleted_files == [root / "a.txt"]

    def test_custom_comparator(self, root, listener):
        """Test diffing with a reversed name order."""
        observer = FileAlterationObserver(root, comparator=NAME_REVERSE)
        observer.add_listener(listener)
        observer.initialize()

        assert [child.name for child in observer.root_entry.children] == ["sub", "a.txt"]

        (root / "b.txt").write_text("b")
        (root / "a.txt").unlink()
        observer.check_and_notify()

        assert listener.created_files == [root / "b.txt"]
        assert listener.deleted_files == [root / "a.txt"]
        assert [child.name for child in observer.root_entry.children] == ["sub", "b.txt"]

    def test_custom_root_entry(self, root, listener):
        """Test that a prepared root entry type is used for the whole tree."""

        class TaggedEntry(FileEntry):
            pass

        observer = FileAlterationObserver(TaggedEntry(root))
        observer.initialize()

        assert all(type(child) is TaggedEntry for child in observer.root_entry.children)

    def test_failing_listener_is_isolated(self, observer, listener, root):
        """Test that one failing listener does not starve the others."""
        failing = Mock()
        failing.on_file_create.side_effect = RuntimeError("listener failed")
        late = CollectingFileListener()
        observer.add_listener(failing)
        observer.add_listener(late)

        (root / "c.txt").write_text("c")
        observer.check_and_notify()

        assert listener.created_files == [root / "c.txt"]
        assert late.created_files == [root / "c.txt"]
        assert late.passes == 1

    def test_internal_error_is_logged(self, root, listener, caplog):
        """Test that a failing pass is logged and still completes."""
        broken = {"enabled": False}

        def comparator(file1, file2):
            if broken["enabled"]:
                raise RuntimeError("comparator failed")
            return (file1.name > file2.name) - (file1.name < file2.name)

        observer = FileAlterationObserver(root, comparator=comparator)
        observer.add_listener(listener)
        observer.initialize()

        broken["enabled"] = True
        observer.check_and_notify()

        assert listener.passes == 1
        assert "comparator failed" in caplog.text

    def test_listener_registry(self, observer, listener):
        """Test adding and removing listeners."""
        other = CollectingFileListener()

        observer.add_listener(None)
        observer.add_listener(other)
        observer.add_listener(other)
        assert observer.listeners == (listener, other, other)

        observer.remove_listener(other)
        observer.remove_listener(None)
        assert observer.listeners == (listener,)

    def test_from_config(self, root, listener):
        """Test building an observer from configuration."""
        config = MonitorConfig(_env_file=None, ignored_patterns=["*.tmp"], case_sensitivity="insensitive")
        observer = FileAlterationObserver.from_config(root, config)
        observer.add_listener(listener)
        observer.initialize()

        (root / "scratch.TMP").write_text("x")
        (root / "kept.txt").write_text("x")
        observer.check_and_notify()

        assert listener.created_files == [root / "kept.txt"]
        assert observer.file_filter is not None
        assert "root" in repr(observer)

    def test_destroy_is_harmless(self, observer):
        """Test that destroy can be called repeatedly."""
        observer.destroy()
        observer.destroy()
