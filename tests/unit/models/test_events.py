"""Unit tests for change event records."""

from pathlib import Path

from polling_monitor.models import ChangeType, FileChangeEvent


class TestFileChangeEvent:
    """Test cases for FileChangeEvent."""

    def test_create_event(self):
        """Test creating a file change event."""
        event = FileChangeEvent("created", "/test/file.md")

        assert event.change_type is ChangeType.CREATED
        assert event.file_path == Path("/test/file.md")
        assert event.is_directory is False
        assert event.timestamp > 0

    def test_event_string_representation(self):
        """Test string representation of event."""
        event = FileChangeEvent(ChangeType.DELETED, Path("/test/docs"), is_directory=True)

        assert str(event) == "FileChangeEvent(deleted directory: /test/docs)"

    def test_equality_ignores_timestamp(self):
        """Test that events describing the same change compare equal."""
        first = FileChangeEvent(ChangeType.CHANGED, Path("/a"))
        second = FileChangeEvent(ChangeType.CHANGED, Path("/a"))
        second.timestamp = first.timestamp + 10

        assert first == second
        assert hash(first) == hash(second)
        assert first != FileChangeEvent(ChangeType.CHANGED, Path("/a"), is_directory=True)
