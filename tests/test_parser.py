"""Tests for whole-file parsing and generic log lines."""

import time
from pathlib import Path

import pytest

from oalogtail.models import LogSeverity
from oalogtail.parser import TIMESTAMP_PATTERN
from oalogtail.parser import format_log_timestamp
from oalogtail.parser import make_generic_event
from oalogtail.parser import parse_log_file
from oalogtail.parser import parse_log_text
from oalogtail.state.clock import FrozenClock
from tests.conftest import make_main_line


class TestParseLogText:
    """Tests for parse_log_text function."""

    def test_empty(self) -> None:
        """Test parsing empty content."""
        assert parse_log_text("") == []

    def test_sample_content(self, sample_log_content: str) -> None:
        """Test all events, including the last one, are returned in order."""
        events = parse_log_text(sample_log_content)

        assert [e.message for e in events] == [
            "this is a warning",
            "Uninitialized variable",
            "Manager started",
        ]
        assert events[0].metadata is not None
        assert events[0].metadata.script == "foo.ctl"
        assert events[0].metadata.line == 10
        assert events[1].metadata is not None
        assert events[1].metadata.stacktrace is not None
        assert len(events[1].metadata.stacktrace) == 2
        assert events[2].identifier == "WCCILdata"
        assert events[2].metadata is None

    def test_crlf_content(self) -> None:
        """Test Windows line endings."""
        content = make_main_line("one") + "\r\n    Script: a.ctl\r\n" + make_main_line("two")
        events = parse_log_text(content)
        assert [e.message for e in events] == ["one", "two"]
        assert events[0].raw_lines == (make_main_line("one"), "    Script: a.ctl")

    def test_leading_garbage(self) -> None:
        """Test lines before the first main line are ignored."""
        content = "partial line from before\n" + make_main_line("one")
        events = parse_log_text(content)
        assert len(events) == 1
        assert events[0].raw_lines == (make_main_line("one"),)


class TestParseLogFile:
    """Tests for parse_log_file function."""

    def test_reads_file(self, tmp_path: Path, sample_log_content: str) -> None:
        """Test parsing a log file from disk."""
        log_file = tmp_path / "PVSS_II.log"
        log_file.write_text(sample_log_content, encoding="utf-8")
        events = parse_log_file(log_file)
        assert len(events) == 3

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises OSError."""
        with pytest.raises(OSError):
            parse_log_file(tmp_path / "nonexistent.log")


class TestMakeGenericEvent:
    """Tests for make_generic_event function."""

    def test_wraps_line(self) -> None:
        """Test every field of a generic event."""
        clock = FrozenClock(1700000000.25)
        event = make_generic_event("something happened", "WCCOAui_1.log", clock)

        assert event is not None
        assert event.identifier == "GENERIC"
        assert event.scope == "OTHER"
        assert event.severity == LogSeverity.OTHER
        assert event.message == "something happened"
        assert event.metadata is not None
        assert event.metadata.raw == "WCCOAui_1.log"
        assert event.raw_lines == ("something happened",)
        assert event.timestamp == format_log_timestamp(1700000000.25)

    def test_blank_line(self) -> None:
        """Test blank lines produce no event."""
        assert make_generic_event("   ", "other.log", FrozenClock(0.0)) is None
        assert make_generic_event("", "other.log", FrozenClock(0.0)) is None


class TestFormatLogTimestamp:
    """Tests for format_log_timestamp function."""

    def test_format_shape(self) -> None:
        """Test the result has the runtime's timestamp shape."""
        assert TIMESTAMP_PATTERN.fullmatch(format_log_timestamp(time.time()))

    def test_milliseconds(self) -> None:
        """Test milliseconds are appended with three digits."""
        stamp = format_log_timestamp(1700000000.042)
        assert stamp.endswith(".042")
        expected_prefix = time.strftime("%Y.%m.%d %H:%M:%S", time.localtime(1700000000))
        assert stamp.startswith(expected_prefix)

    def test_rounding_carries_into_seconds(self) -> None:
        """Test 999.6ms rounds up to the next second."""
        stamp = format_log_timestamp(1700000000.9996)
        expected_prefix = time.strftime("%Y.%m.%d %H:%M:%S", time.localtime(1700000001))
        assert stamp == f"{expected_prefix}.000"
