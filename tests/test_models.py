"""Tests for log event data models."""

import json

import pytest

from oalogtail.models import LogEvent
from oalogtail.models import LogMetadata
from oalogtail.models import LogSeverity
from oalogtail.models import StacktraceEntry


class TestLogSeverity:
    """Tests for LogSeverity.normalize."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("INFO", LogSeverity.INFO),
            ("warning", LogSeverity.WARNING),
            ("Error", LogSeverity.ERROR),
            ("SEVERE", LogSeverity.SEVERE),
            ("debug", LogSeverity.DEBUG),
            (" INFO ", LogSeverity.INFO),
        ],
    )
    def test_known_tokens(self, token: str, expected: LogSeverity) -> None:
        """Test known tokens match case-insensitively."""
        assert LogSeverity.normalize(token) == expected

    @pytest.mark.parametrize("token", ["FATAL", "WARN", "", None, "OTHERX"])
    def test_unknown_tokens(self, token: str | None) -> None:
        """Test unknown, empty and missing tokens map to OTHER."""
        assert LogSeverity.normalize(token) == LogSeverity.OTHER


class TestLogMetadata:
    """Tests for the LogMetadata dataclass."""

    def test_is_empty(self) -> None:
        """Test an all-None metadata is empty."""
        assert LogMetadata().is_empty

    def test_empty_stacktrace_is_not_empty(self) -> None:
        """Test an empty stacktrace counts as populated."""
        assert not LogMetadata(stacktrace=()).is_empty

    def test_to_dict_only_populated(self) -> None:
        """Test to_dict omits unset fields."""
        assert LogMetadata(script="foo.ctl", line=10).to_dict() == {
            "script": "foo.ctl",
            "line": 10,
        }


class TestLogEvent:
    """Tests for the LogEvent dataclass."""

    def test_frozen(self) -> None:
        """Test events cannot be modified after creation."""
        event = LogEvent("WCCOActrl", "2025.11.16 18:56:26.972", "CTRL", LogSeverity.INFO, "m")
        with pytest.raises(AttributeError):
            event.message = "changed"  # type: ignore[misc]

    def test_to_dict_is_json_serializable(self) -> None:
        """Test the dictionary form round-trips through json."""
        event = LogEvent(
            identifier="WCCOActrl",
            timestamp="2025.11.16 18:56:26.972",
            scope="CTRL",
            severity=LogSeverity.SEVERE,
            message="boom",
            metadata=LogMetadata(
                stacktrace=(StacktraceEntry(1, "void f()", "a.ctl", 5),),
            ),
            raw_lines=("main", "Stacktrace:", "1: void f() at a.ctl:5"),
        )
        data = json.loads(json.dumps(event.to_dict()))

        assert data["severity"] == "SEVERE"
        assert data["raw_lines"] == ["main", "Stacktrace:", "1: void f() at a.ctl:5"]
        assert data["metadata"] == {
            "stacktrace": [
                {"index": 1, "function_name": "void f()", "file_path": "a.ctl", "line": 5}
            ]
        }

    def test_to_dict_without_metadata(self) -> None:
        """Test metadata key is absent when there is none."""
        event = LogEvent("X", "t", "CTRL", LogSeverity.INFO, "m", raw_lines=("line",))
        assert "metadata" not in event.to_dict()
