"""Data models for WinCC OA log events."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LogSeverity(Enum):
    """Severity of a log event as written by the runtime."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SEVERE = "SEVERE"
    DEBUG = "DEBUG"
    OTHER = "OTHER"

    @classmethod
    def normalize(cls, token: str | None) -> "LogSeverity":
        """Map a raw severity token onto the enumeration.

        Matching is case-insensitive. Unknown, garbled or missing tokens
        map to OTHER.

        Args:
            token: Severity text captured from a log line.

        Returns:
            The matching severity, or OTHER.
        """
        if not token:
            return cls.OTHER
        try:
            return cls(token.strip().upper())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class StacktraceEntry:
    """
    One frame of a CTRL stacktrace.

    Attributes:
        index: Frame number as printed by the runtime (kept as given).
        function_name: Function signature, e.g. "void main()".
        file_path: Script or library path of the frame.
        line: Line number within file_path.
    """

    index: int
    function_name: str
    file_path: str
    line: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "function_name": self.function_name,
            "file_path": self.file_path,
            "line": self.line,
        }


@dataclass(frozen=True)
class LogMetadata:
    """
    Structured information collected from an event's continuation lines.

    Attributes:
        script: Script named by a "Script:" line.
        library: Library path from a "Library:" line or a syntax error.
        line: Source line number.
        stacktrace: Captured frames. An empty tuple means a stacktrace
            header was seen without any parsable frame.
        raw: Unrecognized continuation text, newline-joined in arrival order.
    """

    script: str | None = None
    library: str | None = None
    line: int | None = None
    stacktrace: tuple[StacktraceEntry, ...] | None = None
    raw: str | None = None

    @property
    def is_empty(self) -> bool:
        """True if no field carries a value."""
        return (
            self.script is None
            and self.library is None
            and self.line is None
            and self.stacktrace is None
            and self.raw is None
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize populated fields only."""
        data: dict[str, Any] = {}
        if self.script is not None:
            data["script"] = self.script
        if self.library is not None:
            data["library"] = self.library
        if self.line is not None:
            data["line"] = self.line
        if self.stacktrace is not None:
            data["stacktrace"] = [entry.to_dict() for entry in self.stacktrace]
        if self.raw is not None:
            data["raw"] = self.raw
        return data


@dataclass(frozen=True)
class LogEvent:
    """
    One logical occurrence reassembled from one or more physical lines.

    Attributes:
        identifier: Emitting manager, e.g. "WCCOActrl" or "WCCILdata".
        timestamp: Timestamp exactly as written ("YYYY.MM.DD HH:mm:ss.SSS").
        scope: Subsystem area, e.g. "CTRL", "SYS", "PARAM".
        severity: Normalized severity.
        message: Primary description, trimmed.
        metadata: Structured continuation data, None if there was none.
        raw_lines: Every physical line that produced this event, verbatim.
    """

    identifier: str
    timestamp: str
    scope: str
    severity: LogSeverity
    message: str
    metadata: LogMetadata | None = None
    raw_lines: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data: dict[str, Any] = {
            "identifier": self.identifier,
            "timestamp": self.timestamp,
            "scope": self.scope,
            "severity": self.severity.value,
            "message": self.message,
            "raw_lines": list(self.raw_lines),
        }
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data
