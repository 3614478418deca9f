"""Rich rendering of log events for the terminal."""

import json
import threading

from rich.console import Console
from rich.text import Text

from oalogtail.filters import EventFilter
from oalogtail.models import LogEvent
from oalogtail.models import LogMetadata
from oalogtail.models import LogSeverity

SEVERITY_STYLES: dict[LogSeverity, str] = {
    LogSeverity.SEVERE: "bold white on red",
    LogSeverity.ERROR: "bold red",
    LogSeverity.WARNING: "yellow",
    LogSeverity.INFO: "#26a8e0",
    LogSeverity.DEBUG: "bright_black",
    LogSeverity.OTHER: "dim",
}

METADATA_INDENT = "    "


def metadata_lines(metadata: LogMetadata | None) -> list[str]:
    """
    Describe an event's metadata as indented detail lines.

    Args:
        metadata: Metadata to describe.

    Returns:
        One string per detail, in display order.
    """
    if metadata is None:
        return []

    lines: list[str] = []
    if metadata.script is not None:
        lines.append(f"script: {metadata.script}")
    if metadata.library is not None:
        location = metadata.library
        if metadata.line is not None:
            location = f"{location}:{metadata.line}"
        lines.append(f"library: {location}")
    elif metadata.line is not None:
        lines.append(f"line: {metadata.line}")
    if metadata.stacktrace is not None:
        lines.append("stacktrace:")
        for entry in metadata.stacktrace:
            lines.append(
                f"  {entry.index}: {entry.function_name} at {entry.file_path}:{entry.line}"
            )
    if metadata.raw is not None:
        lines.extend(metadata.raw.splitlines())
    return lines


def format_event(event: LogEvent) -> Text:
    """Build the styled terminal representation of one event."""
    text = Text()
    text.append(f"{event.timestamp} ", style="dim")
    text.append(f"{event.severity.value:<7}", style=SEVERITY_STYLES[event.severity])
    text.append(" ")
    text.append(event.identifier, style="bold")
    text.append(f" [{event.scope}] ", style="cyan")
    text.append(event.message)
    for detail in metadata_lines(event.metadata):
        text.append(f"\n{METADATA_INDENT}{detail}", style="dim")
    return text


class EventPrinter:
    """
    Event sink that prints matching events to a console.

    Attributes:
        console: Output console.
        event_filter: Events not matching the filter are skipped.
        as_json: Print one JSON object per line instead of styled text.
        printed: Number of events printed so far.
    """

    def __init__(
        self,
        console: Console,
        event_filter: EventFilter | None = None,
        as_json: bool = False,
    ) -> None:
        self.console = console
        self.event_filter = event_filter or EventFilter()
        self.as_json = as_json
        self.printed = 0
        self._lock = threading.Lock()

    def __call__(self, event: LogEvent) -> None:
        if not self.event_filter.matches(event):
            return
        # Events for different files may arrive from different threads
        with self._lock:
            if self.as_json:
                self.console.out(json.dumps(event.to_dict()), highlight=False)
            else:
                self.console.print(format_event(event))
            self.printed += 1
