"""Whole-file parsing and generic log line wrapping."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from oalogtail.constants import GENERIC_IDENTIFIER
from oalogtail.constants import GENERIC_SCOPE
from oalogtail.constants import TIMESTAMP_FORMAT
from oalogtail.models import LogEvent
from oalogtail.models import LogMetadata
from oalogtail.models import LogSeverity
from oalogtail.parser.line_parser import EventReassembler
from oalogtail.state.clock import get_clock

if TYPE_CHECKING:
    from oalogtail.state.clock import Clock

logger = logging.getLogger(__name__)


def format_log_timestamp(timestamp: float) -> str:
    """
    Format a Unix timestamp the way the runtime writes timestamps.

    Args:
        timestamp: Unix timestamp (seconds since epoch).

    Returns:
        Local time string like "2025.11.16 18:56:26.972".
    """
    millis = int(round((timestamp % 1) * 1000))
    seconds = int(timestamp)
    if millis == 1000:
        seconds += 1
        millis = 0
    return f"{time.strftime(TIMESTAMP_FORMAT, time.localtime(seconds))}.{millis:03d}"


def parse_log_text(content: str) -> list[LogEvent]:
    """
    Parse the complete text of a PVSS_II.log.

    Args:
        content: File content.

    Returns:
        Events in file order, including the last (flushed) event.
    """
    reassembler = EventReassembler()
    events: list[LogEvent] = []

    for line in content.splitlines():
        if event := reassembler.consume_line(line):
            events.append(event)

    if event := reassembler.flush():
        events.append(event)
    return events


def parse_log_file(log_path: Path) -> list[LogEvent]:
    """
    Parse an existing PVSS_II.log from disk.

    Args:
        log_path: Path to the log file.

    Returns:
        Events in file order.

    Raises:
        OSError: If the file cannot be read.
    """
    content = log_path.read_text(encoding="utf-8", errors="replace")
    events = parse_log_text(content)
    logger.debug("Parsed %d events from %s", len(events), log_path)
    return events


def make_generic_event(
    line: str,
    file_name: str,
    clock: Clock | None = None,
) -> LogEvent | None:
    """
    Wrap one line of a non-primary log file as a minimal event.

    Other log files in the directory have no known structure, so every
    non-blank line becomes its own event stamped with the time it was read.

    Args:
        line: The physical line.
        file_name: Name of the file the line came from.
        clock: Time source; defaults to the global clock.

    Returns:
        The event, or None for a blank line.
    """
    if not line.strip():
        return None

    clock = clock or get_clock()
    return LogEvent(
        identifier=GENERIC_IDENTIFIER,
        timestamp=format_log_timestamp(clock.now()),
        scope=GENERIC_SCOPE,
        severity=LogSeverity.OTHER,
        message=line,
        metadata=LogMetadata(raw=file_name),
        raw_lines=(line,),
    )
