"""Multi-line event reassembly for PVSS_II.log."""

import logging
from dataclasses import dataclass
from dataclasses import field

from oalogtail.constants import STACKTRACE_HEADER
from oalogtail.constants import UNKNOWN_SCOPE
from oalogtail.models import LogEvent
from oalogtail.models import LogMetadata
from oalogtail.models import LogSeverity
from oalogtail.models import StacktraceEntry

# Import regex patterns from patterns module (single source of truth)
from oalogtail.parser.patterns import LINE_NUMBER_PATTERN
from oalogtail.parser.patterns import MAIN_LINE_PATTERN
from oalogtail.parser.patterns import STACKTRACE_ENTRY_PATTERN
from oalogtail.parser.patterns import SYNTAX_ERROR_PATTERN

logger = logging.getLogger(__name__)

SYNTAX_ERROR_MARKER = "syntax error"


@dataclass
class EventDraft:
    """Mutable working state of the event currently being reassembled.

    A draft is opened by a main line and enriched by every continuation
    line until the next main line (or a flush) finalizes it.
    """

    identifier: str
    timestamp: str
    scope: str
    severity: LogSeverity
    message: str
    raw_lines: list[str] = field(default_factory=list)
    script: str | None = None
    library: str | None = None
    line: int | None = None
    stacktrace: list[StacktraceEntry] | None = None
    raw: list[str] | None = None
    in_stacktrace: bool = False
    syntax_error_reformatted: bool = False

    def apply_syntax_error(self, text: str) -> bool:
        """Split an inline syntax error into message, library and line.

        Only the first matching text reformats the draft.

        Args:
            text: Trimmed text of the shape "TYPE, DETAIL, PATH, Line: N".

        Returns:
            True if the text matched and the draft was reformatted.
        """
        if self.syntax_error_reformatted:
            return False
        match = SYNTAX_ERROR_PATTERN.match(text)
        if match is None:
            return False
        error_type, detail, path, line = match.groups()
        self.message = f"{error_type.strip()}, {detail.strip()}"
        self.library = path.strip()
        self.line = int(line)
        self.syntax_error_reformatted = True
        return True

    def append_raw(self, text: str) -> None:
        if self.raw is None:
            self.raw = []
        self.raw.append(text)

    def metadata(self) -> LogMetadata | None:
        """Build the immutable metadata, or None if nothing was collected."""
        metadata = LogMetadata(
            script=self.script,
            library=self.library,
            line=self.line,
            stacktrace=tuple(self.stacktrace) if self.stacktrace is not None else None,
            raw="\n".join(self.raw) if self.raw is not None else None,
        )
        return None if metadata.is_empty else metadata

    def to_event(self) -> LogEvent:
        return LogEvent(
            identifier=self.identifier,
            timestamp=self.timestamp,
            scope=self.scope or UNKNOWN_SCOPE,
            severity=self.severity,
            message=self.message,
            metadata=self.metadata(),
            raw_lines=tuple(self.raw_lines),
        )


def parse_main_line(line: str) -> EventDraft | None:
    """Open a draft from a main line.

    Format:
        WCCOActrl    (4), 2025.11.16 18:56:26.972, CTRL, WARNING,     5, a warning

    Args:
        line: Physical line without its line terminator.

    Returns:
        A new draft holding only the main line, or None if the line does
        not have the main-line shape.
    """
    match = MAIN_LINE_PATTERN.match(line)
    if match is None:
        return None

    draft = EventDraft(
        identifier=match.group("identifier").strip(),
        timestamp=match.group("timestamp").strip(),
        scope=match.group("scope").strip(),
        severity=LogSeverity.normalize(match.group("severity")),
        message=match.group("message").strip(),
        raw_lines=[line],
    )
    # Some runtimes put the whole syntax error on the main line
    if SYNTAX_ERROR_MARKER in draft.message.lower():
        draft.apply_syntax_error(draft.message)
    return draft


class EventReassembler:
    """
    Reassembles LogEvents from the physical lines of one PVSS_II.log.

    The format has no end-of-event marker: an event is known to be complete
    only when the next main line arrives or the stream ends. The reassembler
    therefore always runs one event behind. ``consume_line`` returns the
    previous event when a new one starts, and ``flush`` returns the last one.

    Continuation lines may carry:
        - Script: <name>
        - Library: <path>
        - Line: <number>[, <variable>]
        - Stacktrace: followed by "INDEX: FUNCTION at PATH:LINE" frames
        - An inline syntax error "TYPE, DETAIL, PATH, Line: N"
    Anything else is kept as raw text.
    """

    def __init__(self) -> None:
        self._draft: EventDraft | None = None

    @property
    def has_open_event(self) -> bool:
        """True while an event is being built."""
        return self._draft is not None

    def consume_line(self, line: str) -> LogEvent | None:
        """Consume one physical line.

        Args:
            line: Log line; a trailing line terminator is ignored.

        Returns:
            The previously open event if this line starts a new one,
            None otherwise.
        """
        line = line.rstrip("\r\n")

        draft = parse_main_line(line)
        if draft is not None:
            completed = self._finalize()
            self._draft = draft
            return completed

        if self._draft is None:
            # Not a continuation of anything
            return None

        self._draft.raw_lines.append(line)
        self._apply_continuation(self._draft, line.strip())
        return None

    def flush(self) -> LogEvent | None:
        """Finalize and return the open event at end of stream."""
        return self._finalize()

    def reset(self) -> None:
        """Drop any open event without emitting it."""
        self._draft = None

    def _apply_continuation(self, draft: EventDraft, trimmed: str) -> None:
        if trimmed == STACKTRACE_HEADER:
            draft.in_stacktrace = True
            draft.stacktrace = []
            return

        if draft.in_stacktrace and draft.stacktrace is not None:
            if match := STACKTRACE_ENTRY_PATTERN.match(trimmed):
                index, function_name, file_path, line = match.groups()
                draft.stacktrace.append(
                    StacktraceEntry(
                        index=int(index),
                        function_name=function_name.strip(),
                        file_path=file_path.strip(),
                        line=int(line),
                    )
                )
            else:
                logger.debug("Ignoring non-frame line in stacktrace: %r", trimmed)
            return

        if SYNTAX_ERROR_MARKER in draft.message.lower() and draft.apply_syntax_error(trimmed):
            return

        if trimmed.startswith("Script:"):
            draft.script = trimmed[len("Script:") :].strip()
        elif trimmed.startswith("Library:"):
            draft.library = trimmed[len("Library:") :].strip()
        elif trimmed.startswith("Line:"):
            # "Line: 22, variableName" - the variable name is not kept
            if match := LINE_NUMBER_PATTERN.match(trimmed[len("Line:") :].strip()):
                draft.line = int(match.group(1))
        elif trimmed:
            draft.append_raw(trimmed)

    def _finalize(self) -> LogEvent | None:
        draft, self._draft = self._draft, None
        if draft is None:
            return None
        if not draft.identifier:
            logger.debug("Discarding event without identifier: %r", draft.raw_lines[:1])
            return None
        return draft.to_event()
