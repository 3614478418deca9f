"""Parser package for WinCC OA log files.

This package provides components for parsing PVSS_II.log and its siblings:

- EventReassembler: Line-by-line multi-line event reassembly
- EventDraft: Mutable state of the event being reassembled
- parse_log_text / parse_log_file: Whole-file parsing
- make_generic_event: Wrapping for unstructured log files
"""

from oalogtail.parser.core import format_log_timestamp
from oalogtail.parser.core import make_generic_event
from oalogtail.parser.core import parse_log_file
from oalogtail.parser.core import parse_log_text
from oalogtail.parser.line_parser import EventDraft
from oalogtail.parser.line_parser import EventReassembler
from oalogtail.parser.line_parser import parse_main_line
from oalogtail.parser.patterns import LINE_NUMBER_PATTERN
from oalogtail.parser.patterns import MAIN_LINE_PATTERN
from oalogtail.parser.patterns import STACKTRACE_ENTRY_PATTERN
from oalogtail.parser.patterns import SYNTAX_ERROR_PATTERN
from oalogtail.parser.patterns import TIMESTAMP_PATTERN

__all__ = [
    "EventDraft",
    "EventReassembler",
    "format_log_timestamp",
    "make_generic_event",
    "parse_log_file",
    "parse_log_text",
    "parse_main_line",
    # Patterns (for advanced usage)
    "LINE_NUMBER_PATTERN",
    "MAIN_LINE_PATTERN",
    "STACKTRACE_ENTRY_PATTERN",
    "SYNTAX_ERROR_PATTERN",
    "TIMESTAMP_PATTERN",
]
