"""oalogtail: Follow WinCC OA runtime logs as structured events."""

from importlib.metadata import version

from oalogtail.config import TailerConfig
from oalogtail.filters import EventFilter
from oalogtail.models import LogEvent
from oalogtail.models import LogMetadata
from oalogtail.models import LogSeverity
from oalogtail.models import StacktraceEntry
from oalogtail.parser import EventReassembler
from oalogtail.parser import make_generic_event
from oalogtail.parser import parse_log_file
from oalogtail.parser import parse_log_text
from oalogtail.tailer import GrowthSource
from oalogtail.tailer import LogTailer

__version__ = version("oalogtail")

__all__ = [
    "EventFilter",
    "EventReassembler",
    "GrowthSource",
    "LogEvent",
    "LogMetadata",
    "LogSeverity",
    "LogTailer",
    "StacktraceEntry",
    "TailerConfig",
    "make_generic_event",
    "parse_log_file",
    "parse_log_text",
]
