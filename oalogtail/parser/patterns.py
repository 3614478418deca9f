"""Regex patterns for WinCC OA log lines.

Single source of truth for every line shape the reassembler recognizes.
"""

import re

# Timestamp as written by the runtime: "2025.11.16 18:56:26.972"
TIMESTAMP_PATTERN = re.compile(r"\d{4}\.\d{2}\.\d{2}\s+\d{2}:\d{2}:\d{2}\.\d{3}")

# Main line:
# "WCCOActrl    (4), 2025.11.16 18:56:26.972, CTRL, WARNING,     5, this is a warning"
# "WCCILdata    (0), 2025.11.16 18:56:27.001, SYS,  INFO,     12/ctrl, message"
MAIN_LINE_PATTERN = re.compile(
    r"^(?P<identifier>\w+)\s+\((?P<num>\d+)\),\s+"
    r"(?P<timestamp>" + TIMESTAMP_PATTERN.pattern + r"),\s+"
    r"(?P<scope>\w+),\s+"
    r"(?P<severity>\w+),\s+"
    r"(?P<msgnum>\d+(?:/\w+)?),\s*"
    r"(?P<message>.*)$"
)

# Stacktrace frame: "1: void myFunction() at c:/path/to/file.ctl:22"
STACKTRACE_ENTRY_PATTERN = re.compile(r"^(\d+):\s+(.+?)\s+at\s+(.+):(\d+)$")

# Inline syntax error: "Syntax error, '}' unexpected, /path/to/file.ctl,   Line: 29"
SYNTAX_ERROR_PATTERN = re.compile(r"^(.+?),\s*(.+?),\s*([^,]+),\s*Line:\s*(\d+)")

# Leading line number of a "Line:" continuation: "22" or "22, variableName"
LINE_NUMBER_PATTERN = re.compile(r"^(\d+)")
