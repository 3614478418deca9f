"""Centralized constants for oalogtail.

This module consolidates configuration constants and literal tokens
used across multiple modules to ensure consistency.
"""

# =============================================================================
# Watched Files
# =============================================================================

#: Name of the structured WinCC OA runtime log inside the log directory
PRIMARY_LOG_FILE_NAME: str = "PVSS_II.log"

#: Extension of files picked up by the directory inventory and the watcher
LOG_FILE_SUFFIX: str = ".log"

#: Name of the log directory below a project workspace
WORKSPACE_LOG_DIR_NAME: str = "log"

#: Longest unterminated trailing fragment carried to the next read; a longer
#: fragment is dispatched as a complete line
MAX_PARTIAL_LINE_BYTES: int = 64 * 1024

# =============================================================================
# Event Tokens
# =============================================================================

#: Identifier assigned to events wrapped from non-primary log files
GENERIC_IDENTIFIER: str = "GENERIC"

#: Scope assigned to events wrapped from non-primary log files
GENERIC_SCOPE: str = "OTHER"

#: Scope used when a reassembled event carries no scope token
UNKNOWN_SCOPE: str = "UNKNOWN"

#: Literal continuation line that opens a stacktrace block
STACKTRACE_HEADER: str = "Stacktrace:"

#: strftime format matching the runtime's "YYYY.MM.DD HH:mm:ss" prefix;
#: milliseconds are appended separately
TIMESTAMP_FORMAT: str = "%Y.%m.%d %H:%M:%S"

# =============================================================================
# Logging
# =============================================================================

#: Log level used by the CLI when none is given
DEFAULT_LOG_LEVEL: str = "WARNING"

#: Log levels accepted by configuration and the CLI
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")
