"""Tailer configuration and log directory resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from oalogtail.constants import DEFAULT_LOG_LEVEL
from oalogtail.constants import LOG_FILE_SUFFIX
from oalogtail.constants import LOG_LEVELS
from oalogtail.constants import PRIMARY_LOG_FILE_NAME
from oalogtail.constants import WORKSPACE_LOG_DIR_NAME
from oalogtail.exceptions import ConfigurationError
from oalogtail.exceptions import WatchDirectoryNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TailerConfig:
    """
    Settings for a LogTailer.

    Attributes:
        log_dir: Directory containing the runtime's log files.
        primary_log_name: Structured log routed through the reassembler.
        file_suffix: Extension of files to tail.
        log_level: Level for oalogtail's own diagnostics.
    """

    log_dir: Path
    primary_log_name: str = PRIMARY_LOG_FILE_NAME
    file_suffix: str = LOG_FILE_SUFFIX
    log_level: str = DEFAULT_LOG_LEVEL

    def validate(self) -> None:
        """
        Check the settings for consistency.

        Raises:
            ConfigurationError: If a setting is invalid.
        """
        if not self.primary_log_name.strip():
            raise ConfigurationError("primary_log_name", "Primary log file name must not be empty")
        if not self.file_suffix.startswith(".") or len(self.file_suffix) < 2:
            raise ConfigurationError(
                "file_suffix", f"File suffix must look like '.log', got '{self.file_suffix}'"
            )
        if not self.primary_log_name.endswith(self.file_suffix):
            raise ConfigurationError(
                "primary_log_name",
                f"Primary log '{self.primary_log_name}' does not end with '{self.file_suffix}'",
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                "log_level",
                f"Unknown log level '{self.log_level}' (expected one of {', '.join(LOG_LEVELS)})",
            )


def resolve_log_dir(path: Path | None = None, workspace: Path | None = None) -> Path:
    """
    Decide which directory to watch.

    An explicit path wins. Otherwise the ``log`` directory of the workspace
    (or of the current directory) is used, which is where a WinCC OA
    project keeps PVSS_II.log.

    Args:
        path: Explicitly configured log directory.
        workspace: Project directory containing a ``log`` directory.

    Returns:
        Absolute path of an existing directory.

    Raises:
        WatchDirectoryNotFoundError: If the resolved path is not a directory.
    """
    if path is not None:
        log_dir = path
        logger.info("Using configured log path %s", log_dir)
    else:
        log_dir = (workspace or Path.cwd()) / WORKSPACE_LOG_DIR_NAME
        logger.info("Using workspace-derived log path %s", log_dir)

    log_dir = log_dir.expanduser().absolute()
    if not log_dir.is_dir():
        raise WatchDirectoryNotFoundError(log_dir)
    return log_dir
