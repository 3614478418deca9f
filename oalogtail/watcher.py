"""Directory change notifications backed by watchdog."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from watchdog.events import FileSystemEvent
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from oalogtail.constants import LOG_FILE_SUFFIX

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

    from oalogtail.types import GrowthCallback

logger = logging.getLogger(__name__)

#: Seconds to wait for the observer thread on stop
OBSERVER_JOIN_TIMEOUT: float = 2.0


class GrowthEventHandler(FileSystemEventHandler):
    """Forwards created, modified and moved-in log files to a callback.

    Both notification kinds are treated the same: the tailer decides from
    its own offsets whether anything new needs reading.
    """

    def __init__(self, callback: GrowthCallback, suffix: str = LOG_FILE_SUFFIX) -> None:
        super().__init__()
        self._callback = callback
        self._suffix = suffix

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._forward(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._forward(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # A log rotated into place arrives as a move onto the watched name
        if not event.is_directory and event.dest_path:
            self._forward(event.dest_path)

    def _forward(self, src_path: str | bytes) -> None:
        path = os.fsdecode(src_path)
        if path.endswith(self._suffix):
            self._callback(os.path.abspath(path))


class WatchdogGrowthSource:
    """
    GrowthSource watching one directory (non-recursively) with watchdog.

    Attributes:
        directory: Directory being watched.
        suffix: File name ending of forwarded files.
    """

    def __init__(
        self,
        directory: Path,
        suffix: str = LOG_FILE_SUFFIX,
        observer_factory: Callable[[], BaseObserver] = Observer,
    ) -> None:
        """
        Initialize the source.

        Args:
            directory: Directory to watch.
            suffix: Only files ending with this suffix are forwarded.
            observer_factory: Creates the watchdog observer (a polling
                observer can be passed for network shares).
        """
        self.directory = directory
        self.suffix = suffix
        self._observer_factory = observer_factory
        self._observer: BaseObserver | None = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self, callback: GrowthCallback) -> None:
        """Schedule the directory and start the observer thread.

        Raises:
            OSError: If the directory cannot be watched.
        """
        if self._observer is not None:
            return
        observer = self._observer_factory()
        observer.schedule(
            GrowthEventHandler(callback, self.suffix), str(self.directory), recursive=False
        )
        observer.start()
        self._observer = observer
        logger.debug("Watching %s for *%s changes", self.directory, self.suffix)

    def stop(self) -> None:
        """Stop the observer thread."""
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join(timeout=OBSERVER_JOIN_TIMEOUT)
        logger.debug("Stopped watching %s", self.directory)
