"""Incremental tailing of a WinCC OA log directory."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import TYPE_CHECKING
from typing import Protocol

from oalogtail.constants import LOG_FILE_SUFFIX
from oalogtail.constants import MAX_PARTIAL_LINE_BYTES
from oalogtail.constants import PRIMARY_LOG_FILE_NAME
from oalogtail.exceptions import WatchDirectoryNotFoundError
from oalogtail.exceptions import WatchStartError
from oalogtail.parser.core import make_generic_event
from oalogtail.parser.line_parser import EventReassembler
from oalogtail.state.clock import get_clock
from oalogtail.utils import FileIdentity
from oalogtail.utils import canonical_key
from oalogtail.utils import list_log_files
from oalogtail.utils import read_byte_range
from oalogtail.utils import split_complete_lines
from oalogtail.utils import stat_file

if TYPE_CHECKING:
    from oalogtail.config import TailerConfig
    from oalogtail.models import LogEvent
    from oalogtail.state.clock import Clock
    from oalogtail.types import EventSink
    from oalogtail.types import GrowthCallback

logger = logging.getLogger(__name__)


def _decode_line(raw: bytes, path: Path) -> str:
    """Decode one line as UTF-8, replacing invalid bytes."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning("Invalid UTF-8 in %s, replacing undecodable bytes: %s", path.name, e)
        return raw.decode("utf-8", errors="replace")


class GrowthSource(Protocol):
    """Source of "file created" / "file changed" notifications."""

    def start(self, callback: GrowthCallback) -> None:
        """Begin delivering absolute paths of grown files to ``callback``."""
        ...

    def stop(self) -> None:
        """Stop delivering notifications and release resources."""
        ...


@dataclass
class TrackedFile:
    """
    Tailing state of one file in the log directory.

    Attributes:
        path: Absolute path, case preserved.
        key: Canonical identity key.
        offset: Number of bytes already consumed.
        identity: Device/inode the offset refers to.
        partial: Bytes of an unterminated last line awaiting more data.
        reassembler: Event reassembler, created for the primary log only.
    """

    path: Path
    key: str
    offset: int
    identity: FileIdentity | None = None
    partial: bytes = b""
    reassembler: EventReassembler | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class LogTailer:
    """
    Turns a directory of growing log files into a stream of LogEvents.

    Content that exists when ``start`` is called is never parsed: the
    inventory records each file's size as its starting offset, and files
    first seen after start begin at their size on first notification.
    Only bytes appended afterwards reach the event sink.

    Lines of the primary log (PVSS_II.log) go through a per-file
    EventReassembler. Every other ``*.log`` file yields one generic event
    per non-blank line.

    Notifications for one file are handled one at a time; different files
    may be handled concurrently.

    Attributes:
        log_dir: Directory being tailed.
        primary_log_name: File name routed through the reassembler.
        file_suffix: Extension of tailed files.
    """

    def __init__(
        self,
        log_dir: Path,
        sink: EventSink,
        source: GrowthSource | None = None,
        clock: Clock | None = None,
        primary_log_name: str = PRIMARY_LOG_FILE_NAME,
        file_suffix: str = LOG_FILE_SUFFIX,
    ) -> None:
        """
        Initialize the tailer.

        Args:
            log_dir: Directory containing the log files.
            sink: Callback invoked once per completed event.
            source: Notification source subscribed on start. Without one,
                callers drive the tailer through ``handle_growth``.
            clock: Time source for generic event timestamps.
            primary_log_name: Name of the structured runtime log.
            file_suffix: Extension of files to tail.
        """
        self.log_dir = Path(os.path.abspath(log_dir))
        self.primary_log_name = primary_log_name
        self.file_suffix = file_suffix
        self._sink = sink
        self._source = source
        self._clock = clock or get_clock()

        self._lock = threading.Lock()
        self._files: dict[str, TrackedFile] = {}
        self._initialized = False
        self._paused = False
        # Incremented on stop so reads that finish afterwards are discarded
        self._generation = 0

    @classmethod
    def from_config(
        cls,
        config: TailerConfig,
        sink: EventSink,
        source: GrowthSource | None = None,
        clock: Clock | None = None,
    ) -> LogTailer:
        """Create a tailer from a validated configuration."""
        config.validate()
        return cls(
            config.log_dir,
            sink,
            source=source,
            clock=clock,
            primary_log_name=config.primary_log_name,
            file_suffix=config.file_suffix,
        )

    @property
    def is_running(self) -> bool:
        """True between a successful ``start`` and ``stop``."""
        return self._initialized

    @property
    def is_paused(self) -> bool:
        return self._paused

    def tracked_paths(self) -> list[Path]:
        """Paths of all tracked files, sorted."""
        with self._lock:
            return sorted(tracked.path for tracked in self._files.values())

    def offset_of(self, path: Path | str) -> int | None:
        """Recorded offset of a file, or None if it is not tracked."""
        with self._lock:
            tracked = self._files.get(canonical_key(path))
        return tracked.offset if tracked is not None else None

    def start(self) -> None:
        """
        Inventory the directory and begin accepting growth notifications.

        Raises:
            WatchDirectoryNotFoundError: If the log directory does not exist.
            WatchStartError: If the directory cannot be listed or the
                notification source fails to start.
        """
        if self._initialized:
            logger.debug("Tailer for %s already running", self.log_dir)
            return

        logger.info("Starting log tailer for %s", self.log_dir)
        files = self._inventory()
        with self._lock:
            self._files = files
            self._initialized = True
        logger.info("Inventoried %d log files in %s", len(files), self.log_dir)

        if self._source is not None:
            try:
                self._source.start(self.handle_growth)
            except OSError as e:
                self.stop()
                raise WatchStartError(self.log_dir, cause=e) from e

    def stop(self) -> None:
        """Stop tailing and forget all offsets and open events.

        Safe to call at any time. A later ``start`` performs a fresh inventory.
        """
        with self._lock:
            was_running = self._initialized
            self._initialized = False
            self._generation += 1
            self._files = {}
        if not was_running:
            return

        logger.info("Stopping log tailer for %s", self.log_dir)
        if self._source is not None:
            self._source.stop()

    def pause(self) -> None:
        """Stop emitting events; growth while paused is skipped for good."""
        logger.info("Pausing log tailer")
        self._paused = True

    def resume(self) -> None:
        """Resume emitting events for growth after this call."""
        logger.info("Resuming log tailer")
        self._paused = False

    def flush(self) -> None:
        """Emit every event still held open by a reassembler.

        A pending unterminated line is treated as complete first.
        """
        with self._lock:
            files = list(self._files.values())
        for tracked in files:
            with tracked.lock:
                self._flush_file(tracked)

    def handle_growth(self, path: str | os.PathLike[str]) -> None:
        """
        React to a "file created" or "file changed" notification.

        Never raises: failures are logged and the offset still advances.

        Args:
            path: Path of the file that changed.
        """
        if not self._initialized:
            logger.debug("Ignoring change of %s before start", path)
            return

        resolved = Path(os.path.abspath(path))
        if not resolved.name.endswith(self.file_suffix):
            return

        key = canonical_key(resolved)
        with self._lock:
            generation = self._generation
            tracked = self._files.get(key)
            if tracked is None:
                self._track_first_seen(resolved, key)
                return

        with tracked.lock:
            self._process_growth(tracked, generation)

    def __enter__(self) -> LogTailer:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _inventory(self) -> dict[str, TrackedFile]:
        if not self.log_dir.is_dir():
            raise WatchDirectoryNotFoundError(self.log_dir)
        try:
            paths = list_log_files(self.log_dir, self.file_suffix)
        except OSError as e:
            raise WatchStartError(self.log_dir, cause=e) from e

        files: dict[str, TrackedFile] = {}
        for path in paths:
            stat = stat_file(path)
            if stat is None:
                continue
            size, identity = stat
            key = canonical_key(path)
            files[key] = TrackedFile(path=path, key=key, offset=size, identity=identity)
            logger.debug("Initialized %s at offset %d", path.name, size)
        return files

    def _track_first_seen(self, path: Path, key: str) -> None:
        """Start tracking a file that appeared after start; its content is skipped."""
        stat = stat_file(path)
        if stat is None:
            return
        size, identity = stat
        self._files[key] = TrackedFile(path=path, key=key, offset=size, identity=identity)
        logger.debug("First-seen file %s, starting at offset %d", path.name, size)

    def _process_growth(self, tracked: TrackedFile, generation: int) -> None:
        stat = stat_file(tracked.path)
        if stat is None:
            logger.warning("Log file %s is no longer accessible", tracked.path)
            return
        size, identity = stat

        if tracked.identity is not None and identity != tracked.identity:
            logger.info("Log file %s was replaced, reading new file from start", tracked.path.name)
            self._flush_file(tracked)
            tracked.offset = 0
            tracked.identity = identity

        if size <= tracked.offset:
            logger.debug(
                "File %s did not grow (size %d, offset %d)", tracked.path.name, size, tracked.offset
            )
            return

        if self._paused:
            logger.debug("Paused, skipping %d bytes of %s", size - tracked.offset, tracked.path.name)
            tracked.offset = size
            tracked.partial = b""
            return

        start = tracked.offset
        try:
            data = read_byte_range(tracked.path, start, size)
        except OSError as e:
            logger.warning(
                "Failed to read bytes %d-%d of %s: %s", start, size, tracked.path, e
            )
            tracked.partial = b""
            return
        finally:
            tracked.offset = size

        if generation != self._generation:
            logger.debug("Tailer stopped while reading %s, discarding", tracked.path.name)
            return

        raw_lines, remainder = split_complete_lines(tracked.partial + data)
        if len(remainder) > MAX_PARTIAL_LINE_BYTES:
            logger.debug(
                "Unterminated line of %d bytes in %s, dispatching as is",
                len(remainder),
                tracked.path.name,
            )
            raw_lines.append(remainder)
            remainder = b""
        tracked.partial = remainder

        lines = [_decode_line(raw, tracked.path) for raw in raw_lines]
        logger.debug("Read %d lines (%d bytes) from %s", len(lines), size - start, tracked.path.name)
        self._dispatch_lines(tracked, lines)

    def _dispatch_lines(self, tracked: TrackedFile, lines: list[str]) -> None:
        reassembler = None
        if tracked.path.name.lower() == self.primary_log_name.lower():
            if tracked.reassembler is None:
                tracked.reassembler = EventReassembler()
            reassembler = tracked.reassembler

        for line in lines:
            if not line.strip():
                continue
            if reassembler is not None:
                event = reassembler.consume_line(line)
            else:
                event = make_generic_event(line, tracked.path.name, self._clock)
            if event is not None:
                self._emit(event)

    def _flush_file(self, tracked: TrackedFile) -> None:
        if tracked.partial:
            pending = _decode_line(tracked.partial.removesuffix(b"\r"), tracked.path)
            tracked.partial = b""
            self._dispatch_lines(tracked, [pending])
        if tracked.reassembler is not None:
            if event := tracked.reassembler.flush():
                self._emit(event)

    def _emit(self, event: LogEvent) -> None:
        try:
            self._sink(event)
        except Exception:
            logger.exception("Event sink failed for %s event", event.identifier)
