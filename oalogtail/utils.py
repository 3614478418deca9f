"""Shared filesystem helpers for oalogtail."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)


class FileIdentity(NamedTuple):
    """Identity of the file behind a path, used to detect rotation."""

    device: int
    inode: int


def canonical_key(path: str | os.PathLike[str]) -> str:
    """Map a path onto the key used to track it.

    Paths are made absolute and lower-cased so that differently cased
    notifications for the same file on case-insensitive filesystems
    resolve to the same entry.

    Args:
        path: File path as reported by the notification source.

    Returns:
        The canonical identity key.
    """
    return os.path.abspath(path).lower()


def stat_file(path: Path) -> tuple[int, FileIdentity] | None:
    """Get size and identity of a file, or None if it cannot be accessed.

    This handles the common race condition where a file may be deleted
    between a change notification and the stat call.

    Args:
        path: Path to the file.

    Returns:
        Tuple of (size in bytes, identity), or None.
    """
    try:
        st = path.stat()
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return None
    return st.st_size, FileIdentity(st.st_dev, st.st_ino)


def read_byte_range(path: Path, start: int, end: int) -> bytes:
    """Read exactly the bytes in ``[start, end)`` of a file.

    Args:
        path: Path to the file.
        start: First byte offset.
        end: Offset one past the last byte.

    Returns:
        The bytes read; shorter than requested if the file shrank meanwhile.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    if end <= start:
        return b""
    with path.open("rb") as f:
        f.seek(start)
        return f.read(end - start)


def split_complete_lines(data: bytes) -> tuple[list[bytes], bytes]:
    """Split bytes into newline-terminated lines and a trailing fragment.

    A carriage return before the newline is removed.

    Args:
        data: Bytes appended to a file, possibly ending mid-line.

    Returns:
        Tuple of (complete lines without terminators, unterminated remainder).
    """
    parts = data.split(b"\n")
    remainder = parts.pop()
    return [part.removesuffix(b"\r") for part in parts], remainder


def list_log_files(directory: Path, suffix: str) -> list[Path]:
    """List regular files in a directory whose name ends with ``suffix``.

    Args:
        directory: Directory to scan (not recursive).
        suffix: Required file name ending, e.g. ".log".

    Returns:
        Matching files sorted by name.

    Raises:
        OSError: If the directory cannot be listed.
    """
    with os.scandir(directory) as entries:
        files = [Path(e.path) for e in entries if e.name.endswith(suffix) and e.is_file()]
    return sorted(files)
