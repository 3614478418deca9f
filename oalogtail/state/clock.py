"""Injectable clock for testable time handling.

Events wrapped from generic log files are stamped with the wall-clock time
at which they were read. The clock is injected so that the tailing engine
can be tested deterministically.

Example usage:
    # Production code
    from oalogtail.parser.core import format_log_timestamp
    from oalogtail.state import get_clock

    stamp = format_log_timestamp(get_clock().now())

    # Test code
    from oalogtail.state import FrozenClock

    tailer = LogTailer(log_dir, sink, clock=FrozenClock(1700000000.0))
"""

import time as _time
from typing import Protocol


class Clock(Protocol):
    """Protocol for injectable time sources."""

    def now(self) -> float:
        """Return current time as Unix timestamp (seconds since epoch)."""
        ...


class SystemClock:
    """Default clock implementation using system time."""

    def now(self) -> float:
        """Return current time as Unix timestamp."""
        return _time.time()


class FrozenClock:
    """Clock frozen at a specific time for testing.

    Attributes:
        frozen_time: The frozen Unix timestamp.

    Example:
        clock = FrozenClock(1700000000.0)
        assert clock.now() == 1700000000.0

        clock.advance(60.0)  # Advance by 1 minute
        assert clock.now() == 1700000060.0
    """

    def __init__(self, frozen_time: float | None = None) -> None:
        """Initialize with a specific frozen time.

        Args:
            frozen_time: Unix timestamp to freeze at. Defaults to current time.
        """
        self._time = frozen_time if frozen_time is not None else _time.time()

    def now(self) -> float:
        """Return the frozen time."""
        return self._time

    def advance(self, seconds: float) -> None:
        """Advance the frozen time by the given number of seconds.

        Args:
            seconds: Number of seconds to advance (can be negative).
        """
        self._time += seconds

    def set_time(self, timestamp: float) -> None:
        """Set the frozen time to a specific timestamp.

        Args:
            timestamp: Unix timestamp to set.
        """
        self._time = timestamp


# Default global clock instance
_default_clock: Clock = SystemClock()


def get_clock() -> Clock:
    """Get the current default clock.

    Returns:
        The currently configured clock instance.
    """
    return _default_clock


def set_clock(clock: Clock) -> None:
    """Set the default clock (primarily for testing).

    Args:
        clock: Clock instance to use as default.
    """
    global _default_clock
    _default_clock = clock


def reset_clock() -> None:
    """Reset the default clock to SystemClock."""
    global _default_clock
    _default_clock = SystemClock()
