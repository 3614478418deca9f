"""Event filtering by severity and free-text search."""

from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field

from oalogtail.models import LogEvent
from oalogtail.models import LogSeverity


@dataclass(frozen=True)
class EventFilter:
    """
    Selects events to display.

    Attributes:
        severities: Severities that pass. All severities pass by default.
        search: Case-insensitive text that must occur in the message,
            identifier, scope or any raw line. Empty matches everything.
    """

    severities: frozenset[LogSeverity] = field(default_factory=lambda: frozenset(LogSeverity))
    search: str = ""

    def matches(self, event: LogEvent) -> bool:
        """Check whether an event passes the filter."""
        if event.severity not in self.severities:
            return False
        if not self.search:
            return True

        needle = self.search.lower()
        return (
            needle in event.message.lower()
            or needle in event.identifier.lower()
            or needle in event.scope.lower()
            or any(needle in line.lower() for line in event.raw_lines)
        )

    def apply(self, events: Iterable[LogEvent]) -> Iterator[LogEvent]:
        """Yield the events that pass the filter, in order."""
        return (event for event in events if self.matches(event))


def parse_severities(tokens: Iterable[str] | None) -> frozenset[LogSeverity]:
    """
    Parse user-supplied severity names.

    Args:
        tokens: Names like "error" or "WARNING". None or empty selects all.

    Returns:
        The selected severities.

    Raises:
        ValueError: If a name is not a known severity.
    """
    if not tokens:
        return frozenset(LogSeverity)
    selected = set()
    for token in tokens:
        try:
            selected.add(LogSeverity(token.strip().upper()))
        except ValueError:
            valid = ", ".join(s.value for s in LogSeverity)
            raise ValueError(f"Unknown severity '{token}' (expected one of {valid})") from None
    return frozenset(selected)
