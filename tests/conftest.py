"""Shared test fixtures for oalogtail tests."""

from pathlib import Path

import pytest

from oalogtail.models import LogEvent
from oalogtail.types import GrowthCallback


class FakeGrowthSource:
    """GrowthSource that records subscription state for assertions."""

    def __init__(self) -> None:
        self.callback: GrowthCallback | None = None
        self.start_calls = 0
        self.stop_calls = 0

    def start(self, callback: GrowthCallback) -> None:
        self.callback = callback
        self.start_calls += 1

    def stop(self) -> None:
        self.callback = None
        self.stop_calls += 1

    def notify(self, path: Path) -> None:
        """Deliver a notification as the directory watcher would."""
        assert self.callback is not None, "source not started"
        self.callback(str(path))


def make_main_line(
    message: str,
    severity: str = "WARNING",
    identifier: str = "WCCOActrl",
    scope: str = "CTRL",
    timestamp: str = "2025.11.16 18:56:26.972",
    msgnum: str = "5",
) -> str:
    """Build a PVSS_II.log main line."""
    return f"{identifier}    (4), {timestamp}, {scope}, {severity},     {msgnum}, {message}"


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Create an empty project log directory."""
    directory = tmp_path / "log"
    directory.mkdir()
    return directory


@pytest.fixture
def events() -> list[LogEvent]:
    """Collect events emitted to a sink."""
    return []


@pytest.fixture
def growth_source() -> FakeGrowthSource:
    return FakeGrowthSource()


@pytest.fixture
def sample_log_content() -> str:
    """Sample PVSS_II.log content with multi-line events."""
    return "\n".join(
        [
            make_main_line("this is a warning"),
            "    Script: foo.ctl",
            "    Line: 10, x",
            make_main_line("Uninitialized variable", severity="SEVERE"),
            "    Stacktrace:",
            "     1: void f() at a.ctl:5",
            "     2: void g() at b.ctl:9",
            make_main_line("Manager started", severity="INFO", identifier="WCCILdata", scope="SYS"),
            "",
        ]
    )
