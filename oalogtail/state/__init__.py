"""Injectable runtime state (time source)."""

from oalogtail.state.clock import Clock
from oalogtail.state.clock import FrozenClock
from oalogtail.state.clock import SystemClock
from oalogtail.state.clock import get_clock
from oalogtail.state.clock import reset_clock
from oalogtail.state.clock import set_clock

__all__ = [
    "Clock",
    "FrozenClock",
    "SystemClock",
    "get_clock",
    "reset_clock",
    "set_clock",
]
