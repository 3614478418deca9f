"""Type aliases for common callback patterns.

This module provides centralized type definitions for the callbacks that
connect the tailing engine to its collaborators.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oalogtail.models import LogEvent

# Callback receiving each completed event, in per-file order.
EventSink = Callable[["LogEvent"], None]

# Callback receiving the absolute path of a file that was created or grew.
GrowthCallback = Callable[[str], None]
