"""
Clock Interface (Port).

The core never reads the system time directly; "today" always comes from
an injected clock so tests can pin it.
"""
from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current date and time."""

    def now(self) -> datetime:
        """Current local date and time."""
        ...
