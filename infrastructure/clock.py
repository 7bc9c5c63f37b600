"""System clock adapter for the Clock port."""
from datetime import datetime


class SystemClock:
    """Clock backed by the host's local time."""

    def now(self) -> datetime:
        # Aware, so stored timestamps carry their UTC offset
        return datetime.now().astimezone()
