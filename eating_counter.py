"""
Sliding-window chew counter with a sticky "eating confirmed" latch.
"""

from collections import deque
from typing import Optional
import config


class EatingCounter:
    """
    Keeps chew timestamps inside a time window and latches once enough of
    them are present at the same time.
    """

    def __init__(self, window_ms: Optional[float] = None, chew_target: Optional[int] = None):
        """
        Initialize the counter.

        Args:
            window_ms: Window length in milliseconds (default from config)
            chew_target: Chews needed inside the window (default from config)
        """
        self.window_ms = config.EAT_WINDOW_MS if window_ms is None else window_ms
        self.chew_target = config.CHEW_TARGET if chew_target is None else chew_target
        if self.chew_target < 1:
            raise ValueError("chew_target must be at least 1")

        self.chew_events = deque()  # timestamps (ms), oldest first
        self.latched = False

    def record(self, timestamp: float):
        """Append a chew event."""
        self.chew_events.append(timestamp)

    def evaluate(self, now: float) -> bool:
        """
        Prune expired events and latch if the window holds enough chews.

        Args:
            now: Current timestamp in milliseconds

        Returns:
            Whether eating has been confirmed
        """
        cutoff = now - self.window_ms
        while self.chew_events and self.chew_events[0] < cutoff:
            self.chew_events.popleft()

        if not self.latched and len(self.chew_events) >= self.chew_target:
            self.latched = True
            print("EATING CONFIRMED")

        return self.latched

    def window_count(self, now: float) -> int:
        """Number of recorded chews within the window ending at now."""
        cutoff = now - self.window_ms
        return sum(1 for ts in self.chew_events if ts >= cutoff)
