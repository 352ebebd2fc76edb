"""
Chew cycle detection from mouth openness.
"""

from typing import Optional
import config


MOUTH_OPEN = 'open'
MOUTH_CLOSED = 'closed'


class ChewDetector:
    """
    Two-state open/closed hysteresis on the mouth openness ratio.

    A chew is one open -> closed transition. Values between the close and open
    thresholds keep the current state.
    """

    def __init__(self, open_threshold: Optional[float] = None,
                 close_threshold: Optional[float] = None):
        self.open_threshold = config.OPEN_THRESHOLD if open_threshold is None else open_threshold
        self.close_threshold = config.CLOSE_THRESHOLD if close_threshold is None else close_threshold
        if self.close_threshold >= self.open_threshold:
            raise ValueError("close_threshold must be lower than open_threshold")

        self.mouth_state = MOUTH_CLOSED
        self.openness = 0.0
        self.close_count = 0  # every close edge, counted or not

    def observe(self, openness: float, now: float, eligible: bool) -> bool:
        """
        Feed one openness sample.

        Args:
            openness: Mouth gap / mouth width ratio
            now: Frame timestamp in milliseconds
            eligible: Whether close edges may be counted as chews yet

        Returns:
            True if this sample completed a countable chew
        """
        self.openness = openness

        if self.mouth_state == MOUTH_CLOSED and openness > self.open_threshold:
            self.mouth_state = MOUTH_OPEN
        elif self.mouth_state == MOUTH_OPEN and openness < self.close_threshold:
            self.mouth_state = MOUTH_CLOSED
            self.close_count += 1
            if eligible:
                if config.DEBUG_MODE:
                    print(f"Chew at {now:.0f} ms (openness {openness:.3f})")
                return True

        return False
