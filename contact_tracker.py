"""
Wafer-to-mouth contact tracking.

Both the index fingertip and the thumb tip must sit inside an annular band
around the lip centre. Holding that pose for a contiguous stretch of time
latches "wafer taken to mouth". Any frame outside the band, or without a
face or hand, throws away the partial hold.
"""

from typing import Optional, Tuple
import config
from geometry import calculate_distance


Point = Tuple[float, float]


class ContactTracker:
    """
    Accumulates contiguous fingertip-at-mouth hold time into a one-shot latch.
    """

    def __init__(self, min_px: Optional[float] = None, max_px: Optional[float] = None,
                 required_ms: Optional[float] = None):
        """
        Initialize the tracker.

        Args:
            min_px: Inner radius of the band in pixels (default from config)
            max_px: Outer radius of the band in pixels (default from config)
            required_ms: Hold time needed to latch (default from config)
        """
        self.min_px = config.TOUCH_MIN_PX if min_px is None else min_px
        self.max_px = config.TOUCH_MAX_PX if max_px is None else max_px
        self.required_ms = config.CONTACT_REQUIRED_MS if required_ms is None else required_ms

        self.contact_start: Optional[float] = None
        self.hold_ms = 0.0
        self.latched = False

        # Display only
        self.holding = False
        self.index_distance: Optional[float] = None
        self.thumb_distance: Optional[float] = None

    def in_band(self, distance: float) -> bool:
        """Return True if the distance lies inside the inclusive band."""
        return self.min_px <= distance <= self.max_px

    def observe(self, mouth_center: Optional[Point], index_tip: Optional[Point],
                thumb_tip: Optional[Point], now: float) -> float:
        """
        Feed one frame of mouth and fingertip positions.

        Args:
            mouth_center: Lip centre in pixels, or None without a face
            index_tip: Index fingertip in pixels, or None without a hand
            thumb_tip: Thumb tip in pixels, or None without a hand
            now: Frame timestamp in milliseconds

        Returns:
            Current contiguous hold time in milliseconds
        """
        if mouth_center is None or index_tip is None or thumb_tip is None:
            self.index_distance = None
            self.thumb_distance = None
            self.reset_contact("Hold reset (lost hand/face)")
            return self.hold_ms

        self.index_distance = calculate_distance(mouth_center, index_tip)
        self.thumb_distance = calculate_distance(mouth_center, thumb_tip)

        # Distances stay live for display; the hold timing is frozen once latched
        if self.latched:
            self.holding = False
            return self.hold_ms

        holding = self.in_band(self.index_distance) and self.in_band(self.thumb_distance)

        if not holding:
            self.reset_contact()
            return self.hold_ms

        if not self.holding:
            print("Hold started (tips near lips)")
        self.holding = True

        if self.contact_start is None:
            self.contact_start = now
        self.hold_ms = now - self.contact_start

        if self.hold_ms >= self.required_ms:
            self.latched = True
            self.holding = False
            print("WAFER TAKEN TO MOUTH (chew counting active)")

        return self.hold_ms

    def reset_contact(self, message: str = "Hold reset"):
        """Break the current holding run. The latch itself is never cleared."""
        self.holding = False
        if self.latched:
            return
        if self.contact_start is not None:
            print(message)
        self.contact_start = None
        self.hold_ms = 0.0
