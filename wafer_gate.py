"""
Wafer presence gate: debounces per-frame classifier output into a one-shot latch.
"""

from typing import Dict, Optional, Tuple
import config


class WaferGate:
    """
    Latches "wafer detected" after a run of consecutive confident frames.
    """

    def __init__(self, accept_threshold: Optional[float] = None,
                 required_frames: Optional[int] = None):
        """
        Initialize the gate.

        Args:
            accept_threshold: Minimum wafer probability (default from config)
            required_frames: Consecutive accepting frames needed (default from config)
        """
        self.accept_threshold = (config.WAFER_ACCEPT_THRESHOLD
                                 if accept_threshold is None else accept_threshold)
        self.required_frames = (config.WAFER_REQUIRED_FRAMES
                                if required_frames is None else required_frames)

        self.consecutive_hits = 0
        self.latched = False
        self.last_wafer_prob = 0.0

    def accepts(self, classification: Optional[Tuple[float, float]]) -> bool:
        """Return True if a single frame counts towards the run."""
        if classification is None:
            return False
        wafer_prob, no_wafer_prob = classification
        return wafer_prob > no_wafer_prob and wafer_prob > self.accept_threshold

    def observe(self, classification: Optional[Tuple[float, float]]) -> Dict:
        """
        Feed one frame of classifier output.

        Args:
            classification: (wafer_prob, no_wafer_prob) or None if the
                classifier produced nothing this frame

        Returns:
            Dictionary with the gate status and a display label
        """
        if self.latched:
            return self._result()

        if classification is not None:
            self.last_wafer_prob = classification[0]

        if self.accepts(classification):
            self.consecutive_hits += 1
        else:
            self.consecutive_hits = 0  # reset if any frame is not wafer

        if self.consecutive_hits >= self.required_frames:
            self.latched = True
            print("WAFER DETECTED - Now bring it to your mouth!")

        return self._result()

    def _result(self) -> Dict:
        if self.latched:
            status = 'detected'
            label = "WAFER DETECTED"
        else:
            status = 'searching'
            label = (f"Searching... Wafer: {self.last_wafer_prob * 100:.1f}% "
                     f"({self.consecutive_hits}/{self.required_frames})")

        return {
            'status': status,
            'confidence_label': label,
            'consecutive_hits': self.consecutive_hits,
            'latched': self.latched
        }
