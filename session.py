"""
Per-session orchestration of the wafer eating ritual.

One EatingSession is created per run and driven once per video frame with the
raw detector outputs for that frame. Stages latch in order and never revert:

    wafer detected -> wafer taken to mouth -> eating confirmed
"""

from typing import Dict, Optional, Tuple
import config
from geometry import calculate_centroid, calculate_mouth_openness
from wafer_gate import WaferGate
from contact_tracker import ContactTracker
from chew_detector import ChewDetector
from eating_counter import EatingCounter


STEP_SHOW_WAFER = 1
STEP_BRING_TO_MOUTH = 2
STEP_EAT = 3
STEP_COMPLETE = 4


class EatingSession:
    """
    Composes the wafer gate, contact tracker, chew detector and eating counter.
    """

    def __init__(self, wafer_gate: Optional[WaferGate] = None,
                 contact_tracker: Optional[ContactTracker] = None,
                 chew_detector: Optional[ChewDetector] = None,
                 eating_counter: Optional[EatingCounter] = None):
        """Initialize a session; components default to config-driven instances."""
        self.wafer_gate = wafer_gate or WaferGate()
        self.contact_tracker = contact_tracker or ContactTracker()
        self.chew_detector = chew_detector or ChewDetector()
        self.eating_counter = eating_counter or EatingCounter()

        self.frame_count = 0
        self.wafer_label = ""
        self._state: Dict = {}

    @property
    def wafer_detected(self) -> bool:
        return self.wafer_gate.latched

    @property
    def wafer_at_mouth(self) -> bool:
        return self.contact_tracker.latched

    @property
    def eating_detected(self) -> bool:
        return self.eating_counter.latched

    def process_frame(self, classification: Optional[Tuple[float, float]],
                      face: Optional[Dict], hand: Optional[Dict], now: float) -> Dict:
        """
        Advance the session by one frame.

        Args:
            classification: (wafer_prob, no_wafer_prob) or None; only used
                until the wafer has been detected
            face: Face keypoints in pixels (see KeypointTracker) or None
            hand: Hand keypoints in pixels or None
            now: Monotonic frame timestamp in milliseconds

        Returns:
            Composite session state for the presentation layer
        """
        self.frame_count += 1

        if not self.wafer_detected:
            self._observe_wafer(classification)
            return self._build_state(face_ok=False, hand_ok=False, lip_center=None, now=now)

        lip_center = None
        openness = None
        if face is not None:
            lip_center = calculate_centroid(face['lip_points'])
            openness = calculate_mouth_openness(face['upper_lip'], face['lower_lip'],
                                                face['mouth_left'], face['mouth_right'])

        if hand is not None and lip_center is not None:
            self.contact_tracker.observe(lip_center, hand['index_tip'], hand['thumb_tip'], now)
        else:
            self.contact_tracker.observe(None, None, None, now)

        if openness is not None:
            chewed = self.chew_detector.observe(openness, now, eligible=self.wafer_at_mouth)
            if chewed:
                self.eating_counter.record(now)
                self.eating_counter.evaluate(now)

        return self._build_state(face_ok=face is not None, hand_ok=hand is not None,
                                 lip_center=lip_center, now=now)

    def _observe_wafer(self, classification: Optional[Tuple[float, float]]):
        result = self.wafer_gate.observe(classification)
        self.wafer_label = result['confidence_label']

        if (config.DEBUG_MODE and classification is not None
                and self.frame_count % config.PROBABILITY_LOG_INTERVAL == 0):
            wafer_prob, no_wafer_prob = classification
            print(f"wafer: {wafer_prob * 100:.1f}%, no wafer: {no_wafer_prob * 100:.1f}%")

    def current_step(self) -> int:
        """Which step of the ritual the subject should perform next."""
        if not self.wafer_detected:
            return STEP_SHOW_WAFER
        if not self.wafer_at_mouth:
            return STEP_BRING_TO_MOUTH
        if not self.eating_detected:
            return STEP_EAT
        return STEP_COMPLETE

    def _build_state(self, face_ok: bool, hand_ok: bool,
                     lip_center: Optional[Tuple[float, float]], now: float) -> Dict:
        tracker = self.contact_tracker
        self._state = {
            'wafer_detected': self.wafer_detected,
            'wafer_at_mouth': self.wafer_at_mouth,
            'eating_detected': self.eating_detected,
            'chew_count': self.eating_counter.window_count(now),
            'hold_ms': tracker.hold_ms,
            'openness': self.chew_detector.openness if face_ok else 0.0,
            'face_detected': face_ok,
            'hand_detected': hand_ok,
            'lip_center': lip_center,
            'index_distance': tracker.index_distance,
            'thumb_distance': tracker.thumb_distance,
            'holding': tracker.holding,
            'mouth_state': self.chew_detector.mouth_state,
            'wafer_label': self.wafer_label,
            'step': self.current_step(),
            'frame_count': self.frame_count
        }
        return dict(self._state)

    def get_state(self) -> Dict:
        """Return a copy of the most recent composite state."""
        return dict(self._state)

    def get_statistics(self) -> Dict:
        """Session counters for the final summary."""
        return {
            'total_frames': self.frame_count,
            'wafer_detected': self.wafer_detected,
            'wafer_at_mouth': self.wafer_at_mouth,
            'eating_detected': self.eating_detected,
            'mouth_closures': self.chew_detector.close_count,
            'chews_logged': len(self.eating_counter.chew_events)
        }
