"""
Video visualization and annotation module.
"""

import cv2
import numpy as np
from typing import Dict, Optional
import config
from session import STEP_SHOW_WAFER, STEP_BRING_TO_MOUTH, STEP_EAT
from utils import draw_text_with_background, to_pixel


STEP_PROMPTS = {
    STEP_SHOW_WAFER: "Step 1: Show wafer to camera",
    STEP_BRING_TO_MOUTH: "Step 2: Bring wafer to your mouth",
    STEP_EAT: "Step 3: Start eating the wafer",
}


def tick(ok: bool) -> str:
    return "OK" if ok else "--"


class Visualizer:
    """
    Draws landmarks, step prompts and session status on video frames.
    """

    def __init__(self):
        """Initialize visualizer with drawing settings."""
        self.frame_width = 0
        self.frame_height = 0

    def set_frame_dimensions(self, width: int, height: int):
        """Set frame dimensions for text placement."""
        self.frame_width = width
        self.frame_height = height

    def draw_frame(self, frame: np.ndarray, detection_data: Dict, state: Dict,
                   fps: Optional[float] = None) -> np.ndarray:
        """
        Draw all visualizations on the frame.

        Args:
            frame: Input frame
            detection_data: Keypoint detection results (may be empty)
            state: Composite session state
            fps: Current FPS to display

        Returns:
            Annotated frame
        """
        self.set_frame_dimensions(frame.shape[1], frame.shape[0])

        annotated_frame = frame.copy()

        if config.SHOW_KEYPOINTS and state.get('wafer_detected'):
            self._draw_keypoints(annotated_frame, detection_data, state)

        self._draw_header(annotated_frame, state)

        if state.get('wafer_detected'):
            self._draw_hold_status(annotated_frame, state)
            self._draw_mouth_status(annotated_frame, state)

        if config.SHOW_FPS and fps is not None:
            draw_text_with_background(annotated_frame, f"FPS: {fps:.1f}",
                                      (self.frame_width - 110, 25),
                                      font_scale=0.5, thickness=1,
                                      text_color=config.COLORS['text'],
                                      bg_color=config.COLORS['background'])

        return annotated_frame

    def _draw_keypoints(self, frame: np.ndarray, detection_data: Dict, state: Dict):
        """Draw lip ring, lip centre and fingertips."""
        face = detection_data.get('face')
        hand = detection_data.get('hand')

        if face:
            for point in face['lip_points']:
                cv2.circle(frame, to_pixel(point), 2, config.COLORS['face'], -1)

        lip_center = state.get('lip_center')
        if lip_center:
            center = to_pixel(lip_center)
            cv2.circle(frame, center, config.CIRCLE_RADIUS, config.COLORS['lip_center'], -1)
            if not state.get('wafer_at_mouth'):
                cv2.circle(frame, center, int(config.TOUCH_MAX_PX),
                           config.COLORS['prompt'], 1)

        if hand:
            for name in ('index_tip', 'thumb_tip'):
                tip = to_pixel(hand[name])
                cv2.circle(frame, tip, config.CIRCLE_RADIUS, config.COLORS['hand'], -1)
                if lip_center:
                    cv2.line(frame, tip, to_pixel(lip_center), config.COLORS['hand'],
                             config.LINE_THICKNESS)

    def _draw_header(self, frame: np.ndarray, state: Dict):
        """Draw the current step prompt and detector presence."""
        step = state.get('step', STEP_SHOW_WAFER)

        if not state.get('wafer_detected'):
            cv2.putText(frame, STEP_PROMPTS[STEP_SHOW_WAFER], (10, 20),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, config.COLORS['text'], 1)
            draw_text_with_background(frame, state.get('wafer_label', ''), (10, 45),
                                      font_scale=0.5, thickness=1,
                                      text_color=config.COLORS['prompt'],
                                      bg_color=config.COLORS['background'])
            return

        both_ok = state.get('face_detected') and state.get('hand_detected')
        cv2.putText(frame, f"Face: {tick(state.get('face_detected'))}  "
                           f"Hand: {tick(state.get('hand_detected'))}",
                    (10, 20), cv2.FONT_HERSHEY_SIMPLEX, 0.5,
                    config.COLORS['text'] if both_ok else config.COLORS['fail'], 1)

        if step in STEP_PROMPTS:
            cv2.putText(frame, STEP_PROMPTS[step], (10, 40), cv2.FONT_HERSHEY_SIMPLEX,
                        config.TEXT_SCALE, config.COLORS['prompt'], config.TEXT_THICKNESS)

    def _draw_hold_status(self, frame: np.ndarray, state: Dict):
        """Draw fingertip distances and hold progress."""
        if config.SHOW_DISTANCE:
            index_distance = state.get('index_distance')
            thumb_distance = state.get('thumb_distance')
            if index_distance is not None and thumb_distance is not None:
                cv2.putText(frame, f"Index distance: {index_distance:.1f} px",
                            (10, self.frame_height - 60), cv2.FONT_HERSHEY_SIMPLEX,
                            0.5, config.COLORS['text'], 1)
                cv2.putText(frame, f"Thumb distance: {thumb_distance:.1f} px",
                            (10, self.frame_height - 40), cv2.FONT_HERSHEY_SIMPLEX,
                            0.5, config.COLORS['text'], 1)

        if state.get('wafer_at_mouth'):
            cv2.putText(frame, "WAFER TAKEN TO MOUTH (chew counting active)", (10, 80),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.55, config.COLORS['pass'], 2)
        elif state.get('holding'):
            required_s = config.CONTACT_REQUIRED_MS / 1000
            held_s = min(config.CONTACT_REQUIRED_MS, state.get('hold_ms', 0.0)) / 1000
            cv2.putText(frame, f"Hold near lips: {held_s:.1f} / {required_s:.1f} s", (10, 60),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.55, config.COLORS['prompt'], 2)

    def _draw_mouth_status(self, frame: np.ndarray, state: Dict):
        """Draw openness, chew count and the completion banner."""
        if not state.get('lip_center'):
            return

        window_s = config.EAT_WINDOW_MS / 1000
        cv2.putText(frame, f"Mouth openness: {state.get('openness', 0.0):.3f}",
                    (10, self.frame_height - 80), cv2.FONT_HERSHEY_SIMPLEX,
                    0.5, config.COLORS['text'], 1)
        cv2.putText(frame, f"Chews (last {window_s:g}s): {state.get('chew_count', 0)}",
                    (10, self.frame_height - 20), cv2.FONT_HERSHEY_SIMPLEX,
                    0.5, config.COLORS['text'], 1)

        if state.get('eating_detected'):
            draw_text_with_background(frame, "EATING - Process Complete!",
                                      (10, self.frame_height - 100),
                                      font_scale=0.7, thickness=2,
                                      text_color=config.COLORS['complete'],
                                      bg_color=config.COLORS['background'])

    def draw_debug_info(self, frame: np.ndarray, debug_data: Dict) -> np.ndarray:
        """
        Draw additional debug information when debug mode is enabled.

        Args:
            frame: Input frame
            debug_data: Debug information

        Returns:
            Frame with debug information drawn
        """
        if not config.DEBUG_MODE:
            return frame

        # Draw debug information in bottom-right corner
        y_offset = self.frame_height - 30

        for i, (key, value) in enumerate(debug_data.items()):
            text = f"{key}: {value}"
            x_pos = self.frame_width - 200
            y_pos = y_offset - (i * 25)

            draw_text_with_background(frame, text, (x_pos, y_pos),
                                      font_scale=0.4, thickness=1,
                                      text_color=config.COLORS['text'],
                                      bg_color=(0, 0, 0))

        return frame
