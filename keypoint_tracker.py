"""
MediaPipe face mesh and hand landmark extraction in pixel coordinates.
"""

import mediapipe as mp
import cv2
import numpy as np
from typing import Dict, Optional
import config
from utils import denormalize_coordinates


def extract_face_keypoints(face_results, width: int, height: int) -> Optional[Dict]:
    """
    Extract lip keypoints from MediaPipe face mesh results.

    Args:
        face_results: MediaPipe face mesh results
        width: Frame width in pixels
        height: Frame height in pixels

    Returns:
        Face data dictionary or None if no face detected
    """
    if not face_results.multi_face_landmarks:
        return None

    # Use the first detected face
    landmarks = face_results.multi_face_landmarks[0].landmark

    lip_points = []
    for idx in config.LIP_INDICES:
        x, y = denormalize_coordinates(landmarks[idx].x, landmarks[idx].y, width, height)
        lip_points.append((float(round(x)), float(round(y))))

    face_data = {'lip_points': lip_points}
    for name, idx in config.FACE_KEYPOINTS.items():
        face_data[name] = denormalize_coordinates(landmarks[idx].x, landmarks[idx].y, width, height)

    return face_data


def extract_hand_keypoints(hand_results, width: int, height: int) -> Optional[Dict]:
    """
    Extract fingertip keypoints from MediaPipe hands results.

    Args:
        hand_results: MediaPipe hands results
        width: Frame width in pixels
        height: Frame height in pixels

    Returns:
        Hand data dictionary or None if no hand detected
    """
    if not hand_results.multi_hand_landmarks:
        return None

    landmarks = hand_results.multi_hand_landmarks[0].landmark

    hand_data = {}
    for name, idx in config.HAND_KEYPOINTS.items():
        hand_data[name] = denormalize_coordinates(landmarks[idx].x, landmarks[idx].y, width, height)

    return hand_data


class KeypointTracker:
    """
    Handles MediaPipe-based keypoint detection for one hand and one face.
    """

    def __init__(self):
        """Initialize MediaPipe models."""
        self.mp_hands = mp.solutions.hands
        self.mp_face_mesh = mp.solutions.face_mesh

        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=config.HANDS_MAX_NUM,
            model_complexity=config.HAND_MODEL_COMPLEXITY,
            min_detection_confidence=config.HAND_DETECTION_CONFIDENCE,
            min_tracking_confidence=config.HAND_DETECTION_CONFIDENCE
        )

        self.face_mesh = self.mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=1,
            refine_landmarks=config.FACE_REFINE_LANDMARKS,
            min_detection_confidence=config.FACE_DETECTION_CONFIDENCE,
            min_tracking_confidence=config.FACE_DETECTION_CONFIDENCE
        )

    def process_frame(self, frame: np.ndarray) -> Dict:
        """
        Process a single frame to detect hand and face keypoints.

        Args:
            frame: Input frame (BGR format)

        Returns:
            Dictionary containing pixel-space keypoints
        """
        height, width = frame.shape[:2]

        # Convert BGR to RGB for MediaPipe
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

        face_results = self.face_mesh.process(rgb_frame)
        hand_results = self.hands.process(rgb_frame)

        return {
            'face': extract_face_keypoints(face_results, width, height),
            'hand': extract_hand_keypoints(hand_results, width, height),
            'frame_shape': frame.shape
        }

    def release(self):
        """Release MediaPipe resources."""
        self.hands.close()
        self.face_mesh.close()
