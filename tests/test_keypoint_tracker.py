"""Tests for MediaPipe result extraction."""

from types import SimpleNamespace

import pytest

pytest.importorskip("cv2")
pytest.importorskip("mediapipe")

import config
from keypoint_tracker import extract_face_keypoints, extract_hand_keypoints


def landmark_list(count, overrides):
    points = [SimpleNamespace(x=0.5, y=0.5) for _ in range(count)]
    for idx, (x, y) in overrides.items():
        points[idx] = SimpleNamespace(x=x, y=y)
    return SimpleNamespace(landmark=points)


class TestFaceExtraction:
    def test_no_face(self):
        assert extract_face_keypoints(SimpleNamespace(multi_face_landmarks=None), 640, 480) is None
        assert extract_face_keypoints(SimpleNamespace(multi_face_landmarks=[]), 640, 480) is None

    def test_pixel_coordinates(self):
        overrides = {13: (0.5, 0.4), 14: (0.5, 0.45), 61: (0.4, 0.42), 291: (0.6, 0.42)}
        results = SimpleNamespace(multi_face_landmarks=[landmark_list(478, overrides)])

        face = extract_face_keypoints(results, 640, 480)

        assert face['upper_lip'] == pytest.approx((320.0, 192.0))
        assert face['lower_lip'] == pytest.approx((320.0, 216.0))
        assert face['mouth_left'] == pytest.approx((256.0, 201.6))
        assert face['mouth_right'] == pytest.approx((384.0, 201.6))
        assert len(face['lip_points']) == len(config.LIP_INDICES)

    def test_lip_points_are_rounded(self):
        results = SimpleNamespace(multi_face_landmarks=[landmark_list(478, {78: (0.1001, 0.2003)})])
        face = extract_face_keypoints(results, 640, 480)
        assert face['lip_points'][0] == (64.0, 96.0)


class TestHandExtraction:
    def test_no_hand(self):
        assert extract_hand_keypoints(SimpleNamespace(multi_hand_landmarks=None), 640, 480) is None

    def test_fingertips(self):
        overrides = {4: (0.25, 0.5), 8: (0.3, 0.25)}
        results = SimpleNamespace(multi_hand_landmarks=[landmark_list(21, overrides)])

        hand = extract_hand_keypoints(results, 640, 480)

        assert hand['thumb_tip'] == pytest.approx((160.0, 240.0))
        assert hand['index_tip'] == pytest.approx((192.0, 120.0))
