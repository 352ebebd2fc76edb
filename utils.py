"""
Utility functions for camera handling and frame annotation.
"""

import time
from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np


FONT = cv2.FONT_HERSHEY_SIMPLEX


def denormalize_coordinates(x_norm: float, y_norm: float, width: int, height: int) -> Tuple[float, float]:
    """Map a normalized (0-1) landmark coordinate onto a width x height frame."""
    return x_norm * width, y_norm * height


def to_pixel(point: Tuple[float, float]) -> Tuple[int, int]:
    """Round a pixel-space point for OpenCV drawing calls."""
    return int(round(point[0])), int(round(point[1]))


def calculate_fps(start_time: float, frame_count: int, now: Optional[float] = None) -> float:
    """
    Average frame rate since `start_time`.

    Args:
        start_time: time.monotonic() value when processing started
        frame_count: Frames processed since then
        now: Current monotonic time (default: read the clock)

    Returns:
        Frames per second, 0.0 before any time has elapsed
    """
    elapsed = (time.monotonic() if now is None else now) - start_time
    if elapsed <= 0:
        return 0.0
    return frame_count / elapsed


def draw_text_with_background(img: np.ndarray, text: str, position: Tuple[int, int],
                              font_scale: float = 0.6, thickness: int = 2,
                              text_color: Tuple[int, int, int] = (255, 255, 255),
                              bg_color: Tuple[int, int, int] = (0, 0, 0),
                              padding: int = 3) -> Tuple[int, int]:
    """
    Draw `text` with its baseline at `position` over a filled box.

    Returns:
        Lower-right corner of the box, for stacking labels
    """
    (text_w, text_h), baseline = cv2.getTextSize(text, FONT, font_scale, thickness)
    x, y = position
    bottom_right = (x + text_w + padding, y + baseline + padding)

    cv2.rectangle(img, (x - padding, y - text_h - padding), bottom_right, bg_color, cv2.FILLED)
    cv2.putText(img, text, (x, y), FONT, font_scale, text_color, thickness, cv2.LINE_AA)
    return bottom_right


def _camera_info(camera_index: int) -> Optional[Dict]:
    """Open a camera, grab one frame and report its properties, or None."""
    cap = cv2.VideoCapture(camera_index)
    try:
        if not cap.isOpened():
            return None
        ok, frame = cap.read()
        if not ok or frame is None:
            return None
        return {
            'index': camera_index,
            'width': int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            'height': int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            'fps': cap.get(cv2.CAP_PROP_FPS),
        }
    except cv2.error as e:
        print(f"Error reading camera {camera_index}: {e}")
        return None
    finally:
        cap.release()


def list_available_cameras(max_index: int = 10) -> List[Dict]:
    """Cameras among indices 0..max_index-1 that deliver a frame."""
    cameras = (_camera_info(index) for index in range(max_index))
    return [camera for camera in cameras if camera is not None]


def resize_frame(frame: np.ndarray, max_width: int, max_height: int) -> np.ndarray:
    """
    Shrink `frame` to fit inside max_width x max_height, keeping its aspect
    ratio. Frames that already fit are returned unchanged.
    """
    height, width = frame.shape[:2]
    scale = min(max_width / width, max_height / height)
    if scale >= 1:
        return frame

    size = (max(1, round(width * scale)), max(1, round(height * scale)))
    return cv2.resize(frame, size, interpolation=cv2.INTER_AREA)


def centre_region(frame: np.ndarray, ratio: float) -> np.ndarray:
    """
    Crop a centred box covering `ratio` of each frame dimension.

    Args:
        frame: Input frame
        ratio: Box size as a fraction of the frame (0-1)

    Returns:
        View of the cropped region
    """
    height, width = frame.shape[:2]
    box_w = max(1, int(width * ratio))
    box_h = max(1, int(height * ratio))
    x1 = (width - box_w) // 2
    y1 = (height - box_h) // 2
    return frame[y1:y1 + box_h, x1:x1 + box_w]
