"""
Pure 2-D geometry helpers for mouth and fingertip landmarks.
"""

import numpy as np
from typing import Sequence, Tuple


class InvalidArgument(ValueError):
    """Raised when a geometry helper receives input it cannot work with."""


def calculate_distance(point1: Tuple[float, float], point2: Tuple[float, float]) -> float:
    """
    Calculate Euclidean distance between two 2D points.

    Args:
        point1: First point (x, y)
        point2: Second point (x, y)

    Returns:
        Euclidean distance between the points
    """
    return float(np.hypot(point2[0] - point1[0], point2[1] - point1[1]))


def calculate_centroid(points: Sequence[Tuple[float, float]]) -> Tuple[float, float]:
    """
    Calculate the arithmetic mean of a set of points.

    Args:
        points: Sequence of (x, y) points

    Returns:
        Centroid (x, y)

    Raises:
        InvalidArgument: If no points are given
    """
    if len(points) == 0:
        raise InvalidArgument("Cannot compute the centroid of an empty point set")

    coords = np.asarray(points, dtype=float)
    center_x, center_y = coords.mean(axis=0)
    return float(center_x), float(center_y)


def calculate_mouth_openness(upper_lip: Tuple[float, float], lower_lip: Tuple[float, float],
                             mouth_left: Tuple[float, float], mouth_right: Tuple[float, float]) -> float:
    """
    Ratio of the lip gap to the mouth width.

    The width is floored at one pixel so a collapsed face never divides by zero.
    """
    mouth_width = max(1.0, calculate_distance(mouth_left, mouth_right))
    mouth_gap = calculate_distance(upper_lip, lower_lip)
    return mouth_gap / mouth_width
