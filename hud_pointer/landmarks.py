"""
Hand landmark helpers: control-point extraction and overlay geometry.
"""
import math
from typing import Sequence, Tuple

from .errors import MalformedLandmarksError
from .types import Point

# Middle-finger MCP, the most stable landmark near the palm centre
PALM_CENTER_INDEX = 9

NUM_LANDMARKS = 21

# Skeleton edges of the 21-point hand model, used for drawing
HAND_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 4),          # thumb
    (0, 5), (5, 6), (6, 7), (7, 8),          # index
    (5, 9), (9, 10), (10, 11), (11, 12),     # middle
    (9, 13), (13, 14), (14, 15), (15, 16),   # ring
    (13, 17), (0, 17), (17, 18), (18, 19), (19, 20),  # pinky and palm
)


def control_point(landmarks: Sequence[Point]) -> Point:
    """
    Reduce a hand's landmarks to one control point.

    Uses the palm-centre landmark rather than a centroid so fingertip jitter
    does not leak into the cursor. The horizontal axis is mirrored to match
    the mirrored camera preview.

    Args:
        landmarks: Ordered hand landmarks, (x, y) in [0..1]

    Returns:
        (x, y) control point in [-1..1]

    Raises:
        MalformedLandmarksError: if the palm-centre landmark is missing or
            its coordinates are not finite numbers inside [0..1]
    """
    if len(landmarks) <= PALM_CENTER_INDEX:
        raise MalformedLandmarksError(
            f"expected landmark {PALM_CENTER_INDEX}, got {len(landmarks)} landmarks"
        )

    try:
        x = float(landmarks[PALM_CENTER_INDEX][0])
        y = float(landmarks[PALM_CENTER_INDEX][1])
    except (TypeError, ValueError, IndexError) as e:
        raise MalformedLandmarksError(f"bad palm-centre landmark: {e}") from e

    if not (math.isfinite(x) and math.isfinite(y)):
        raise MalformedLandmarksError(f"non-finite palm-centre landmark: ({x}, {y})")
    if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0):
        # Palm centre has left the frame
        raise MalformedLandmarksError(f"palm-centre landmark out of frame: ({x}, {y})")

    return ((1.0 - x) * 2.0 - 1.0, y * 2.0 - 1.0)


def to_pixels(point: Point, frame_wh: Tuple[int, int]) -> Tuple[int, int]:
    """Convert a normalized [0..1] landmark to integer pixel coordinates."""
    width, height = frame_wh
    return int(point[0] * width), int(point[1] * height)
