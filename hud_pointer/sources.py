"""
Target sources that feed the smoother: the tracked hand and the mouse fallback.
"""
import logging
from typing import Optional, Tuple

from .errors import MalformedLandmarksError
from .landmarks import control_point
from .types import FrameObservation, Point

logger = logging.getLogger(__name__)


class TrackedTarget:
    """Live subject tracker: one control point per tick from the current observation."""

    def __init__(self):
        self._observation: Optional[FrameObservation] = None

    def feed(self, observation: Optional[FrameObservation]) -> None:
        """Hand over this tick's detector output."""
        self._observation = observation

    def poll(self) -> Optional[Point]:
        obs = self._observation
        if obs is None or obs.landmarks is None:
            return None
        try:
            landmarks = list(obs.landmarks)
        except TypeError as e:
            logger.debug(f"Dropping unreadable landmarks: {e}")
            return None
        if not landmarks:
            return None
        try:
            return control_point(landmarks)
        except MalformedLandmarksError as e:
            logger.debug(f"Dropping malformed landmarks: {e}")
            return None

    def close(self) -> None:
        self._observation = None


class PointerFallback:
    """
    Pointing-device fallback used while no hand is tracked.

    The host window reports pointer motion in pixels; positions are kept
    normalized to [-1, 1] with no mirroring.
    """

    def __init__(self):
        self._position: Optional[Point] = None

    def move_to(self, x: float, y: float) -> None:
        """Record an already-normalized pointer position."""
        self._position = (_clamp(x), _clamp(y))

    def move_to_pixels(self, px: float, py: float, viewport_wh: Tuple[int, int]) -> None:
        """Record a pointer position given in viewport pixels."""
        width, height = viewport_wh
        if width <= 0 or height <= 0:
            return
        self.move_to(px / width * 2.0 - 1.0, py / height * 2.0 - 1.0)

    def poll(self) -> Optional[Point]:
        return self._position

    def close(self) -> None:
        self._position = None


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, float(value)))
