"""
Exponential smoothing of the 2-D control point.
"""
from typing import Optional

import numpy as np

from .types import Point

DEFAULT_ALPHA = 0.15


class ExponentialSmoother:
    """
    Low-pass filter that glides a 2-D position toward a target.

    Each update moves every axis a fixed fraction ``alpha`` of the remaining
    distance, so the position never overshoots a target and never jumps when
    the target source changes.
    """

    def __init__(self, alpha: float = DEFAULT_ALPHA, initial: Optional[Point] = None):
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        self.alpha = alpha
        self._position = np.zeros(2, dtype=float)
        if initial is not None:
            self._position[:] = initial

    @property
    def position(self) -> Point:
        return float(self._position[0]), float(self._position[1])

    def update(self, target: Point) -> Point:
        """Advance one tick toward target and return the new position."""
        target_arr = np.asarray(target, dtype=float)
        self._position = self._position + (target_arr - self._position) * self.alpha
        return self.position

    def reset(self, position: Point = (0.0, 0.0)) -> None:
        self._position = np.asarray(position, dtype=float).copy()
