"""
Shared builders for synthetic detector output.
"""
from typing import List, Optional, Tuple

from hud_pointer.landmarks import NUM_LANDMARKS, PALM_CENTER_INDEX
from hud_pointer.types import FrameObservation, GestureCandidate


def hand_at(x: float, y: float) -> List[Tuple[float, float]]:
    """21 landmarks with the palm centre at (x, y) and the rest scattered around it."""
    landmarks = [(0.5, 0.5)] * NUM_LANDMARKS
    landmarks[PALM_CENTER_INDEX] = (x, y)
    return landmarks


def observation(x: float = 0.5, y: float = 0.5, label: Optional[str] = None, score: float = 0.9) -> FrameObservation:
    """Observation of one hand, optionally with a single gesture candidate."""
    gestures = [GestureCandidate(label=label, score=score)] if label else []
    return FrameObservation(landmarks=hand_at(x, y), gestures=gestures)


def candidates(label: str, score: float = 0.9) -> List[GestureCandidate]:
    return [GestureCandidate(label=label, score=score)]
