"""
Combine the confirmed gesture with the chat-driven application mode.
"""
import math
from typing import Mapping

from .types import AppMode, Point

# Gestures that take over the display regardless of what the chat is doing
DEFAULT_OVERRIDES: Mapping[str, AppMode] = {
    "Open_Palm": AppMode.ANALYZING,
    "Closed_Fist": AppMode.IDLE,
}


def effective_mode(confirmed_gesture: str, app_mode: AppMode,
                   overrides: Mapping[str, AppMode] = DEFAULT_OVERRIDES) -> AppMode:
    """
    Resolve the display mode for this tick.

    Args:
        confirmed_gesture: Debounced gesture label, or "None"
        app_mode: Mode reported by the application
        overrides: Gesture label -> forced mode

    Returns:
        The forced mode for an override gesture, otherwise app_mode unchanged
    """
    return overrides.get(confirmed_gesture, app_mode)


def engagement_distance(tracking: bool, smoothed: Point) -> float:
    """0 while a hand is tracked, else the smoothed point's distance from centre."""
    if tracking:
        return 0.0
    return math.hypot(smoothed[0], smoothed[1])
