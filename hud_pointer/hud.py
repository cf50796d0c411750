"""
Presentation values derived from the pipeline output.

Pure functions only: the OpenCV window in ``main`` and any other renderer
share these so the overlay behaves the same everywhere.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .types import AppMode, NO_GESTURE, Point

DEFAULT_INTERACTION_RADIUS = 0.3

# Gesture label -> action shown in the gesture list
GESTURE_LIBRARY: Dict[str, str] = {
    "Open_Palm": "ACTIVATE",
    "Closed_Fist": "STANDBY",
    "Victory": "CALIBRATE",
}

_STATUS_CAPTIONS = {
    AppMode.PROCESSING: "UPLOADING TO MAINFRAME...",
    AppMode.ANALYZING: "SCANNING VISUAL DATA...",
    AppMode.SPEAKING: "AUDIO OUTPUT STREAMING...",
}

_REACTOR_STATES = {
    AppMode.SPEAKING: "speaking",
    AppMode.PROCESSING: "processing",
    AppMode.ANALYZING: "active",
}


@dataclass(frozen=True)
class ReactorDynamics:
    interacting: bool
    scale: float
    spin_multiplier: float  # multiplies ring rotation period


@dataclass(frozen=True)
class Tilt:
    rotate_x_deg: float
    rotate_y_deg: float
    scale: float


def reactor_state(mode: AppMode) -> str:
    return _REACTOR_STATES.get(mode, "idle")


def reactor_dynamics(engagement_distance: float,
                     radius: float = DEFAULT_INTERACTION_RADIUS) -> ReactorDynamics:
    """The reactor grows and spins faster while the pointer is near the centre."""
    if engagement_distance < radius:
        return ReactorDynamics(interacting=True, scale=1.2, spin_multiplier=0.2)
    return ReactorDynamics(interacting=False, scale=1.0, spin_multiplier=1.0)


def status_caption(mode: AppMode) -> Optional[str]:
    return _STATUS_CAPTIONS.get(mode)


def cursor_position(smoothed: Point, viewport_wh: Tuple[int, int]) -> Tuple[int, int]:
    """Map a [-1, 1] control point to viewport pixels."""
    width, height = viewport_wh
    return int((smoothed[0] + 1.0) / 2.0 * width), int((smoothed[1] + 1.0) / 2.0 * height)


def tilt(smoothed: Point) -> Tilt:
    x, y = smoothed
    return Tilt(rotate_x_deg=-y * 10.0, rotate_y_deg=x * 10.0, scale=1.0 + abs(x * 0.05))


def gesture_banner(gesture: str) -> Optional[str]:
    """Text announcing a confirmed gesture, e.g. "OPEN PALM DETECTED"."""
    if gesture == NO_GESTURE:
        return None
    return f"{gesture.replace('_', ' ').upper()} DETECTED"
