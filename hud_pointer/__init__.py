"""
HUD Pointer

Turns noisy per-frame hand-landmark detections into a stable 2-D pointer and
a debounced gesture symbol for a heads-up display, with a mouse fallback
while no hand is tracked.
"""

__version__ = "0.1.0"

from .types import (
    AppMode,
    FrameObservation,
    GestureBufferState,
    GestureCandidate,
    NO_GESTURE,
    TickOutput,
    TargetSource,
    FrameSourceProto,
    HudSinkProto,
)
from .errors import HudPointerError, MalformedLandmarksError, ConfigError, FrameSourceError
from .config import load_config, Cfg
from .landmarks import control_point, PALM_CENTER_INDEX
from .smoothing import ExponentialSmoother
from .debounce import GestureDebouncer
from .modes import effective_mode, engagement_distance, DEFAULT_OVERRIDES
from .sources import TrackedTarget, PointerFallback
from .pipeline import TickPipeline, PipelineState
from .loop import TickLoop
from .hud_mock import MockHud

__all__ = [
    "AppMode",
    "FrameObservation",
    "GestureBufferState",
    "GestureCandidate",
    "NO_GESTURE",
    "TickOutput",
    "TargetSource",
    "FrameSourceProto",
    "HudSinkProto",
    "HudPointerError",
    "MalformedLandmarksError",
    "ConfigError",
    "FrameSourceError",
    "load_config",
    "Cfg",
    "control_point",
    "PALM_CENTER_INDEX",
    "ExponentialSmoother",
    "GestureDebouncer",
    "effective_mode",
    "engagement_distance",
    "DEFAULT_OVERRIDES",
    "TrackedTarget",
    "PointerFallback",
    "TickPipeline",
    "PipelineState",
    "TickLoop",
    "MockHud",
]
