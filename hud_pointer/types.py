"""
Type definitions for the HUD pointer pipeline.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable


Point = Tuple[float, float]

# Confirmed-gesture value when nothing is confirmed
NO_GESTURE = "None"


class AppMode(Enum):
    """Display mode owned by the chat backend; also the effective mode."""
    IDLE = "IDLE"
    LISTENING = "LISTENING"
    PROCESSING = "PROCESSING"
    SPEAKING = "SPEAKING"
    ANALYZING = "ANALYZING"


@dataclass(frozen=True)
class GestureCandidate:
    """One ranked gesture label reported by the detector for a tick."""
    label: str
    score: float


@dataclass
class FrameObservation:
    """Detector output for a single tick (one tracked hand at most)."""
    landmarks: Sequence[Point] = field(default_factory=list)
    gestures: Sequence[GestureCandidate] = field(default_factory=list)

    @property
    def has_subject(self) -> bool:
        if self.landmarks is None:
            return False
        try:
            return len(self.landmarks) > 0
        except TypeError:
            # Unsized iterable; only the pipeline can tell by consuming it
            return False


@dataclass
class GestureBufferState:
    """Run-length hysteresis state of the gesture debouncer."""
    label: str = NO_GESTURE
    run_length: int = 0


@dataclass(frozen=True)
class TickOutput:
    """Everything the renderer needs after one pipeline tick."""
    smoothed: Point
    confirmed_gesture: str
    effective_mode: AppMode
    engagement_distance: float
    tracking: bool  # a hand supplied this tick's target
    target: Optional[Point]  # target the smoother moved toward
    source: str  # "tracked", "fallback" or "hold"


@runtime_checkable
class TargetSource(Protocol):
    """Producer of zero or one raw control point per tick."""

    def poll(self) -> Optional[Point]:
        """Return this tick's target in [-1, 1]², or None if there is none."""
        ...

    def close(self) -> None:
        """Release anything the source holds."""
        ...


@runtime_checkable
class FrameSourceProto(Protocol):
    """Per-tick detector feed."""

    def read(self) -> Optional[FrameObservation]:
        """Return the observation for this tick, or None when nothing is available."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class HudSinkProto(Protocol):
    """Abstract protocol for consumers of per-tick pipeline output."""

    async def present(self, output: TickOutput) -> None:
        """Render or otherwise consume one tick's output."""
        ...
