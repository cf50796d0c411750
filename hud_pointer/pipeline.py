"""
Per-tick pipeline: detector output in, stable pointer and confirmed gesture out.
"""
import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from .config import Cfg
from .debounce import GestureDebouncer
from .modes import DEFAULT_OVERRIDES, effective_mode, engagement_distance
from .smoothing import ExponentialSmoother
from .sources import PointerFallback, TrackedTarget
from .types import (
    AppMode,
    FrameObservation,
    GestureBufferState,
    GestureCandidate,
    Point,
    TargetSource,
    TickOutput,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineState:
    """Snapshot of the cross-tick state, for inspection and tests."""
    smoothed: Point
    buffer: GestureBufferState
    confirmed_gesture: str
    ticks: int


class TickPipeline:
    """
    Owns the smoother and debouncer and advances them one tick at a time.

    Target priority each tick: tracked hand, then the fallback source, then
    the last target seen. The smoother is updated on every tick whichever
    one wins, so the output never freezes or snaps.
    """

    def __init__(self, smoother: Optional[ExponentialSmoother] = None,
                 debouncer: Optional[GestureDebouncer] = None,
                 fallback: Optional[TargetSource] = None,
                 overrides: Mapping[str, AppMode] = DEFAULT_OVERRIDES):
        self.smoother = smoother or ExponentialSmoother()
        self.debouncer = debouncer or GestureDebouncer()
        self.tracked = TrackedTarget()
        self.fallback: TargetSource = fallback or PointerFallback()
        self.overrides = dict(overrides)

        self._last_target: Optional[Point] = None
        self._last_source: Optional[str] = None
        self._last_output: Optional[TickOutput] = None
        self._ticks = 0
        self._closed = False

    @classmethod
    def from_config(cls, cfg: Cfg, fallback: Optional[TargetSource] = None) -> "TickPipeline":
        return cls(
            smoother=ExponentialSmoother(alpha=cfg.smoothing.alpha),
            debouncer=GestureDebouncer(
                confidence_floor=cfg.debounce.confidence_floor,
                confirm_after=cfg.debounce.confirm_after
            ),
            fallback=fallback,
            overrides=cfg.modes.overrides
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> PipelineState:
        buf = self.debouncer.buffer
        return PipelineState(
            smoothed=self.smoother.position,
            buffer=GestureBufferState(label=buf.label, run_length=buf.run_length),
            confirmed_gesture=self.debouncer.confirmed,
            ticks=self._ticks
        )

    def step(self, observation: Optional[FrameObservation],
             app_mode: AppMode = AppMode.IDLE) -> TickOutput:
        """
        Advance the pipeline by exactly one tick.

        Args:
            observation: Detector output for this tick (None if nothing arrived)
            app_mode: Mode currently reported by the application

        Returns:
            TickOutput for the renderer
        """
        if self._closed:
            logger.debug("step() on a closed pipeline ignored")
            return self._last_output or self._snapshot_output(app_mode)

        self.tracked.feed(observation)
        target = self.tracked.poll()
        tracking = target is not None
        source = "tracked"

        if target is None:
            target = self.fallback.poll()
            source = "fallback"
        if target is None:
            # Nothing authoritative this tick; keep gliding toward the last target
            target = self._last_target if self._last_target is not None else self.smoother.position
            source = "hold"

        smoothed = self.smoother.update(target)
        self._last_target = target

        if source != self._last_source and source != "hold":
            logger.info(f"Pointer source: {source}")
        self._last_source = source

        candidates = _valid_candidates(observation.gestures) if tracking else []
        confirmed = self.debouncer.update(candidates)

        output = TickOutput(
            smoothed=smoothed,
            confirmed_gesture=confirmed,
            effective_mode=effective_mode(confirmed, app_mode, self.overrides),
            engagement_distance=engagement_distance(tracking, smoothed),
            tracking=tracking,
            target=target,
            source=source
        )
        self._ticks += 1
        self._last_output = output
        return output

    def close(self) -> None:
        """Stop accepting ticks; state is frozen from here on."""
        if self._closed:
            return
        self._closed = True
        self.tracked.close()
        logger.info(f"Pipeline closed after {self._ticks} ticks")

    def _snapshot_output(self, app_mode: AppMode) -> TickOutput:
        smoothed = self.smoother.position
        confirmed = self.debouncer.confirmed
        return TickOutput(
            smoothed=smoothed,
            confirmed_gesture=confirmed,
            effective_mode=effective_mode(confirmed, app_mode, self.overrides),
            engagement_distance=engagement_distance(False, smoothed),
            tracking=False,
            target=self._last_target,
            source="hold"
        )


def _valid_candidates(gestures: Sequence[GestureCandidate]) -> List[GestureCandidate]:
    """Normalize detector candidates; a malformed list counts as no gestures."""
    try:
        return [GestureCandidate(label=str(g.label), score=float(g.score)) for g in gestures]
    except (AttributeError, TypeError, ValueError) as e:
        logger.debug(f"Dropping malformed gesture candidates: {e}")
        return []
