"""
Cooperative tick scheduler that drives the pipeline at a fixed rate.
"""
import asyncio
import logging
import time
from typing import Callable, Optional

from .pipeline import TickPipeline
from .types import AppMode, FrameObservation, FrameSourceProto, HudSinkProto, TickOutput

logger = logging.getLogger(__name__)


class TickLoop:
    """
    Runs one pipeline step per tick on the event loop.

    Ticks are strictly sequential: the next one is scheduled only after the
    previous step and its presentation have finished. ``stop()`` takes effect
    immediately; no step runs after it and the frame source is released.
    """

    def __init__(self, pipeline: TickPipeline, sink: HudSinkProto,
                 frame_source: Optional[FrameSourceProto] = None,
                 tick_hz: float = 60.0,
                 app_mode: Callable[[], AppMode] = lambda: AppMode.IDLE):
        if tick_hz <= 0:
            raise ValueError(f"tick_hz must be positive, got {tick_hz}")
        self.pipeline = pipeline
        self.sink = sink
        self.frame_source = frame_source
        self.period_s = 1.0 / tick_hz
        self.app_mode = app_mode
        self.ticks = 0
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    async def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick until stopped (or max_ticks reached).

        Returns:
            Number of ticks processed
        """
        logger.info(f"Tick loop started at {1.0 / self.period_s:.0f} Hz")
        while not self._stopped:
            if max_ticks is not None and self.ticks >= max_ticks:
                break
            t_start = time.monotonic()
            await self.tick()
            elapsed = time.monotonic() - t_start
            await asyncio.sleep(max(0.0, self.period_s - elapsed))
        logger.info(f"Tick loop finished after {self.ticks} ticks")
        return self.ticks

    async def tick(self) -> Optional[TickOutput]:
        """Process exactly one tick; returns None if the loop is stopped."""
        if self._stopped:
            return None

        observation = self._read_observation()
        if self._stopped:
            return None

        output = self.pipeline.step(observation, self.app_mode())
        self.ticks += 1
        await self.sink.present(output)
        return output

    def stop(self) -> None:
        """Stop scheduling ticks and release the frame source."""
        if self._stopped:
            return
        self._stopped = True
        self.pipeline.close()
        if self.frame_source is not None:
            try:
                self.frame_source.close()
            except Exception as e:
                logger.warning(f"Error closing frame source: {e}")
            self.frame_source = None

    def _read_observation(self) -> Optional[FrameObservation]:
        if self.frame_source is None:
            return None
        try:
            return self.frame_source.read()
        except Exception as e:
            # A failed read is a tick without detection, not a crash
            logger.warning(f"Frame source read failed: {e}")
            return None
