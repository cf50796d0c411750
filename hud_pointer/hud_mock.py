"""
Mock HUD sink that records and logs pipeline output instead of drawing it.
"""
import logging
from typing import List, Optional

from .types import TickOutput

logger = logging.getLogger(__name__)


class MockHud:
    """Mock sink that logs gesture and mode changes instead of rendering."""

    def __init__(self, keep_history: bool = False):
        """Initialize the mock HUD."""
        self.frame_count = 0
        self.keep_history = keep_history
        self.history: List[TickOutput] = []
        self._last: Optional[TickOutput] = None

    async def present(self, output: TickOutput) -> None:
        """Log what a real HUD would show."""
        self.frame_count += 1
        if self.keep_history:
            self.history.append(output)

        last = self._last
        if last is None or last.confirmed_gesture != output.confirmed_gesture:
            logger.info(f"[MockHud] Gesture: {output.confirmed_gesture} (frame #{self.frame_count})")
        if last is None or last.effective_mode != output.effective_mode:
            logger.info(f"[MockHud] Mode: {output.effective_mode.value} (frame #{self.frame_count})")
        self._last = output

    def reset_counters(self) -> None:
        """Reset counters for testing."""
        self.frame_count = 0
        self.history.clear()
        self._last = None
