"""
Run-length debouncing of the detector's per-tick gesture labels.
"""
import logging
from typing import Optional, Sequence

from .types import GestureBufferState, GestureCandidate, NO_GESTURE

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_FLOOR = 0.6
DEFAULT_CONFIRM_AFTER = 4


class GestureDebouncer:
    """
    Turns a flickering top-1 label stream into a stable confirmed gesture.

    Features:
    - Confidence floor on the best candidate
    - Rising edge only after more than ``confirm_after`` consecutive agreeing ticks
    - Falling edge the moment the run length drops to zero
    - Previous confirmation held while a new run is building
    """

    def __init__(self, confidence_floor: float = DEFAULT_CONFIDENCE_FLOOR,
                 confirm_after: int = DEFAULT_CONFIRM_AFTER):
        """Initialize debouncer thresholds and an empty buffer."""
        self.confidence_floor = confidence_floor
        self.confirm_after = confirm_after
        self.buffer = GestureBufferState()
        self._confirmed = NO_GESTURE

    @property
    def confirmed(self) -> str:
        """The gesture consumers should act on, or "None"."""
        return self._confirmed

    def update(self, candidates: Sequence[GestureCandidate]) -> str:
        """
        Consume one tick's ranked candidates and return the confirmed gesture.

        Args:
            candidates: Gesture candidates, best first (may be empty)

        Returns:
            Confirmed gesture label, or "None"
        """
        best: Optional[GestureCandidate] = candidates[0] if candidates else None

        if best is not None and best.score > self.confidence_floor:
            if best.label == self.buffer.label:
                self.buffer.run_length += 1
            else:
                self.buffer = GestureBufferState(label=best.label, run_length=1)
        else:
            # Label is kept but meaningless once the count is zero
            self.buffer.run_length = 0

        previous = self._confirmed
        if self.buffer.run_length > self.confirm_after:
            self._confirmed = self.buffer.label
        elif self.buffer.run_length == 0:
            self._confirmed = NO_GESTURE

        if self._confirmed != previous:
            if self._confirmed == NO_GESTURE:
                logger.info(f"Gesture released: {previous}")
            else:
                logger.info(f"Gesture confirmed: {self._confirmed}")

        return self._confirmed

    def reset(self) -> None:
        self.buffer = GestureBufferState()
        self._confirmed = NO_GESTURE
