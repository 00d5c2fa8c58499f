"""Input state - pointer snapshot and swipe tracking."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..config import SWIPE_THRESHOLD_PX


@dataclass
class PointerState:
    """Current mouse/touch state snapshot."""
    x: float = 0.0
    y: float = 0.0
    pressed: bool = False
    released: bool = False
    down: bool = False
    wheel: float = 0.0
    touch_count: int = 0


@dataclass
class SwipeTracker:
    """Horizontal swipe detection between press and release."""
    threshold: float = SWIPE_THRESHOLD_PX
    start_x: Optional[float] = None
    start_y: Optional[float] = None

    @property
    def tracking(self) -> bool:
        return self.start_x is not None

    def begin(self, x: float, y: float = 0.0) -> None:
        self.start_x = x
        self.start_y = y

    def distance(self, x: float) -> float:
        if self.start_x is None:
            return 0.0
        return x - self.start_x

    def end(self, x: float) -> float:
        """Finish the gesture and return its horizontal distance."""
        dx = self.distance(x)
        self.cancel()
        return dx

    def is_swipe(self, dx: float) -> bool:
        return abs(dx) >= self.threshold

    def cancel(self) -> None:
        self.start_x = None
        self.start_y = None
