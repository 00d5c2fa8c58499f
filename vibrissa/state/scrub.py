"""Scrub state - hero frame progress driven by wheel and touch input.

Input hijack drive: while the page sits at its top, vertical deltas move
the sequence instead of the page. Forward input stops being captured once
the last frame is reached; backward input from the last frame is captured
again until the sequence rewinds.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional

from ..config import FRAME_COUNT, SCRUB_SENSITIVITY, SCRUB_TOP_TOLERANCE_PX
from ..math_utils import clamp, is_finite
from ..logging import log


@dataclass
class ScrubState:
    """Continuous progress over a fixed-length frame sequence."""
    frame_count: int = FRAME_COUNT
    progress: float = 0.0

    @property
    def last_index(self) -> int:
        return max(0, self.frame_count - 1)

    @property
    def frame_index(self) -> int:
        return int(math.floor(self.progress))

    @property
    def is_at_start(self) -> bool:
        return self.progress <= 0.0

    @property
    def is_at_end(self) -> bool:
        return self.progress >= self.last_index

    @property
    def is_at_boundary(self) -> bool:
        return self.is_at_start or self.is_at_end

    def set_progress(self, value: float) -> None:
        self.progress = clamp(float(value), 0.0, float(self.last_index))


class ScrubController:
    """Turns input deltas into progress and schedules at most one redraw."""

    def __init__(
        self,
        state: Optional[ScrubState] = None,
        sensitivity: float = SCRUB_SENSITIVITY,
        top_tolerance: float = SCRUB_TOP_TOLERANCE_PX,
    ):
        self.state = state or ScrubState()
        self.sensitivity = sensitivity
        self.top_tolerance = top_tolerance
        self.active = False
        self.canvas_w = 0
        self.canvas_h = 0
        self._touch_y: Optional[float] = None
        self._drawn_index: Optional[int] = None
        self._pending_index: Optional[int] = None

    # ═══════════════════════════════════════════════════════════════════════
    # Lifecycle
    # ═══════════════════════════════════════════════════════════════════════

    def start(self, sequence) -> bool:
        """Begin accepting input once the frame source is usable."""
        if sequence is None or not sequence.ready:
            log("[SCRUB] Frame source unavailable, controller stays idle")
            self.active = False
            return False
        self.state.frame_count = sequence.count
        self.state.set_progress(self.state.progress)
        self.active = True
        self._drawn_index = None
        self._schedule(force=True)
        log(f"[SCRUB] Started over {sequence.count} frames")
        return True

    def stop(self) -> None:
        self.active = False
        self._touch_y = None
        self._pending_index = None

    # ═══════════════════════════════════════════════════════════════════════
    # Input
    # ═══════════════════════════════════════════════════════════════════════

    def should_hijack(self, delta_y: float, page_scroll_y: float) -> bool:
        """Whether this delta drives the sequence instead of the page."""
        if not self.active:
            return False
        at_top = page_scroll_y < self.top_tolerance
        running = self.state.progress < self.state.last_index
        reversing_at_end = not running and delta_y < 0
        return at_top and (running or reversing_at_end)

    def handle_delta(self, delta_y: float, page_scroll_y: float) -> bool:
        """Apply a wheel/drag delta. Returns True when page scroll is suppressed."""
        if not is_finite(delta_y) or not self.should_hijack(delta_y, page_scroll_y):
            return False
        self.state.set_progress(self.state.progress + delta_y * self.sensitivity)
        self._schedule()
        return True

    def touch_start(self, y: float) -> None:
        self._touch_y = y

    def touch_move(self, y: float, page_scroll_y: float) -> bool:
        if self._touch_y is None:
            return False
        # Finger moving up is a positive (forward) delta
        delta_y = self._touch_y - y
        self._touch_y = y
        return self.handle_delta(delta_y, page_scroll_y)

    def touch_end(self) -> None:
        self._touch_y = None

    @property
    def touching(self) -> bool:
        return self._touch_y is not None

    @property
    def touch_y(self) -> Optional[float]:
        return self._touch_y

    # ═══════════════════════════════════════════════════════════════════════
    # Redraw scheduling
    # ═══════════════════════════════════════════════════════════════════════

    def resize(self, w: int, h: int) -> None:
        """Reset the canvas size and force a redraw at the new fit."""
        self.canvas_w = int(w)
        self.canvas_h = int(h)
        if self.active:
            self._schedule(force=True)

    def _schedule(self, force: bool = False) -> None:
        idx = self.state.frame_index
        if force or idx != self._drawn_index:
            # Replaces any redraw that has not been taken yet
            self._pending_index = idx

    @property
    def redraw_pending(self) -> bool:
        return self._pending_index is not None

    def take_redraw(self) -> Optional[int]:
        """Pop the pending frame index, if any."""
        idx = self._pending_index
        self._pending_index = None
        if idx is not None:
            self._drawn_index = idx
        return idx
