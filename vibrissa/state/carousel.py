"""Carousel state - active card tracking for the narrow-window grid."""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from ..config import CAROUSEL_CARD_W, CAROUSEL_CARD_GAP
from ..math_utils import clamp
from ..view_math import nearest_center_index


@dataclass
class CarouselTracker:
    """Horizontally scrolling strip of equal cards.

    Scroll updates only mark the active card stale; the recompute runs at
    most once per frame in on_frame().
    """
    count: int = 0
    viewport_w: float = 0.0
    card_w: float = CAROUSEL_CARD_W
    gap: float = CAROUSEL_CARD_GAP
    offset: float = 0.0
    active_index: int = 0
    recomputes: int = 0
    _dirty: bool = False

    @property
    def content_w(self) -> float:
        if self.count <= 0:
            return 0.0
        return self.count * self.card_w + (self.count - 1) * self.gap

    @property
    def leading_pad(self) -> float:
        # Padding so the first and last cards can reach the centre
        return max(0.0, (self.viewport_w - self.card_w) / 2.0)

    @property
    def max_offset(self) -> float:
        return max(0.0, self.content_w + 2 * self.leading_pad - self.viewport_w)

    def card_centers(self) -> List[float]:
        """Card centres in viewport coordinates for the current offset."""
        step = self.card_w + self.gap
        base = self.leading_pad - self.offset + self.card_w / 2.0
        return [base + i * step for i in range(self.count)]

    def reset(self, count: int, viewport_w: float) -> None:
        self.count = count
        self.viewport_w = viewport_w
        self.offset = 0.0
        self.active_index = 0
        self._dirty = True

    def on_scroll(self, offset: float) -> None:
        self.offset = clamp(offset, 0.0, self.max_offset)
        self._dirty = True

    def scroll_by(self, dx: float) -> None:
        self.on_scroll(self.offset + dx)

    def on_frame(self) -> bool:
        """Recompute the active card if scrolling happened. Returns True if it ran."""
        if not self._dirty:
            return False
        self._dirty = False
        self.recomputes += 1
        self.active_index = nearest_center_index(self.card_centers(), self.viewport_w / 2.0)
        return True

    def offset_for(self, index: int) -> float:
        """Offset that centres card `index`."""
        step = self.card_w + self.gap
        return clamp(index * step, 0.0, self.max_offset)

    def scroll_to(self, index: int) -> None:
        self.on_scroll(self.offset_for(index))
