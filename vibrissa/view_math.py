"""Pure view calculation functions - no side effects, no state mutation."""

from __future__ import annotations
from typing import Sequence, Tuple

from .types import CoverView
from .math_utils import clamp
from .config import (
    HERO_FADE_START_PX, HERO_FADE_LENGTH_PX, HERO_LIFT_FACTOR,
    SCROLL_SPAN_VIEWPORTS,
)


def compute_cover_scale(
    img_w: int,
    img_h: int,
    canvas_w: int,
    canvas_h: int
) -> float:
    """Compute the scale at which an image fully covers the canvas.

    Args:
        img_w: Image width in pixels.
        img_h: Image height in pixels.
        canvas_w: Canvas width in pixels.
        canvas_h: Canvas height in pixels.

    Returns:
        The larger of the horizontal and vertical ratios.
    """
    if img_w <= 0 or img_h <= 0:
        return 1.0
    return max(canvas_w / img_w, canvas_h / img_h)


def compute_cover_view(
    img_w: int,
    img_h: int,
    canvas_w: int,
    canvas_h: int
) -> CoverView:
    """Cover-fit placement: scaled image centred on the canvas.

    Offsets go negative on the overflowing axis; the overflow is clipped
    by the canvas.
    """
    scale = compute_cover_scale(img_w, img_h, canvas_w, canvas_h)
    return CoverView(
        scale=scale,
        offx=(canvas_w - img_w * scale) / 2.0,
        offy=(canvas_h - img_h * scale) / 2.0,
    )


def progress_for_scroll_offset(
    scroll_offset: float,
    viewport_h: float,
    frame_count: int
) -> float:
    """Map an absolute page scroll offset onto sequence progress.

    The whole sequence plays across SCROLL_SPAN_VIEWPORTS viewport heights.
    """
    if frame_count <= 0 or viewport_h <= 0:
        return 0.0
    fraction = clamp(scroll_offset / (SCROLL_SPAN_VIEWPORTS * viewport_h), 0.0, 1.0)
    return fraction * (frame_count - 1)


def nearest_center_index(item_centers: Sequence[float], viewport_center: float) -> int:
    """Index of the item whose centre is closest to the viewport centre.

    Ties resolve to the lower index. An empty sequence yields 0.
    """
    closest_index = 0
    closest_distance = float("inf")
    for i, c in enumerate(item_centers):
        d = abs(viewport_center - c)
        if d < closest_distance:
            closest_distance = d
            closest_index = i
    return closest_index


def hero_overlay(scroll_y: float) -> Tuple[float, float]:
    """Opacity and upward lift of the hero title block for a page offset."""
    if scroll_y <= HERO_FADE_START_PX:
        return 1.0, 0.0
    past = scroll_y - HERO_FADE_START_PX
    opacity = max(0.0, 1.0 - past / HERO_FADE_LENGTH_PX)
    return opacity, past * HERO_LIFT_FACTOR
