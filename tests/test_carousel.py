"""Tests for the narrow-window carousel tracker."""

from __future__ import annotations

from vibrissa.state.carousel import CarouselTracker


def tracker(count: int = 5, viewport_w: float = 400) -> CarouselTracker:
    c = CarouselTracker(card_w=260, gap=16)
    c.reset(count, viewport_w)
    c.on_frame()
    return c


def test_first_card_centred_after_reset() -> None:
    c = tracker()
    assert c.leading_pad == 70
    assert c.card_centers()[0] == 200
    assert c.active_index == 0


def test_scroll_to_centres_card() -> None:
    c = tracker()
    c.scroll_to(2)
    assert c.on_frame()
    assert c.active_index == 2
    assert c.card_centers()[2] == 200


def test_recompute_throttled_to_once_per_frame() -> None:
    c = tracker()
    before = c.recomputes
    for _ in range(25):
        c.scroll_by(30)
    assert c.active_index == 0
    assert c.on_frame()
    assert not c.on_frame()
    assert c.recomputes == before + 1
    assert c.active_index == 3  # offset 750


def test_offset_clamped() -> None:
    c = tracker()
    c.scroll_by(-100)
    assert c.offset == 0
    c.scroll_by(10_000)
    assert c.offset == c.max_offset
    c.on_frame()
    assert c.active_index == 4


def test_empty_carousel() -> None:
    c = tracker(count=0)
    assert c.card_centers() == []
    assert c.max_offset == 0
    assert c.active_index == 0
