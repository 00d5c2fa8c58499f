"""Tests for page and overlay geometry."""

from __future__ import annotations

from vibrissa.layout import (
    SECTION_ORDER, Rect, grid_cells, hit_index, is_narrow, page_layout,
    story_modal, story_modal_close, surface_layout,
)


def test_sections_stack_in_order() -> None:
    layout = page_layout(1280, 800)
    ys = [layout.sections[name].y for name in SECTION_ORDER]
    assert ys == sorted(ys)
    assert layout.sections["hero"].h == 800
    last = layout.sections[SECTION_ORDER[-1]]
    assert layout.content_h == int(last.bottom)


def test_section_at_and_on_screen() -> None:
    layout = page_layout(1280, 800)
    assert layout.section_at(0) == "hero"
    sketch = layout.sections["sketchbook"]
    assert layout.section_at(sketch.y + 1) == "sketchbook"
    assert layout.section_at(layout.content_h + 10) is None
    assert layout.on_screen("sketchbook", sketch.y).y == 0


def test_narrow_breakpoint() -> None:
    assert is_narrow(768)
    assert not is_narrow(769)


def test_surface_card_inside_section() -> None:
    section = Rect(0, 800, 1280, 800)
    sl = surface_layout(section)
    assert section.contains(sl.card.x, sl.card.y)
    assert section.contains(sl.card.x + sl.card.w, sl.card.bottom)
    assert sl.card.contains(sl.prev_btn.cx, sl.prev_btn.cy)
    assert sl.card.contains(sl.next_btn.cx, sl.next_btn.cy)


def test_grid_hit_testing() -> None:
    cells = grid_cells(1280, 800, 5)
    assert len(cells) == 5
    assert cells[3].y > cells[0].y
    assert hit_index(cells, cells[4].cx, cells[4].cy) == 4
    assert hit_index(cells, 1, 1) is None
    assert grid_cells(1280, 800, 0) == []


def test_story_modal_close_inside_modal() -> None:
    m = story_modal(1280, 800)
    c = story_modal_close(m)
    assert m.contains(c.x, c.y) and m.contains(c.x + c.w, c.bottom)
