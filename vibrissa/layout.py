"""Page geometry shared by the renderer and the input handler.

All functions are pure. Section rects are in page coordinates; everything
else is in screen coordinates unless noted.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .config import GRID_COLUMNS, GRID_CELL_GAP, MOBILE_BREAKPOINT_PX

SECTION_ORDER = ("hero", "sketchbook", "photography", "music", "stories")
GALLERY_SECTIONS = ("sketchbook", "photography", "music")
MIN_SECTION_H = 560
NAV_BTN_SIZE = 44
CLOSE_BTN_SIZE = 40


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    @property
    def cx(self) -> float:
        return self.x + self.w / 2.0

    @property
    def cy(self) -> float:
        return self.y + self.h / 2.0

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h

    def shifted(self, dy: float) -> Rect:
        return Rect(self.x, self.y + dy, self.w, self.h)


def is_narrow(viewport_w: float) -> bool:
    return viewport_w <= MOBILE_BREAKPOINT_PX


def hit_index(rects: Sequence[Rect], x: float, y: float) -> Optional[int]:
    for i, r in enumerate(rects):
        if r.contains(x, y):
            return i
    return None


@dataclass(frozen=True)
class PageLayout:
    sections: Dict[str, Rect]
    content_h: int

    def on_screen(self, name: str, scroll_y: float) -> Rect:
        return self.sections[name].shifted(-scroll_y)

    def section_at(self, page_y: float) -> Optional[str]:
        for name in SECTION_ORDER:
            r = self.sections[name]
            if r.y <= page_y < r.bottom:
                return name
        return None


def page_layout(viewport_w: int, viewport_h: int) -> PageLayout:
    sections: Dict[str, Rect] = {}
    y = 0.0
    for name in SECTION_ORDER:
        h = viewport_h if name == "hero" else max(viewport_h, MIN_SECTION_H)
        sections[name] = Rect(0, y, viewport_w, h)
        y += h
    return PageLayout(sections=sections, content_h=int(y))


@dataclass(frozen=True)
class SurfaceLayout:
    panel: Rect
    card: Rect
    prev_btn: Rect
    next_btn: Rect
    grid_btn: Rect
    play_btn: Rect
    progress_bar: Rect


def surface_layout(section: Rect) -> SurfaceLayout:
    margin = 32
    if is_narrow(section.w):
        card = Rect(section.x + margin, section.y + margin,
                    section.w - 2 * margin, section.h * 0.55)
        panel = Rect(section.x + margin, card.bottom + 16,
                     section.w - 2 * margin, section.bottom - card.bottom - 16 - margin)
    else:
        panel = Rect(section.x + margin * 2, section.y + section.h * 0.2,
                     section.w * 0.36, section.h * 0.6)
        card_w = section.w * 0.46
        card = Rect(section.x + section.w - card_w - margin * 2, section.y + section.h * 0.15,
                    card_w, section.h * 0.7)
    btn_y = card.cy - NAV_BTN_SIZE / 2
    return SurfaceLayout(
        panel=panel,
        card=card,
        prev_btn=Rect(card.x + 12, btn_y, NAV_BTN_SIZE, NAV_BTN_SIZE),
        next_btn=Rect(card.x + card.w - 12 - NAV_BTN_SIZE, btn_y, NAV_BTN_SIZE, NAV_BTN_SIZE),
        grid_btn=Rect(panel.x, panel.bottom - 104, 160, 36),
        play_btn=Rect(panel.x, panel.bottom - 52, NAV_BTN_SIZE, NAV_BTN_SIZE),
        progress_bar=Rect(panel.x + NAV_BTN_SIZE + 16, panel.bottom - 34,
                          max(40.0, panel.w - NAV_BTN_SIZE - 16), 8),
    )


def grid_close_btn(viewport_w: int, viewport_h: int) -> Rect:
    return Rect(viewport_w - CLOSE_BTN_SIZE - 24, 24, CLOSE_BTN_SIZE, CLOSE_BTN_SIZE)


def grid_cells(viewport_w: int, viewport_h: int, count: int,
               columns: int = GRID_COLUMNS) -> List[Rect]:
    """Cells of the wide-window grid overlay."""
    if count <= 0:
        return []
    top = 96
    side = 64
    cell_w = (viewport_w - 2 * side - (columns - 1) * GRID_CELL_GAP) / columns
    cell_h = cell_w * 0.75
    rects = []
    for i in range(count):
        row, col = divmod(i, columns)
        rects.append(Rect(side + col * (cell_w + GRID_CELL_GAP),
                          top + row * (cell_h + GRID_CELL_GAP), cell_w, cell_h))
    return rects


def carousel_cards(centers: Sequence[float], card_w: float, viewport_h: int) -> List[Rect]:
    """Card rects of the narrow-window carousel from tracker card centres."""
    card_h = card_w * 1.3
    top = (viewport_h - card_h) / 2.0
    return [Rect(c - card_w / 2.0, top, card_w, card_h) for c in centers]


def carousel_dots(count: int, viewport_w: int, viewport_h: int) -> List[Rect]:
    size = 10
    gap = 10
    total = count * size + max(0, count - 1) * gap
    x0 = (viewport_w - total) / 2.0
    y = viewport_h - 60
    return [Rect(x0 + i * (size + gap), y, size, size) for i in range(count)]


def story_cards(section: Rect, count: int) -> List[Rect]:
    if count <= 0:
        return []
    margin = 48
    gap = 24
    top = section.y + 180
    if is_narrow(section.w):
        h = (section.h - 220 - (count - 1) * gap) / count
        return [Rect(section.x + margin / 2, top + i * (h + gap), section.w - margin, h)
                for i in range(count)]
    w = (section.w - 2 * margin - (count - 1) * gap) / count
    return [Rect(section.x + margin + i * (w + gap), top, w, section.h * 0.5)
            for i in range(count)]


def story_modal(viewport_w: int, viewport_h: int) -> Rect:
    w = min(720, viewport_w - 48)
    h = min(520, viewport_h - 48)
    return Rect((viewport_w - w) / 2.0, (viewport_h - h) / 2.0, w, h)


def story_modal_close(modal: Rect) -> Rect:
    return Rect(modal.x + modal.w - CLOSE_BTN_SIZE - 12, modal.y + 12, CLOSE_BTN_SIZE, CLOSE_BTN_SIZE)
