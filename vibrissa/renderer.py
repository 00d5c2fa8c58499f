"""Renderer - handles all drawing operations.

The Renderer only reads state and draws to screen. The one exception is
the hero canvas: a render texture that is repainted only when the scrub
controller hands over a pending redraw.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .state import AppState
    from .frames import FrameSequence
    from .images import ImageStore

from .rl_compat import (
    rl, make_rect as RL_Rect, make_vec2 as RL_V2, make_color as RL_Color, rgb,
    draw_text as RL_DrawText, measure_text, is_texture_valid,
)
from .types import CoverView, GalleryItem, TextureInfo
from .view_math import compute_cover_view, hero_overlay
from .layout import (
    Rect, PageLayout, is_narrow, page_layout, surface_layout,
    grid_cells, grid_close_btn, carousel_cards, carousel_dots,
    story_cards, story_modal, story_modal_close,
)
from .player import format_time
from .config import COLOR_BG, COLOR_TEXT, COLOR_MUTED, COLOR_ACCENT, COLOR_PANEL
from .state.gallery import GalleryModel

SURFACE_TITLES = {
    "sketchbook": ("From the Sketchbook", "Process & Practice"),
    "photography": ("Through the Lens", "Frames"),
    "music": ("Vibrissa Sound", "Vol. 01"),
}


def wrap_lines(text: str, size: int, max_w: float) -> List[str]:
    lines: List[str] = []
    line = ""
    for word in (text or "").split():
        candidate = f"{line} {word}".strip()
        if line and measure_text(candidate, size) > max_w:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines


@dataclass
class HeroCanvas:
    """Off-screen canvas holding the last drawn hero frame."""
    target: Any = None
    w: int = 0
    h: int = 0

    def ensure_size(self, w: int, h: int) -> None:
        if self.target is not None and (w, h) == (self.w, self.h):
            return
        self.release()
        self.target = rl.LoadRenderTexture(w, h)
        self.w, self.h = w, h

    def paint(self, frame) -> None:
        """Clear the canvas and blit the frame with a cover fit."""
        if self.target is None:
            return
        rl.BeginTextureMode(self.target)
        rl.ClearBackground(rgb(COLOR_BG))
        if frame is not None and is_texture_valid(frame.handle):
            v = compute_cover_view(frame.w, frame.h, self.w, self.h)
            rl.DrawTexturePro(
                frame.handle,
                RL_Rect(0, 0, frame.w, frame.h),
                RL_Rect(v.offx, v.offy, frame.w * v.scale, frame.h * v.scale),
                RL_V2(0, 0), 0.0, RL_Color(255, 255, 255, 255)
            )
        rl.EndTextureMode()

    def draw(self, y: float) -> None:
        if self.target is None:
            return
        # Render textures are stored upside down
        rl.DrawTextureRec(self.target.texture, RL_Rect(0, 0, self.w, -self.h),
                          RL_V2(0, y), RL_Color(255, 255, 255, 255))

    def release(self) -> None:
        if self.target is not None:
            rl.UnloadRenderTexture(self.target)
            self.target = None


@dataclass
class Renderer:
    """
    Handles all drawing operations.

    Usage:
        renderer = Renderer()
        renderer.draw_frame(state, frames, images)
    """
    hero: HeroCanvas = field(default_factory=HeroCanvas)

    def draw_frame(self, state: "AppState", frames: Optional["FrameSequence"],
                   images: Optional["ImageStore"]) -> None:
        vw, vh = state.page.viewport_w, state.page.viewport_h
        layout = page_layout(vw, vh)
        self._update_hero_canvas(state, frames, vw, vh)

        rl.BeginDrawing()
        rl.ClearBackground(rgb(COLOR_BG))
        self.draw_hero(state, layout)
        for name in ("sketchbook", "photography", "music"):
            self.draw_surface(state, layout, state.gallery(name), images)
        self.draw_stories(state, layout)

        grid = state.open_grid
        if grid is not None:
            self.draw_grid(state, grid, images)
        if state.page.selected_story is not None:
            self.draw_story_modal(state)
        rl.EndDrawing()

    # ═══════════════════════════════════════════════════════════════════════
    # Hero
    # ═══════════════════════════════════════════════════════════════════════

    def _update_hero_canvas(self, state: "AppState", frames, vw: int, vh: int) -> None:
        if vw <= 0 or vh <= 0:
            return
        self.hero.ensure_size(vw, vh)
        idx = state.scrub.take_redraw()
        if idx is None or frames is None:
            return
        self.hero.paint(frames.frame_at(idx))

    def draw_hero(self, state: "AppState", layout: PageLayout) -> None:
        r = layout.on_screen("hero", state.page.scroll_y)
        if r.bottom <= 0:
            return
        self.hero.draw(r.y)
        rl.DrawRectangleGradientV(int(r.x), int(r.y), int(r.w), int(r.h),
                                  RL_Color(0, 0, 0, 0), RL_Color(0, 0, 0, 160))

        opacity, lift = hero_overlay(state.page.scroll_y)
        if opacity <= 0.0:
            return
        cy = r.y + r.h * 0.42 - lift
        self._centered("CURATED EXCELLENCE", cy - 70, 18, rgb(COLOR_ACCENT, opacity), r.w)
        self._centered("Vibrissa", cy - 36, 72, rgb(COLOR_TEXT, opacity), r.w)
        for i, line in enumerate(wrap_lines(
                "Where timeless artistry meets contemporary elegance.", 20, r.w * 0.6)):
            self._centered(line, cy + 56 + i * 26, 20, rgb(COLOR_MUTED, opacity), r.w)

    def _centered(self, text: str, y: float, size: int, color, width: float) -> None:
        RL_DrawText(text, int((width - measure_text(text, size)) / 2), int(y), size, color)

    # ═══════════════════════════════════════════════════════════════════════
    # Surfaces
    # ═══════════════════════════════════════════════════════════════════════

    def draw_image_cover(self, ti: Optional[TextureInfo], r: Rect) -> None:
        """Cover-fit an image into r, clipping the overflow."""
        if ti is None or not is_texture_valid(ti.tex):
            rl.DrawRectangle(int(r.x), int(r.y), int(r.w), int(r.h), rgb(COLOR_PANEL))
            return
        v: CoverView = compute_cover_view(ti.w, ti.h, int(r.w), int(r.h))
        rl.BeginScissorMode(int(r.x), int(r.y), int(r.w), int(r.h))
        rl.DrawTexturePro(
            ti.tex,
            RL_Rect(0, 0, ti.w, ti.h),
            RL_Rect(r.x + v.offx, r.y + v.offy, ti.w * v.scale, ti.h * v.scale),
            RL_V2(0, 0), 0.0, RL_Color(255, 255, 255, 255)
        )
        rl.EndScissorMode()

    def _image_for(self, images, item: Optional[GalleryItem]) -> Optional[TextureInfo]:
        if images is None or item is None:
            return None
        images.request(item.image_ref)
        return images.get(item.image_ref)

    def draw_surface(self, state: "AppState", layout: PageLayout, g: GalleryModel, images) -> None:
        section = layout.on_screen(g.name, state.page.scroll_y)
        if section.bottom <= 0 or section.y >= state.page.viewport_h:
            return
        sl = surface_layout(section)
        item = g.current_item

        self.draw_image_cover(self._image_for(images, item), sl.card)
        rl.DrawRectangleLines(int(sl.card.x), int(sl.card.y), int(sl.card.w), int(sl.card.h),
                              rgb(COLOR_ACCENT, 0.6))

        if not g.is_expanded:
            self._centered_in("Click to Open", sl.card, 22)
            return

        for btn, glyph in ((sl.prev_btn, "<"), (sl.next_btn, ">")):
            rl.DrawCircle(int(btn.cx), int(btn.cy), btn.w / 2, RL_Color(0, 0, 0, 140))
            self._centered_in(glyph, btn, 22)

        subtitle, heading = SURFACE_TITLES.get(g.name, ("", g.name))
        p = sl.panel
        RL_DrawText(subtitle.upper(), int(p.x), int(p.y), 16, rgb(COLOR_ACCENT))
        RL_DrawText(heading, int(p.x), int(p.y + 24), 20, rgb(COLOR_MUTED))
        if item is None:
            return
        RL_DrawText(item.title, int(p.x), int(p.y + 60), 34, rgb(COLOR_TEXT))
        y = p.y + 104
        if item.artist:
            RL_DrawText(item.artist, int(p.x), int(y), 20, rgb(COLOR_ACCENT))
            y += 30
        desc = item.description or ""
        if g.name == "music":
            desc = f"{g.current_index + 1} of {len(g.items)} | {desc or 'Featured Track'}"
        for line in wrap_lines(desc, 18, p.w)[:6]:
            RL_DrawText(line, int(p.x), int(y), 18, rgb(COLOR_MUTED))
            y += 24

        if g.config.expand_advances_to_grid:
            b = sl.grid_btn
            rl.DrawRectangleLines(int(b.x), int(b.y), int(b.w), int(b.h), rgb(COLOR_ACCENT))
            self._centered_in("View Library", b, 16)
        if g.name == "music":
            self.draw_player_bar(state, sl)

    def draw_player_bar(self, state: "AppState", sl) -> None:
        session = state.player
        playing = session is not None and session.is_playing
        b = sl.play_btn
        rl.DrawCircle(int(b.cx), int(b.cy), b.w / 2, rgb(COLOR_ACCENT if playing else COLOR_PANEL))
        self._centered_in("||" if playing else ">", b, 20)

        bar = sl.progress_bar
        frac = session.progress_fraction() if session is not None else 0.0
        rl.DrawRectangle(int(bar.x), int(bar.y), int(bar.w), int(bar.h), rgb(COLOR_PANEL))
        rl.DrawRectangle(int(bar.x), int(bar.y), int(bar.w * frac), int(bar.h), rgb(COLOR_ACCENT))
        if session is not None:
            label = (f"{format_time(session.player.current_time())} / "
                     f"{format_time(session.player.duration())}")
            RL_DrawText(label, int(bar.x), int(bar.y + 14), 14, rgb(COLOR_MUTED))

    def _centered_in(self, text: str, r: Rect, size: int) -> None:
        w = measure_text(text, size)
        RL_DrawText(text, int(r.cx - w / 2), int(r.cy - size / 2), size, rgb(COLOR_TEXT))

    # ═══════════════════════════════════════════════════════════════════════
    # Grid overlay
    # ═══════════════════════════════════════════════════════════════════════

    def draw_grid(self, state: "AppState", g: GalleryModel, images) -> None:
        vw, vh = state.page.viewport_w, state.page.viewport_h
        rl.DrawRectangle(0, 0, vw, vh, RL_Color(0, 0, 0, 230))
        RL_DrawText(g.name.upper(), 64, 40, 24, rgb(COLOR_ACCENT))

        if is_narrow(vw):
            c = state.carousel
            cards = carousel_cards(c.card_centers(), c.card_w, vh)
            dots = carousel_dots(len(g.items), vw, vh)
            active = c.active_index
        else:
            cards = grid_cells(vw, vh, len(g.items))
            dots = []
            active = g.current_index

        for i, (item, r) in enumerate(zip(g.items, cards)):
            if r.x + r.w < 0 or r.x > vw:
                continue
            self.draw_image_cover(self._image_for(images, item), r)
            color = COLOR_ACCENT if i == active else COLOR_MUTED
            rl.DrawRectangleLines(int(r.x), int(r.y), int(r.w), int(r.h), rgb(color))
            RL_DrawText(item.title, int(r.x + 10), int(r.bottom - 28), 18, rgb(COLOR_TEXT))

        for i, d in enumerate(dots):
            color = COLOR_ACCENT if i == active else COLOR_MUTED
            rl.DrawCircle(int(d.cx), int(d.cy), d.w / 2, rgb(color))

        close = grid_close_btn(vw, vh)
        rl.DrawCircleLines(int(close.cx), int(close.cy), close.w / 2, rgb(COLOR_TEXT))
        self._centered_in("x", close, 22)

    # ═══════════════════════════════════════════════════════════════════════
    # Stories
    # ═══════════════════════════════════════════════════════════════════════

    def draw_stories(self, state: "AppState", layout: PageLayout) -> None:
        section = layout.on_screen("stories", state.page.scroll_y)
        if section.bottom <= 0 or section.y >= state.page.viewport_h:
            return
        self._centered("THE GIANTS WE STAND ON", section.y + 60, 16, rgb(COLOR_ACCENT), section.w)
        self._centered("Legends of the Craft", section.y + 88, 40, rgb(COLOR_TEXT), section.w)
        for story, r in zip(state.page.stories,
                            story_cards(section, len(state.page.stories))):
            rl.DrawRectangle(int(r.x), int(r.y), int(r.w), int(r.h), rgb(COLOR_PANEL))
            RL_DrawText(story.monogram, int(r.x + r.w - 90), int(r.y + 10), 96, rgb(COLOR_MUTED, 0.25))
            RL_DrawText(story.era.upper(), int(r.x + 20), int(r.y + 24), 14, rgb(COLOR_ACCENT))
            RL_DrawText(story.name, int(r.x + 20), int(r.y + 48), 26, rgb(COLOR_TEXT))
            y = r.y + 90
            for line in wrap_lines(f'"{story.quote}"', 16, r.w - 40)[:4]:
                RL_DrawText(line, int(r.x + 20), int(y), 16, rgb(COLOR_MUTED))
                y += 22
            RL_DrawText("Read Story ->", int(r.x + 20), int(r.bottom - 36), 16, rgb(COLOR_ACCENT))

    def draw_story_modal(self, state: "AppState") -> None:
        story = state.page.selected_story
        vw, vh = state.page.viewport_w, state.page.viewport_h
        rl.DrawRectangle(0, 0, vw, vh, RL_Color(0, 0, 0, 200))
        m = story_modal(vw, vh)
        rl.DrawRectangle(int(m.x), int(m.y), int(m.w), int(m.h), rgb(COLOR_PANEL))
        close = story_modal_close(m)
        self._centered_in("x", close, 22)
        RL_DrawText(story.era.upper(), int(m.x + 32), int(m.y + 32), 14, rgb(COLOR_ACCENT))
        RL_DrawText(story.name, int(m.x + 32), int(m.y + 56), 34, rgb(COLOR_TEXT))
        y = m.y + 110
        for line in wrap_lines(story.full_story, 18, m.w - 64):
            RL_DrawText(line, int(m.x + 32), int(y), 18, rgb(COLOR_MUTED))
            y += 26
        for line in wrap_lines(f'"{story.quote}"', 18, m.w - 64):
            RL_DrawText(line, int(m.x + 32), int(y + 16), 18, rgb(COLOR_ACCENT))
            y += 26

    def release(self) -> None:
        self.hero.release()


_renderer: Optional[Renderer] = None


def get_renderer() -> Renderer:
    """Get the renderer instance."""
    global _renderer
    if _renderer is None:
        _renderer = Renderer()
    return _renderer
