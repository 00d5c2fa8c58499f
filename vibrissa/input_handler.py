"""Input Handler - maps raylib input events to commands.

This module bridges raw raylib input and the command pattern. It polls
input once per frame and returns the commands to execute, in order.
Overlays (story modal, grid) take input before the page does.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .state import AppState

from .rl_compat import rl
from .commands import (
    Command,
    ScrubWheel, ScrubTouchStart, ScrubTouchMove, ScrubTouchEnd,
    NavigateNext, NavigatePrev, SelectItem, Interact, ToggleGrid, CloseGrid,
    SwipeGallery, CarouselScroll,
    TogglePlay, SeekTrack,
    OpenStory, CloseStory, CloseApp,
)
from .config import (
    SCRUB_WHEEL_PX_PER_NOTCH, PAGE_WHEEL_STEP_PX,
    KEY_NEXT_ITEM, KEY_PREV_ITEM, KEY_TOGGLE_GRID, KEY_INTERACT,
    KEY_TOGGLE_PLAY, KEY_CLOSE,
)
from .layout import (
    GALLERY_SECTIONS, PageLayout, hit_index, is_narrow, page_layout, surface_layout,
    grid_cells, grid_close_btn, carousel_cards, carousel_dots,
    story_cards, story_modal, story_modal_close,
)
from .state.input import PointerState
from .state.gallery import GalleryModel


@dataclass
class InputHandler:
    """Handles input polling and command generation."""

    _touch_active: bool = False
    _swipe_gallery: Optional[str] = None
    commands: List[Command] = field(default_factory=list)

    def poll_pointer(self) -> PointerState:
        pos = rl.GetMousePosition()
        return PointerState(
            x=pos.x,
            y=pos.y,
            pressed=rl.IsMouseButtonPressed(rl.MOUSE_BUTTON_LEFT),
            released=rl.IsMouseButtonReleased(rl.MOUSE_BUTTON_LEFT),
            down=rl.IsMouseButtonDown(rl.MOUSE_BUTTON_LEFT),
            wheel=rl.GetMouseWheelMove(),
            touch_count=rl.GetTouchPointCount(),
        )

    def poll(self, state: "AppState") -> List[Command]:
        self.commands = []
        p = self.poll_pointer()
        layout = page_layout(state.page.viewport_w, state.page.viewport_h)

        if rl.IsKeyPressed(KEY_CLOSE):
            self._on_escape(state)
            return self.commands

        if state.page.selected_story is not None:
            self._poll_story_modal(state, p)
            return self.commands

        grid = state.open_grid
        if grid is not None:
            self._poll_grid(state, grid, p)
            return self.commands

        self._poll_touch(p)
        if p.wheel:
            # raylib reports notches, positive = away from the user
            self.commands.append(ScrubWheel(-p.wheel * SCRUB_WHEEL_PX_PER_NOTCH))
        self._poll_clicks(state, layout, p)
        self._poll_keys(state)
        return self.commands

    # ═══════════════════════════════════════════════════════════════════════
    # Overlays
    # ═══════════════════════════════════════════════════════════════════════

    def _on_escape(self, state: "AppState") -> None:
        if state.page.selected_story is not None:
            self.commands.append(CloseStory())
        elif state.open_grid is not None:
            self.commands.append(CloseGrid(state.open_grid.name))
        else:
            self.commands.append(CloseApp())

    def _poll_story_modal(self, state: "AppState", p: PointerState) -> None:
        if not p.pressed:
            return
        modal = story_modal(state.page.viewport_w, state.page.viewport_h)
        if story_modal_close(modal).contains(p.x, p.y) or not modal.contains(p.x, p.y):
            self.commands.append(CloseStory())

    def _poll_grid(self, state: "AppState", g: GalleryModel, p: PointerState) -> None:
        vw, vh = state.page.viewport_w, state.page.viewport_h
        if rl.IsKeyPressed(KEY_NEXT_ITEM):
            self.commands.append(NavigateNext(g.name))
        elif rl.IsKeyPressed(KEY_PREV_ITEM):
            self.commands.append(NavigatePrev(g.name))
        elif rl.IsKeyPressed(KEY_TOGGLE_GRID):
            self.commands.append(CloseGrid(g.name))

        narrow = is_narrow(vw)
        if narrow and p.wheel:
            self.commands.append(CarouselScroll(dx=-p.wheel * PAGE_WHEEL_STEP_PX))
        if not p.pressed:
            return
        if grid_close_btn(vw, vh).contains(p.x, p.y):
            self.commands.append(CloseGrid(g.name))
            return
        if narrow:
            dot = hit_index(carousel_dots(len(g.items), vw, vh), p.x, p.y)
            if dot is not None:
                self.commands.append(CarouselScroll(to_index=dot))
                return
            cards = carousel_cards(state.carousel.card_centers(), state.carousel.card_w, vh)
        else:
            cards = grid_cells(vw, vh, len(g.items))
        idx = hit_index(cards, p.x, p.y)
        if idx is not None:
            self.commands.append(SelectItem(g.name, index=idx))

    # ═══════════════════════════════════════════════════════════════════════
    # Page
    # ═══════════════════════════════════════════════════════════════════════

    def _poll_touch(self, p: PointerState) -> None:
        if p.touch_count == 1:
            y = rl.GetTouchPosition(0).y
            if not self._touch_active:
                self._touch_active = True
                self.commands.append(ScrubTouchStart(y))
            else:
                self.commands.append(ScrubTouchMove(y))
        elif self._touch_active:
            self._touch_active = False
            self.commands.append(ScrubTouchEnd())

    def _poll_clicks(self, state: "AppState", layout: PageLayout, p: PointerState) -> None:
        scroll_y = state.page.scroll_y
        if p.pressed:
            for name in GALLERY_SECTIONS:
                sl = surface_layout(layout.on_screen(name, scroll_y))
                if sl.card.contains(p.x, p.y):
                    self._swipe_gallery = name
                    state.swipe.begin(p.x, p.y)
                    return
            self._click(state, layout, p)
            return

        if p.released and self._swipe_gallery is not None:
            name = self._swipe_gallery
            self._swipe_gallery = None
            dx = state.swipe.end(p.x)
            g = state.gallery(name)
            if g.is_expanded and state.swipe.is_swipe(dx):
                self.commands.append(SwipeGallery(name, dx=dx))
            else:
                self._click_card(state, layout, name, p)

    def _click_card(self, state: "AppState", layout: PageLayout, name: str,
                    p: PointerState) -> None:
        g = state.gallery(name)
        sl = surface_layout(layout.on_screen(name, state.page.scroll_y))
        if g.is_expanded and sl.prev_btn.contains(p.x, p.y):
            self.commands.append(NavigatePrev(name))
        elif g.is_expanded and sl.next_btn.contains(p.x, p.y):
            self.commands.append(NavigateNext(name))
        else:
            self.commands.append(Interact(name))

    def _click(self, state: "AppState", layout: PageLayout, p: PointerState) -> None:
        scroll_y = state.page.scroll_y
        for name in GALLERY_SECTIONS:
            g = state.gallery(name)
            if not g.is_expanded:
                continue
            sl = surface_layout(layout.on_screen(name, scroll_y))
            if g.config.expand_advances_to_grid and sl.grid_btn.contains(p.x, p.y):
                self.commands.append(ToggleGrid(name))
                return
            if name == "music" and sl.play_btn.contains(p.x, p.y):
                self.commands.append(TogglePlay())
                return
            if name == "music" and sl.progress_bar.contains(p.x, p.y):
                bar = sl.progress_bar
                self.commands.append(SeekTrack((p.x - bar.x) / bar.w))
                return

        stories = layout.on_screen("stories", scroll_y)
        idx = hit_index(story_cards(stories, len(state.page.stories)), p.x, p.y)
        if idx is not None:
            self.commands.append(OpenStory(state.page.stories[idx].id))

    def _poll_keys(self, state: "AppState") -> None:
        name = state.focus
        if name is None:
            return
        if rl.IsKeyPressed(KEY_NEXT_ITEM):
            self.commands.append(NavigateNext(name))
        elif rl.IsKeyPressed(KEY_PREV_ITEM):
            self.commands.append(NavigatePrev(name))
        elif rl.IsKeyPressed(KEY_TOGGLE_GRID) and state.gallery(name).config.expand_advances_to_grid:
            self.commands.append(ToggleGrid(name))
        elif rl.IsKeyPressed(KEY_INTERACT):
            self.commands.append(Interact(name))
        elif rl.IsKeyPressed(KEY_TOGGLE_PLAY) and name == "music":
            self.commands.append(TogglePlay())


_input_handler: Optional[InputHandler] = None


def get_input_handler() -> InputHandler:
    global _input_handler
    if _input_handler is None:
        _input_handler = InputHandler()
    return _input_handler
