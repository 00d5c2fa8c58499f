"""Command Pattern for input handling.

Commands encapsulate actions that can be triggered by various inputs.
Each command has an execute() method and optional can_execute() for guards.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import AppState

from .logging import log


class Command(ABC):
    """Base class for all commands."""

    @abstractmethod
    def execute(self, state: "AppState") -> bool:
        """Execute the command. Returns True if action was taken."""
        pass

    def can_execute(self, state: "AppState") -> bool:
        """Check if command can be executed. Override for guards."""
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Scrub / page scroll Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class ScrubWheel(Command):
    """Vertical wheel delta (pixels, positive = down).

    The hero sequence takes the delta first; whatever it does not hijack
    scrolls the page.
    """
    delta_y: float

    def execute(self, state: "AppState") -> bool:
        if state.scrub.handle_delta(self.delta_y, state.page.scroll_y):
            return True
        return state.page.scroll_by(self.delta_y)


@dataclass
class ScrubTouchStart(Command):
    y: float

    def execute(self, state: "AppState") -> bool:
        state.scrub.touch_start(self.y)
        return True


@dataclass
class ScrubTouchMove(Command):
    """Vertical drag sample; a drag the hero does not hijack scrolls the page."""
    y: float

    def can_execute(self, state: "AppState") -> bool:
        return state.scrub.touching

    def execute(self, state: "AppState") -> bool:
        if not self.can_execute(state):
            return False
        prev_y = state.scrub.touch_y
        if state.scrub.touch_move(self.y, state.page.scroll_y):
            return True
        return state.page.scroll_by(prev_y - self.y)


class ScrubTouchEnd(Command):
    def execute(self, state: "AppState") -> bool:
        state.scrub.touch_end()
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Gallery Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class GalleryCommand(Command):
    gallery: str

    def can_execute(self, state: "AppState") -> bool:
        g = state.galleries.get(self.gallery)
        return g is not None and not g.disposed

    def execute(self, state: "AppState") -> bool:
        if not self.can_execute(state):
            return False
        g = state.gallery(self.gallery)
        self.apply(g)
        log(f"[CMD] {type(self).__name__}: {g.name} index={g.current_index} view={g.view.name}")
        return True

    def apply(self, g) -> None:
        raise NotImplementedError


class NavigateNext(GalleryCommand):
    """Advance to the next item, wrapping around."""

    def apply(self, g) -> None:
        g.select_next()


class NavigatePrev(GalleryCommand):
    """Retreat to the previous item, wrapping around."""

    def apply(self, g) -> None:
        g.select_previous()


@dataclass
class SelectItem(GalleryCommand):
    """Pick an item from the grid overlay; the overlay closes."""
    index: int = 0

    def can_execute(self, state: "AppState") -> bool:
        return (super().can_execute(state) and
                0 <= self.index < len(state.gallery(self.gallery).items))

    def apply(self, g) -> None:
        g.choose_from_grid(self.index)


class Interact(GalleryCommand):
    """Click/tap on the surface card."""

    def apply(self, g) -> None:
        g.toggle_expanded()


class ToggleGrid(GalleryCommand):
    def apply(self, g) -> None:
        g.toggle_grid()


class CloseGrid(GalleryCommand):
    def can_execute(self, state: "AppState") -> bool:
        return super().can_execute(state) and state.gallery(self.gallery).is_grid_open

    def apply(self, g) -> None:
        g.close_grid()


@dataclass
class SwipeGallery(GalleryCommand):
    """Horizontal swipe across the surface card."""
    dx: float = 0.0

    def apply(self, g) -> None:
        g.swipe(self.dx)


@dataclass
class CarouselScroll(Command):
    """Horizontal scroll of the narrow-window grid carousel."""
    dx: float = 0.0
    to_index: int = -1

    def execute(self, state: "AppState") -> bool:
        if self.to_index >= 0:
            state.carousel.scroll_to(self.to_index)
        else:
            state.carousel.scroll_by(self.dx)
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Player Commands
# ═══════════════════════════════════════════════════════════════════════════

class TogglePlay(Command):
    def can_execute(self, state: "AppState") -> bool:
        return state.player is not None

    def execute(self, state: "AppState") -> bool:
        if not self.can_execute(state):
            return False
        state.player.toggle_play()
        return True


@dataclass
class SeekTrack(Command):
    fraction: float

    def can_execute(self, state: "AppState") -> bool:
        return state.player is not None

    def execute(self, state: "AppState") -> bool:
        if not self.can_execute(state):
            return False
        state.player.seek_fraction(self.fraction)
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Stories / app Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OpenStory(Command):
    story_id: int

    def execute(self, state: "AppState") -> bool:
        return state.page.open_story(self.story_id)


class CloseStory(Command):
    def execute(self, state: "AppState") -> bool:
        return state.page.close_story()


class CloseApp(Command):
    """Close the application."""

    def execute(self, state: "AppState") -> bool:
        state.running = False
        return True

