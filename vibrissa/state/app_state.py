"""Composite AppState - the page shell and the components it composes."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .scrub import ScrubController
from .gallery import GalleryModel, ScrollLock, SKETCHBOOK, PHOTOGRAPHY, MUSIC
from .carousel import CarouselTracker
from .input import SwipeTracker
from .page import PageState
from ..content.fallback import LOCAL_SKETCHES, LOCAL_PHOTOS, FALLBACK_TRACKS, ARTIST_STORIES


def _default_page() -> PageState:
    return PageState(stories=ARTIST_STORIES)


@dataclass
class AppState:
    """
    Application state, one field per component.

    The scrub controller and the gallery models never reference each
    other; only the page scroll lock is shared, and only between
    galleries.

        state.scrub.handle_delta(dy, state.page.scroll_y)
        state.galleries["music"].select_next()
    """
    page: PageState = field(default_factory=_default_page)
    scrub: ScrubController = field(default_factory=ScrubController)
    galleries: Dict[str, GalleryModel] = field(default_factory=dict)
    carousel: CarouselTracker = field(default_factory=CarouselTracker)
    swipe: SwipeTracker = field(default_factory=SwipeTracker)
    focus: Optional[str] = None
    player: Optional[Any] = None  # PlayerSession once the music surface is wired
    running: bool = True

    def __post_init__(self):
        if not self.galleries:
            lock = self.page.scroll_lock
            self.galleries = {
                SKETCHBOOK.name: GalleryModel(SKETCHBOOK, LOCAL_SKETCHES, lock),
                PHOTOGRAPHY.name: GalleryModel(PHOTOGRAPHY, LOCAL_PHOTOS, lock),
                MUSIC.name: GalleryModel(MUSIC, FALLBACK_TRACKS, lock),
            }

    @property
    def scroll_lock(self) -> ScrollLock:
        return self.page.scroll_lock

    def gallery(self, name: str) -> GalleryModel:
        return self.galleries[name]

    @property
    def open_grid(self) -> Optional[GalleryModel]:
        """The surface whose grid overlay is showing, if any."""
        for g in self.galleries.values():
            if g.is_grid_open:
                return g
        return None

    def dispose(self) -> None:
        self.scrub.stop()
        for g in self.galleries.values():
            g.dispose()
