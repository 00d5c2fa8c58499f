"""Page state - scroll offset, viewport and the stories modal."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..math_utils import clamp
from ..types import ArtistStory
from .gallery import ScrollLock


@dataclass
class PageState:
    """The vertically scrolling page shell."""
    viewport_w: int = 0
    viewport_h: int = 0
    content_h: int = 0
    scroll_y: float = 0.0
    scroll_lock: ScrollLock = field(default_factory=ScrollLock)
    stories: Sequence[ArtistStory] = ()
    selected_story: Optional[ArtistStory] = None

    @property
    def max_scroll(self) -> float:
        return float(max(0, self.content_h - self.viewport_h))

    @property
    def at_top(self) -> bool:
        return self.scroll_y <= 0.0

    def resize(self, w: int, h: int, content_h: int) -> None:
        self.viewport_w = int(w)
        self.viewport_h = int(h)
        self.content_h = int(content_h)
        self.scroll_y = clamp(self.scroll_y, 0.0, self.max_scroll)

    def scroll_by(self, dy: float) -> bool:
        """Scroll the page. Returns False when locked or already at the limit."""
        if self.scroll_lock.locked:
            return False
        target = clamp(self.scroll_y + dy, 0.0, self.max_scroll)
        if target == self.scroll_y:
            return False
        self.scroll_y = target
        return True

    def open_story(self, story_id: int) -> bool:
        for story in self.stories:
            if story.id == story_id:
                self.selected_story = story
                return True
        return False

    def close_story(self) -> bool:
        was_open = self.selected_story is not None
        self.selected_story = None
        return was_open
