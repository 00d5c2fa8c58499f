"""Core data types for Vibrissa."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union
from enum import IntEnum

ItemKey = Union[str, int]


class LoadPriority(IntEnum):
    """Priority levels for background work."""
    FRAME = 0     # Hero frames - needed before the first draw
    CONTENT = 1   # Remote content lists
    IMAGE = 2     # Gallery artwork


@dataclass
class LoadTask:
    """A unit of work for the async loader."""
    label: str
    priority: LoadPriority
    job: Callable[[], Any]
    callback: Callable[[Any, Optional[BaseException]], None]
    timestamp: float = 0.0

    def __lt__(self, other: LoadTask) -> bool:
        """Compare tasks for priority queue ordering."""
        if self.priority != other.priority:
            return self.priority < other.priority
        return self.timestamp < other.timestamp


@dataclass
class UIEvent:
    """An event to be processed on the main/UI thread."""
    callback: Callable
    args: tuple


@dataclass(frozen=True)
class GalleryItem:
    """One piece of content shown by a browsing surface."""
    id: Optional[ItemKey]
    title: str
    image_ref: Optional[str]
    description: Optional[str] = None
    artist: Optional[str] = None

    def key(self, position: int) -> ItemKey:
        """Identity of the item. Falls back to its position when id is missing."""
        return self.id if self.id is not None else position


@dataclass(frozen=True)
class ArtistStory:
    """A static artist profile for the stories section."""
    id: int
    name: str
    era: str
    quote: str
    short_desc: str
    full_story: str
    bg_last: str

    @property
    def monogram(self) -> str:
        return self.bg_last[:1]


@dataclass
class CoverView:
    """Placement of an image scaled to cover a canvas."""
    scale: float = 1.0
    offx: float = 0.0
    offy: float = 0.0

    def dest_size(self, img_w: int, img_h: int) -> tuple:
        return (img_w * self.scale, img_h * self.scale)


@dataclass
class FrameInfo:
    """A loaded, drawable frame of the hero sequence."""
    handle: Any  # rl.Texture2D in the app, anything drawable in tests
    w: int
    h: int
    index: int


@dataclass
class TextureInfo:
    """An uploaded gallery image."""
    tex: Any  # rl.Texture2D - using Any to avoid raylib import
    w: int
    h: int
    ref: str = ""
