"""Gallery state - focused item, expansion and grid overlay per surface."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Sequence, Set

from ..config import SWIPE_THRESHOLD_PX
from ..math_utils import wrap_index
from ..types import GalleryItem
from ..logging import log


class ScrollLock:
    """Page-level scroll lock shared by every surface.

    Each owner holds the lock at most once, so a repeated release is a
    no-op and a lock taken by one surface can't be dropped by another.
    """

    def __init__(self):
        self._owners: Set[str] = set()

    @property
    def locked(self) -> bool:
        return bool(self._owners)

    def acquire(self, owner: str) -> bool:
        if owner in self._owners:
            return False
        self._owners.add(owner)
        log(f"[SCROLL] Locked by {owner}")
        return True

    def release(self, owner: str) -> bool:
        if owner not in self._owners:
            return False
        self._owners.discard(owner)
        log(f"[SCROLL] Released by {owner}")
        return True

    def holds(self, owner: str) -> bool:
        return owner in self._owners


@dataclass(frozen=True)
class GalleryConfig:
    """Per-surface policy."""
    name: str
    initial_expanded: bool = True
    expand_advances_to_grid: bool = False


SKETCHBOOK = GalleryConfig("sketchbook", initial_expanded=False, expand_advances_to_grid=False)
PHOTOGRAPHY = GalleryConfig("photography", initial_expanded=True, expand_advances_to_grid=True)
MUSIC = GalleryConfig("music", initial_expanded=True, expand_advances_to_grid=True)


class GalleryView(Enum):
    COLLAPSED = auto()
    EXPANDED = auto()
    GRID_OPEN = auto()


IndexListener = Callable[[int], None]


class GalleryModel:
    """Selection over an ordered list of items for one browsing surface."""

    def __init__(
        self,
        config: GalleryConfig,
        items: Sequence[GalleryItem] = (),
        scroll_lock: Optional[ScrollLock] = None,
    ):
        self.config = config
        self.items: List[GalleryItem] = list(items)
        self.current_index = 0
        self.is_expanded = config.initial_expanded
        self.is_grid_open = False
        self.scroll_lock = scroll_lock or ScrollLock()
        self.disposed = False
        self._listeners: List[IndexListener] = []

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def view(self) -> GalleryView:
        if self.is_grid_open:
            return GalleryView.GRID_OPEN
        if self.is_expanded:
            return GalleryView.EXPANDED
        return GalleryView.COLLAPSED

    @property
    def current_item(self) -> Optional[GalleryItem]:
        if not self.items:
            return None
        return self.items[self.current_index]

    def add_listener(self, fn: IndexListener) -> None:
        self._listeners.append(fn)

    def _set_index(self, index: int) -> None:
        if index == self.current_index:
            return
        self.current_index = index
        self._notify()

    def _notify(self) -> None:
        for fn in list(self._listeners):
            fn(self.current_index)

    # ═══════════════════════════════════════════════════════════════════════
    # Navigation
    # ═══════════════════════════════════════════════════════════════════════

    def select_next(self) -> None:
        if not self.items:
            return
        self._set_index(wrap_index(self.current_index + 1, len(self.items)))

    def select_previous(self) -> None:
        if not self.items:
            return
        self._set_index(wrap_index(self.current_index - 1, len(self.items)))

    def select_at(self, index: int) -> None:
        """Jump to an index enumerated from `items`."""
        if not self.items:
            return
        if not 0 <= index < len(self.items):
            raise IndexError(f"{self.name}: index {index} outside 0..{len(self.items) - 1}")
        self._set_index(index)

    def choose_from_grid(self, index: int) -> None:
        self.select_at(index)
        self.close_grid()

    def swipe(self, dx: float, threshold: float = SWIPE_THRESHOLD_PX) -> int:
        """Navigate for a horizontal swipe. Returns -1, 0 or +1."""
        if abs(dx) < threshold:
            return 0
        if dx < 0:
            self.select_next()
            return 1
        self.select_previous()
        return -1

    # ═══════════════════════════════════════════════════════════════════════
    # Expansion and grid
    # ═══════════════════════════════════════════════════════════════════════

    def toggle_expanded(self) -> GalleryView:
        """Interact with the surface card."""
        if not self.is_expanded:
            self.is_expanded = True
        elif self.config.expand_advances_to_grid and not self.is_grid_open:
            self.open_grid()
        return self.view

    def open_grid(self) -> None:
        if self.is_grid_open or self.disposed:
            return
        self.is_grid_open = True
        self.is_expanded = True
        self.scroll_lock.acquire(self.name)
        log(f"[GALLERY] {self.name}: grid open")

    def close_grid(self) -> None:
        if not self.is_grid_open:
            return
        self.is_grid_open = False
        self.scroll_lock.release(self.name)
        log(f"[GALLERY] {self.name}: grid closed")

    def toggle_grid(self) -> None:
        if self.is_grid_open:
            self.close_grid()
        else:
            self.open_grid()

    # ═══════════════════════════════════════════════════════════════════════
    # Content
    # ═══════════════════════════════════════════════════════════════════════

    def replace_items(self, new_items: Sequence[GalleryItem]) -> None:
        """Swap the backing list. The caller's sequence is copied, never mutated."""
        self.items = list(new_items)
        log(f"[GALLERY] {self.name}: {len(self.items)} items")
        if self.current_index >= len(self.items):
            self.current_index = 0
        # The item under the index changed even if the index did not
        self._notify()

    def dispose(self) -> None:
        """Teardown. Always leaves the page scroll unlocked."""
        self.disposed = True
        self.is_grid_open = False
        self.scroll_lock.release(self.name)
        self._listeners.clear()
