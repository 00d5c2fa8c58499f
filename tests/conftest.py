"""Shared pytest fixtures for vibrissa tests."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

import pytest

from vibrissa.types import FrameInfo, GalleryItem
from vibrissa.frames import FrameSequence

# ============================================================================
# Loader Fixtures
# ============================================================================


class FakeLoader:
    """Stands in for AsyncLoader: jobs run on submit, callbacks wait for poll."""

    def __init__(self):
        self.submitted: List[str] = []
        self._events: List[Tuple[Callable, Any, Optional[BaseException]]] = []

    def submit(self, label, job, callback, priority=None):
        self.submitted.append(label)
        try:
            result, err = job(), None
        except Exception as e:
            result, err = None, e
        self._events.append((callback, result, err))

    def poll_ui_events(self, max_events: int = 100) -> int:
        batch, self._events = self._events[:max_events], self._events[max_events:]
        for callback, result, err in batch:
            callback(result, err)
        return len(batch)

    @property
    def pending_events(self) -> int:
        return len(self._events)


@pytest.fixture
def loader() -> FakeLoader:
    return FakeLoader()


# ============================================================================
# Content Fixtures
# ============================================================================


def make_items(n: int, prefix: str = "item") -> List[GalleryItem]:
    return [GalleryItem(id=i, title=f"{prefix} {i}", image_ref=f"{prefix}-{i}.jpg")
            for i in range(n)]


@pytest.fixture
def three_items() -> List[GalleryItem]:
    return make_items(3)


def make_sequence(n: int, missing=()) -> FrameSequence:
    return FrameSequence([None if i in missing else FrameInfo(f"tex{i}", 64, 36, i)
                          for i in range(n)])


@pytest.fixture
def ten_frames() -> FrameSequence:
    return make_sequence(10)
