"""Tests for commands executed against the composite AppState."""

from __future__ import annotations

import pytest

from vibrissa.commands import (
    CarouselScroll, CloseApp, CloseGrid, CloseStory, Interact, NavigateNext,
    NavigatePrev, OpenStory, ScrubTouchEnd, ScrubTouchMove, ScrubTouchStart,
    ScrubWheel, SeekTrack, SelectItem, SwipeGallery, ToggleGrid, TogglePlay,
)
from vibrissa.layout import page_layout
from vibrissa.player import ClockPlayer, PlayerSession
from vibrissa.state import AppState, GalleryView

from conftest import make_sequence


@pytest.fixture
def state() -> AppState:
    s = AppState()
    s.page.resize(1280, 800, page_layout(1280, 800).content_h)
    return s


def test_initial_surfaces(state: AppState) -> None:
    assert state.gallery("sketchbook").view is GalleryView.COLLAPSED
    assert state.gallery("photography").view is GalleryView.EXPANDED
    assert state.gallery("music").view is GalleryView.EXPANDED
    assert state.open_grid is None


def test_wheel_scrolls_page_without_frames(state: AppState) -> None:
    assert ScrubWheel(100).execute(state)
    assert state.page.scroll_y == 100


def test_wheel_scrubs_hero_at_top(state: AppState) -> None:
    state.scrub.start(make_sequence(10))
    assert ScrubWheel(20).execute(state)
    assert state.page.scroll_y == 0
    assert state.scrub.state.progress == pytest.approx(5.0)

    ScrubWheel(400).execute(state)
    assert state.scrub.state.is_at_end
    # Finished sequence hands the wheel back to the page
    ScrubWheel(100).execute(state)
    assert state.page.scroll_y == 100


def test_touch_drag_falls_back_to_page_scroll(state: AppState) -> None:
    ScrubTouchStart(600).execute(state)
    assert ScrubTouchMove(550).execute(state)
    assert state.page.scroll_y == 50
    ScrubTouchEnd().execute(state)
    assert not ScrubTouchMove(500).execute(state)


def test_open_grid_locks_page(state: AppState) -> None:
    assert ToggleGrid("photography").execute(state)
    assert state.open_grid is state.gallery("photography")
    assert state.scroll_lock.locked
    assert not ScrubWheel(100).execute(state)
    assert state.page.scroll_y == 0

    assert SelectItem("photography", index=4).execute(state)
    assert state.gallery("photography").current_index == 4
    assert not state.scroll_lock.locked
    assert not CloseGrid("photography").execute(state)


def test_select_item_guards_range(state: AppState) -> None:
    assert not SelectItem("photography", index=99).execute(state)
    assert not SelectItem("nope", index=0).execute(state)


def test_gallery_navigation(state: AppState) -> None:
    NavigateNext("photography").execute(state)
    NavigateNext("photography").execute(state)
    NavigatePrev("photography").execute(state)
    assert state.gallery("photography").current_index == 1
    assert SwipeGallery("photography", dx=-80).execute(state)
    assert state.gallery("photography").current_index == 2


def test_interact_follows_surface_policy(state: AppState) -> None:
    Interact("sketchbook").execute(state)
    Interact("sketchbook").execute(state)
    assert state.gallery("sketchbook").view is GalleryView.EXPANDED
    Interact("music").execute(state)
    assert state.gallery("music").view is GalleryView.GRID_OPEN


def test_carousel_scroll(state: AppState) -> None:
    state.carousel.reset(6, 400)
    CarouselScroll(to_index=3).execute(state)
    state.carousel.on_frame()
    assert state.carousel.active_index == 3
    CarouselScroll(dx=-10_000).execute(state)
    state.carousel.on_frame()
    assert state.carousel.active_index == 0


def test_player_commands(state: AppState) -> None:
    assert not TogglePlay().execute(state)
    clock = [0.0]
    state.player = PlayerSession(state.gallery("music"),
                                 ClockPlayer(track_duration=60.0, clock=lambda: clock[0]))
    assert TogglePlay().execute(state)
    assert state.player.is_playing
    assert SeekTrack(0.5).execute(state)
    assert state.player.player.current_time() == pytest.approx(30.0)


def test_stories(state: AppState) -> None:
    assert OpenStory(2).execute(state)
    assert state.page.selected_story.name == "Gustav Klimt"
    assert not OpenStory(42).execute(state)
    assert CloseStory().execute(state)
    assert not CloseStory().execute(state)


def test_close_app_and_dispose(state: AppState) -> None:
    ToggleGrid("music").execute(state)
    CloseApp().execute(state)
    assert not state.running
    state.dispose()
    assert not state.scroll_lock.locked
    assert not NavigateNext("music").execute(state)
