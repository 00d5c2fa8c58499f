"""Application - main loop orchestrator.

The Application class coordinates:
- Input handling (via InputHandler)
- Command execution
- Background results (frames, artwork, remote content)
- Rendering (via Renderer)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import os
import sys
import traceback

from .state import AppState
from .renderer import Renderer, get_renderer
from .input_handler import InputHandler, get_input_handler
from .commands import Command
from .async_loader import AsyncLoader
from .frames import FramePreloader, FrameSequence, frame_paths
from .images import ImageStore
from .player import PlayerSession, ClockPlayer
from .layout import GALLERY_SECTIONS, is_narrow, page_layout
from .content.cms import ContentfulSource
from .content.youtube import YouTubePlaylistSource
from .content.feed import ContentFeed
from .rl_compat import rl, texture_from_pil, unload_texture
from .config import (
    TARGET_FPS, FRAME_DIR, FRAME_COUNT, ASSET_DIR, WINDOW_TITLE,
    WINDOW_DEFAULT_W, WINDOW_DEFAULT_H, SKETCHBOOK_TAG, PHOTOGRAPHY_TAG,
    Credentials, load_credentials,
)
from .logging import log, error, increment_frame
from .types import FrameInfo, TextureInfo


def upload_frame(img, index: int) -> FrameInfo:
    tex, w, h = texture_from_pil(img)
    return FrameInfo(tex, w, h, index)


def upload_image(img) -> TextureInfo:
    tex, w, h = texture_from_pil(img)
    return TextureInfo(tex, w, h)


@dataclass
class Application:
    """
    Main application orchestrator.

    Usage:
        app = Application(frame_dir="images")
        if app.initialize():
            app.run()
    """

    frame_dir: str = FRAME_DIR
    asset_dir: str = ASSET_DIR
    credentials: Credentials = field(default_factory=load_credentials)
    state: AppState = field(default_factory=AppState)
    renderer: Renderer = field(default_factory=get_renderer)
    input_handler: InputHandler = field(default_factory=get_input_handler)

    loader: Optional[AsyncLoader] = None
    preloader: Optional[FramePreloader] = None
    frames: Optional[FrameSequence] = None
    images: Optional[ImageStore] = None
    feeds: List[ContentFeed] = field(default_factory=list)
    cms: Optional[ContentfulSource] = None
    playlist: Optional[YouTubePlaylistSource] = None
    clock_player: Optional[ClockPlayer] = None
    _narrow_grid: Optional[str] = None

    def initialize(self) -> bool:
        """Open the window and start background loading."""
        try:
            log("[INIT] Creating window")
            rl.SetConfigFlags(rl.FLAG_WINDOW_RESIZABLE | getattr(rl, 'FLAG_MSAA_4X_HINT', 0))
            rl.InitWindow(WINDOW_DEFAULT_W, WINDOW_DEFAULT_H, WINDOW_TITLE.encode("utf-8"))
            rl.SetExitKey(0)
            rl.SetTargetFPS(TARGET_FPS)
        except Exception as e:
            log(f"[INIT][CRITICAL] Failed to initialize window: {e!r}")
            log(f"[INIT][CRITICAL] Traceback:\n{traceback.format_exc()}")
            return False

        self._on_resize(rl.GetScreenWidth(), rl.GetScreenHeight())
        self.loader = AsyncLoader()

        self.preloader = FramePreloader(
            self.loader, frame_paths(self.frame_dir, FRAME_COUNT),
            upload_frame, self._on_frames_ready,
        )
        self.preloader.start()

        self.images = ImageStore(self.loader, upload_image, asset_dir=self.asset_dir)
        self._start_feeds()

        self.clock_player = ClockPlayer()
        self.state.player = PlayerSession(self.state.gallery("music"), self.clock_player)
        log("[APP] Application initialized")
        return True

    def _start_feeds(self) -> None:
        creds = self.credentials
        self.cms = ContentfulSource(creds.contentful_space_id, creds.contentful_access_token)
        self.playlist = YouTubePlaylistSource(creds.youtube_api_key, creds.youtube_playlist_id)
        self.feeds = [
            ContentFeed("sketchbook", self.state.gallery("sketchbook"),
                        lambda: self.cms.fetch_assets(SKETCHBOOK_TAG)),
            ContentFeed("photography", self.state.gallery("photography"),
                        lambda: self.cms.fetch_assets(PHOTOGRAPHY_TAG)),
            ContentFeed("music", self.state.gallery("music"), self.playlist.fetch_tracks),
        ]
        for feed in self.feeds:
            feed.start(self.loader)

    def _on_frames_ready(self, sequence: FrameSequence) -> None:
        self.frames = sequence
        if self.state.scrub.start(sequence):
            self.state.scrub.resize(self.state.page.viewport_w, self.state.page.viewport_h)

    def _on_resize(self, w: int, h: int) -> None:
        log(f"[WINDOW] {w}x{h}")
        self.state.page.resize(w, h, page_layout(w, h).content_h)
        self.state.scrub.resize(w, h)
        grid = self.state.open_grid
        self.state.carousel.reset(len(grid.items) if grid else 0, w)

    def run(self) -> None:
        log("[APP] Starting main loop")
        try:
            while self.state.running:
                self._frame()
        except Exception as e:
            log(f"[APP][CRITICAL] Unhandled exception: {e!r}")
            log(f"[APP][CRITICAL] Traceback:\n{traceback.format_exc()}")
        finally:
            self._cleanup()

    def _frame(self) -> None:
        if rl.WindowShouldClose():
            self.state.running = False
            return

        if rl.IsWindowResized():
            self._on_resize(rl.GetScreenWidth(), rl.GetScreenHeight())

        for cmd in self.input_handler.poll(self.state):
            self._execute_command(cmd)
            if not self.state.running:
                return

        self._update()
        self.renderer.draw_frame(self.state, self.frames, self.images)
        increment_frame()

    def _execute_command(self, cmd: Command) -> None:
        try:
            cmd.execute(self.state)
        except Exception as e:
            error("APP", f"{type(cmd).__name__}: {e!r}")

    def _update(self) -> None:
        if self.loader is not None:
            self.loader.poll_ui_events()

        state = self.state
        section = page_layout(state.page.viewport_w, state.page.viewport_h).section_at(
            state.page.scroll_y + state.page.viewport_h / 2)
        if section in GALLERY_SECTIONS:
            state.focus = section

        grid = state.open_grid
        narrow_grid = grid.name if grid is not None and is_narrow(state.page.viewport_w) else None
        if narrow_grid != self._narrow_grid:
            self._narrow_grid = narrow_grid
            if grid is not None:
                state.carousel.reset(len(grid.items), state.page.viewport_w)
                state.carousel.scroll_to(grid.current_index)
        state.carousel.on_frame()

        if self.clock_player is not None:
            self.clock_player.tick()

    def _cleanup(self) -> None:
        log("[APP] Starting cleanup")
        self.state.dispose()
        for feed in self.feeds:
            feed.dispose()

        if self.loader is not None:
            log("[APP] Shutting down async loader")
            self.loader.shutdown()

        if self.frames is not None:
            self.frames.release(unload_texture)
        if self.images is not None:
            self.images.close(lambda ti: unload_texture(ti.tex))
        for source in (self.cms, self.playlist):
            if source is not None:
                source.close()
        self.renderer.release()

        try:
            log("[APP] Closing window")
            rl.CloseWindow()
        except Exception as e:
            error("APP", f"CloseWindow: {e!r}")
        log("[APP] Cleanup complete")


def main():
    log("[MAIN] Starting application")

    frame_dir = FRAME_DIR
    for a in sys.argv[1:]:
        p = os.path.abspath(a)
        log(f"[ARGS] Checking argument: {a} -> {p}")
        if os.path.isdir(p):
            frame_dir = p
            log(f"[ARGS] Frame directory: {frame_dir}")
            break

    if not os.path.isdir(frame_dir):
        log(f"[ARGS] Frame directory {frame_dir} not found, hero will stay blank")

    app = Application(frame_dir=frame_dir)
    if app.initialize():
        app.run()


if __name__ == "__main__":
    main()
