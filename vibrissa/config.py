"""Application configuration constants."""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

# Performance
TARGET_FPS = 60
ASYNC_WORKERS = 6

# Window
WINDOW_TITLE = "Vibrissa"
WINDOW_DEFAULT_W = 1280
WINDOW_DEFAULT_H = 800

# Hero frame sequence
FRAME_COUNT = 136
FRAME_DIR = "images"
FRAME_NAME_PATTERN = "ezgif-frame-{index:03d}.jpg"
MAX_FRAME_DIMENSION = 4096

# Scrubbing (input-hijack drive)
SCRUB_SENSITIVITY = 0.25
SCRUB_TOP_TOLERANCE_PX = 5
SCRUB_WHEEL_PX_PER_NOTCH = 100.0
# Pages of scroll mapped onto the whole sequence by the position drive
SCROLL_SPAN_VIEWPORTS = 4

# Hero overlay
HERO_FADE_START_PX = 300
HERO_FADE_LENGTH_PX = 400
HERO_LIFT_FACTOR = 0.35

# Galleries
SWIPE_THRESHOLD_PX = 50
MOBILE_BREAKPOINT_PX = 768
CAROUSEL_CARD_W = 260
CAROUSEL_CARD_GAP = 16
GRID_COLUMNS = 3
GRID_CELL_GAP = 18

# Page
PAGE_WHEEL_STEP_PX = 60.0

# Content sources
CONTENTFUL_BASE_URL = "https://cdn.contentful.com"
CONTENTFUL_ENVIRONMENT = "master"
SKETCHBOOK_TAG = "sketchbookEntry"
PHOTOGRAPHY_TAG = "frames"
YOUTUBE_BASE_URL = "https://www.googleapis.com"
YOUTUBE_MAX_RESULTS = 50
FETCH_TIMEOUT_S = 8.0
ASSET_DIR = "assets"

# Player
PLAYER_DEFAULT_DURATION_S = 210.0

# Hotkeys (raylib key codes)
# See: https://github.com/raysan5/raylib/blob/master/src/raylib.h
KEY_NEXT_ITEM = 262         # KEY_RIGHT
KEY_PREV_ITEM = 263         # KEY_LEFT
KEY_TOGGLE_GRID = 71        # KEY_G
KEY_INTERACT = 257          # KEY_ENTER
KEY_TOGGLE_PLAY = 32        # KEY_SPACE
KEY_CLOSE = 256             # KEY_ESCAPE

# Palette
COLOR_BG = (10, 10, 12)
COLOR_TEXT = (236, 230, 218)
COLOR_MUTED = (150, 144, 134)
COLOR_ACCENT = (201, 169, 98)
COLOR_PANEL = (24, 24, 28)


@dataclass(frozen=True)
class Credentials:
    """Optional API credentials for the remote content sources."""
    contentful_space_id: Optional[str] = None
    contentful_access_token: Optional[str] = None
    youtube_api_key: Optional[str] = None
    youtube_playlist_id: Optional[str] = None

    @property
    def has_contentful(self) -> bool:
        return bool(self.contentful_space_id and self.contentful_access_token)

    @property
    def has_youtube(self) -> bool:
        return bool(self.youtube_api_key and self.youtube_playlist_id)


ENV_CONTENTFUL_SPACE_ID = "VIBRISSA_CONTENTFUL_SPACE_ID"
ENV_CONTENTFUL_ACCESS_TOKEN = "VIBRISSA_CONTENTFUL_ACCESS_TOKEN"
ENV_YOUTUBE_API_KEY = "VIBRISSA_YOUTUBE_API_KEY"
ENV_YOUTUBE_PLAYLIST_ID = "VIBRISSA_YOUTUBE_PLAYLIST_ID"


def load_credentials(environ=None) -> Credentials:
    """Read credentials from the environment. Blank values count as absent."""
    env = os.environ if environ is None else environ

    def _get(name: str) -> Optional[str]:
        value = (env.get(name) or "").strip()
        return value or None

    return Credentials(
        contentful_space_id=_get(ENV_CONTENTFUL_SPACE_ID),
        contentful_access_token=_get(ENV_CONTENTFUL_ACCESS_TOKEN),
        youtube_api_key=_get(ENV_YOUTUBE_API_KEY),
        youtube_playlist_id=_get(ENV_YOUTUBE_PLAYLIST_ID),
    )

# Gallery artwork
GALLERY_IMAGE_MAX_DIMENSION = 1600
