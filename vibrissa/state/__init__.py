"""State management submodules for Vibrissa."""

from .scrub import ScrubState, ScrubController
from .gallery import (
    GalleryConfig, GalleryModel, GalleryView, ScrollLock,
    SKETCHBOOK, PHOTOGRAPHY, MUSIC,
)
from .carousel import CarouselTracker
from .input import PointerState, SwipeTracker
from .page import PageState
from .app_state import AppState

__all__ = [
    'ScrubState',
    'ScrubController',
    'GalleryConfig',
    'GalleryModel',
    'GalleryView',
    'ScrollLock',
    'SKETCHBOOK',
    'PHOTOGRAPHY',
    'MUSIC',
    'CarouselTracker',
    'PointerState',
    'SwipeTracker',
    'PageState',
    'AppState',
]
