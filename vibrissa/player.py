"""Music player - control surface protocol, session wiring and a clock transport."""

from __future__ import annotations
from enum import Enum, auto
from typing import Callable, Optional, Protocol

from .math_utils import clamp
from .state.gallery import GalleryModel
from .config import PLAYER_DEFAULT_DURATION_S
from .logging import log, now


class PlayerEvent(Enum):
    CUED = auto()
    PLAYING = auto()
    PAUSED = auto()
    ENDED = auto()


StateListener = Callable[[PlayerEvent], None]


class PlayerControl(Protocol):
    """An embeddable player the music surface can drive."""

    on_state_change: Optional[StateListener]

    def load(self, track_id, autoplay: bool) -> None: ...
    def play(self) -> None: ...
    def pause(self) -> None: ...
    def seek(self, seconds: float) -> None: ...
    def current_time(self) -> float: ...
    def duration(self) -> float: ...


def format_time(seconds: Optional[float]) -> str:
    """m:ss; falsy input renders as 0:00."""
    if not seconds:
        return "0:00"
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


class PlayerSession:
    """Keeps a player in step with the music gallery.

    Index changes load the new track (continuing playback if it was
    playing); an ENDED notification advances to the next track.
    """

    def __init__(self, model: GalleryModel, player: PlayerControl):
        self.model = model
        self.player = player
        self.is_playing = False
        self._advancing = False
        player.on_state_change = self.on_state_change
        model.add_listener(self._on_index_changed)
        item = model.current_item
        if item is not None:
            player.load(item.id, autoplay=False)

    def on_state_change(self, event: PlayerEvent) -> None:
        self.is_playing = event is PlayerEvent.PLAYING
        if event is PlayerEvent.ENDED:
            log("[PLAYER] Track ended, advancing")
            self._advancing = True
            try:
                self.model.select_next()
            finally:
                self._advancing = False

    def _on_index_changed(self, index: int) -> None:
        item = self.model.current_item
        if item is None:
            return
        autoplay = self.is_playing or self._advancing
        self.player.load(item.id, autoplay=autoplay)

    def toggle_play(self) -> None:
        if self.is_playing:
            self.player.pause()
        else:
            self.player.play()

    def seek_fraction(self, fraction: float) -> None:
        duration = self.player.duration()
        if not duration:
            return
        self.player.seek(clamp(fraction, 0.0, 1.0) * duration)

    def progress_fraction(self) -> float:
        duration = self.player.duration()
        if not duration:
            return 0.0
        return clamp(self.player.current_time() / duration, 0.0, 1.0)


class ClockPlayer:
    """Timer-driven transport; advances a play clock without audio output."""

    def __init__(self, track_duration: float = PLAYER_DEFAULT_DURATION_S,
                 clock: Callable[[], float] = now):
        self.on_state_change: Optional[StateListener] = None
        self.track_id = None
        self.track_duration = track_duration
        self._clock = clock
        self._position = 0.0
        self._started_at: Optional[float] = None

    def _emit(self, event: PlayerEvent) -> None:
        if self.on_state_change is not None:
            self.on_state_change(event)

    @property
    def playing(self) -> bool:
        return self._started_at is not None

    def load(self, track_id, autoplay: bool) -> None:
        self.track_id = track_id
        self._position = 0.0
        self._started_at = None
        self._emit(PlayerEvent.CUED)
        if autoplay:
            self.play()

    def play(self) -> None:
        if self.track_id is None or self.playing:
            return
        self._started_at = self._clock()
        self._emit(PlayerEvent.PLAYING)

    def pause(self) -> None:
        if not self.playing:
            return
        self._position = self.current_time()
        self._started_at = None
        self._emit(PlayerEvent.PAUSED)

    def seek(self, seconds: float) -> None:
        self._position = clamp(seconds, 0.0, self.track_duration)
        if self.playing:
            self._started_at = self._clock()

    def current_time(self) -> float:
        if self._started_at is None:
            return self._position
        return min(self.track_duration, self._position + self._clock() - self._started_at)

    def duration(self) -> float:
        return self.track_duration if self.track_id is not None else 0.0

    def tick(self) -> None:
        """Fire ENDED once the clock passes the end of the track."""
        if self.playing and self.current_time() >= self.track_duration:
            self._position = self.track_duration
            self._started_at = None
            self._emit(PlayerEvent.ENDED)
