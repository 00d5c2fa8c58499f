"""Video playlist source - tracks from the YouTube Data API."""

from __future__ import annotations
import re
from typing import Any, List, Mapping, Optional

import httpx

from ..config import YOUTUBE_BASE_URL, YOUTUBE_MAX_RESULTS, FETCH_TIMEOUT_S
from ..types import GalleryItem
from ..logging import log, warn
from .errors import ContentFetchError
from .http import make_client, get_json

SOURCE = "YOUTUBE"
UNAVAILABLE_TITLES = frozenset({"Private video", "Deleted video"})
DEFAULT_ARTIST = "Unknown Artist"
DEFAULT_DESCRIPTION = "Featured Track"

_BRACKETED = re.compile(r"(\(.*?\)|\[.*?\])")


def clean_title(title: str) -> str:
    """Drop "(Official Video)"-style and "[HD]"-style segments."""
    return _BRACKETED.sub("", title or "").strip()


def pick_thumbnail(thumbnails: Mapping[str, Any]) -> Optional[str]:
    for size in ("maxres", "high", "medium"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return None


def snippet_to_track(item: Mapping[str, Any]) -> Optional[GalleryItem]:
    snippet = item.get("snippet") or {}
    title = clean_title(snippet.get("title", ""))
    if title in UNAVAILABLE_TITLES:
        return None
    return GalleryItem(
        id=(snippet.get("resourceId") or {}).get("videoId"),
        title=title,
        artist=snippet.get("videoOwnerChannelTitle") or snippet.get("channelTitle") or DEFAULT_ARTIST,
        description=DEFAULT_DESCRIPTION,
        image_ref=pick_thumbnail(snippet.get("thumbnails") or {}),
    )


class YouTubePlaylistSource:
    """Fetches up to one page of playlist entries."""

    def __init__(
        self,
        api_key: Optional[str],
        playlist_id: Optional[str],
        *,
        base_url: str = YOUTUBE_BASE_URL,
        timeout: float = FETCH_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.playlist_id = playlist_id
        self._client: Optional[httpx.Client] = None
        if api_key and playlist_id:
            self._client = make_client(base_url, timeout=timeout, transport=transport)

    @property
    def configured(self) -> bool:
        return self._client is not None

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> YouTubePlaylistSource:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_tracks(self) -> List[GalleryItem]:
        if self._client is None:
            warn(SOURCE, "API key or playlist id missing, keeping fallback track")
            return []

        payload = get_json(
            self._client,
            "/youtube/v3/playlistItems",
            params={
                "part": "snippet",
                "maxResults": YOUTUBE_MAX_RESULTS,
                "playlistId": self.playlist_id,
                "key": self.api_key,
            },
            source=SOURCE,
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
            raise ContentFetchError("payload has no items list", source=SOURCE)

        tracks = [t for t in (snippet_to_track(i) for i in payload["items"]) if t is not None]
        log(f"[{SOURCE}] {len(tracks)}/{len(payload['items'])} playable tracks")
        return tracks
