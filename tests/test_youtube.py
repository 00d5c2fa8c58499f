"""Tests for the YouTube playlist source."""

from __future__ import annotations

import httpx
import pytest

from vibrissa.content.errors import ContentFetchError
from vibrissa.content.youtube import (
    YouTubePlaylistSource, clean_title, pick_thumbnail, snippet_to_track,
)


def entry(title, video_id="v", owner=None, channel=None, thumbs=None) -> dict:
    snippet = {"title": title, "resourceId": {"videoId": video_id},
               "thumbnails": thumbs or {}}
    if owner:
        snippet["videoOwnerChannelTitle"] = owner
    if channel:
        snippet["channelTitle"] = channel
    return {"snippet": snippet}


PLAYLIST = {
    "items": [
        entry("Night Drive (Official Video) [HD]", "v1", owner="Neon Coast",
              thumbs={"high": {"url": "https://i.test/v1-high.jpg"},
                      "medium": {"url": "https://i.test/v1-med.jpg"}}),
        entry("Private video", "v2"),
        entry("Deleted video", "v3"),
        entry("Afterglow", "v4", channel="Uploader"),
    ]
}


@pytest.mark.parametrize("raw,clean", [
    ("Song (Official Video)", "Song"),
    ("Song [4K] (Live)", "Song"),
    ("Plain", "Plain"),
    ("", ""),
])
def test_clean_title(raw: str, clean: str) -> None:
    assert clean_title(raw) == clean


def test_pick_thumbnail_preference() -> None:
    thumbs = {"medium": {"url": "m"}, "high": {"url": "h"}, "maxres": {"url": "x"}}
    assert pick_thumbnail(thumbs) == "x"
    del thumbs["maxres"]
    assert pick_thumbnail(thumbs) == "h"
    assert pick_thumbnail({"default": {"url": "d"}}) is None


def test_snippet_artist_fallbacks() -> None:
    assert snippet_to_track(entry("A", owner="Owner", channel="Chan")).artist == "Owner"
    assert snippet_to_track(entry("A", channel="Chan")).artist == "Chan"
    track = snippet_to_track(entry("A"))
    assert track.artist == "Unknown Artist"
    assert track.description == "Featured Track"


def test_fetch_tracks_params_and_filtering() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = request.url.params
        seen["path"] = request.url.path
        return httpx.Response(200, json=PLAYLIST)

    with YouTubePlaylistSource("key", "PL1", transport=httpx.MockTransport(handler)) as yt:
        tracks = yt.fetch_tracks()

    assert seen["path"] == "/youtube/v3/playlistItems"
    assert seen["params"]["part"] == "snippet"
    assert seen["params"]["maxResults"] == "50"
    assert seen["params"]["playlistId"] == "PL1"
    assert seen["params"]["key"] == "key"
    assert [t.id for t in tracks] == ["v1", "v4"]
    assert tracks[0].title == "Night Drive"
    assert tracks[0].artist == "Neon Coast"
    assert tracks[0].image_ref == "https://i.test/v1-high.jpg"
    assert tracks[1].image_ref is None


def test_missing_credentials_return_empty(capsys) -> None:
    yt = YouTubePlaylistSource("key", None)
    assert not yt.configured
    assert yt.fetch_tracks() == []
    assert "[YOUTUBE][WARN]" in capsys.readouterr().out


def test_http_error_raises() -> None:
    transport = httpx.MockTransport(lambda r: httpx.Response(403, json={"error": {}}))
    with YouTubePlaylistSource("key", "PL1", transport=transport) as yt:
        with pytest.raises(ContentFetchError) as ei:
            yt.fetch_tracks()
    assert ei.value.status_code == 403
    assert "YOUTUBE" in str(ei.value)


def test_connect_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with YouTubePlaylistSource("key", "PL1", transport=httpx.MockTransport(handler)) as yt:
        with pytest.raises(ContentFetchError, match="transport failure"):
            yt.fetch_tracks()
