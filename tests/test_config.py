"""Tests for credential loading and logging helpers."""

from __future__ import annotations

import io

from vibrissa.config import Credentials, load_credentials
from vibrissa.logging import Logger, error, get_frame, increment_frame, warn


def test_load_credentials_from_environ() -> None:
    creds = load_credentials({
        "VIBRISSA_CONTENTFUL_SPACE_ID": "space",
        "VIBRISSA_CONTENTFUL_ACCESS_TOKEN": " token ",
        "VIBRISSA_YOUTUBE_API_KEY": "key",
        "VIBRISSA_YOUTUBE_PLAYLIST_ID": "   ",
    })
    assert creds.contentful_access_token == "token"
    assert creds.has_contentful
    assert creds.youtube_playlist_id is None
    assert not creds.has_youtube


def test_no_credentials() -> None:
    creds = load_credentials({})
    assert creds == Credentials()
    assert not creds.has_contentful and not creds.has_youtube


def test_logger_line_format() -> None:
    out = io.StringIO()
    logger = Logger(stream=out)
    logger.frame = 12
    logger("[APP] hello")
    line = out.getvalue()
    assert line.endswith("F000012] [APP] hello\n")
    assert line.startswith("[")


def test_tagged_levels(capsys) -> None:
    warn("CMS", "no token")
    error("FEED", "boom")
    out = capsys.readouterr().out
    assert "[CMS][WARN] no token" in out
    assert "[FEED][ERR] boom" in out


def test_frame_counter_advances() -> None:
    before = get_frame()
    increment_frame()
    assert get_frame() == before + 1
