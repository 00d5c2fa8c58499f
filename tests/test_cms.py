"""Tests for the Contentful asset source."""

from __future__ import annotations

import httpx
import pytest

from vibrissa.content.cms import ContentfulSource, asset_to_item
from vibrissa.content.errors import ContentFetchError

ASSETS = {
    "items": [
        {
            "sys": {"id": "a1"},
            "fields": {
                "title": "Charcoal Study",
                "description": "Quick gesture drawing.",
                "file": {"url": "//images.ctfassets.net/sp/a1.jpg"},
            },
        },
        {"sys": {"id": "a2"}, "fields": {"file": {"url": "https://cdn.test/a2.png"}}},
        {"sys": {"id": "a3"}, "fields": {"title": "No file"}},
    ]
}


def source(handler) -> ContentfulSource:
    return ContentfulSource("sp", "tok", transport=httpx.MockTransport(handler))


def test_fetch_sends_tag_order_and_auth() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json=ASSETS)

    with source(handler) as cms:
        items = cms.fetch_assets("frames")

    req = seen["request"]
    assert req.url.path == "/spaces/sp/environments/master/assets"
    assert req.url.params["metadata.tags.sys.id[in]"] == "frames"
    assert req.url.params["order"] == "-sys.createdAt"
    assert req.headers["Authorization"] == "Bearer tok"
    assert [i.id for i in items] == ["a1", "a2"]


def test_asset_mapping_defaults() -> None:
    first = asset_to_item(ASSETS["items"][0])
    assert first.image_ref == "https://images.ctfassets.net/sp/a1.jpg"
    assert first.title == "Charcoal Study"

    second = asset_to_item(ASSETS["items"][1])
    assert second.title == "Untitled Sketch"
    assert second.description == "No description provided."
    assert second.image_ref == "https://cdn.test/a2.png"

    assert asset_to_item(ASSETS["items"][2]) is None


@pytest.mark.parametrize("space,token", [(None, "tok"), ("sp", None), ("", "")])
def test_missing_credentials_return_empty(space, token, capsys) -> None:
    cms = ContentfulSource(space, token)
    assert not cms.configured
    assert cms.fetch_assets("sketchbookEntry") == []
    assert "[CMS][WARN]" in capsys.readouterr().out


def test_empty_result_warns(capsys) -> None:
    with source(lambda r: httpx.Response(200, json={"items": []})) as cms:
        assert cms.fetch_assets("frames") == []
    assert "tagged 'frames'" in capsys.readouterr().out


def test_server_error_raises() -> None:
    with source(lambda r: httpx.Response(500, text="oops")) as cms:
        with pytest.raises(ContentFetchError) as ei:
            cms.fetch_assets("frames")
    assert ei.value.status_code == 500
    assert ei.value.source == "CMS"


def test_timeout_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with source(handler) as cms:
        with pytest.raises(ContentFetchError, match="timed out"):
            cms.fetch_assets("frames")


def test_bad_payload_raises() -> None:
    with source(lambda r: httpx.Response(200, text="<html>")) as cms:
        with pytest.raises(ContentFetchError):
            cms.fetch_assets("frames")
    with source(lambda r: httpx.Response(200, json={"total": 0})) as cms:
        with pytest.raises(ContentFetchError, match="no items list"):
            cms.fetch_assets("frames")


def test_close_is_idempotent() -> None:
    cms = source(lambda r: httpx.Response(200, json=ASSETS))
    cms.close()
    cms.close()
    assert not cms.configured
