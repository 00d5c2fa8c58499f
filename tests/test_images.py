"""Tests for the gallery artwork store."""

from __future__ import annotations

import io

import httpx
from PIL import Image

import vibrissa.images as images_mod
from vibrissa.images import ImageStore, fit_within


def png_bytes(size=(40, 20)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (10, 20, 30)).save(buf, format="PNG")
    return buf.getvalue()


def upload(img):
    return ("tex", img.size, img.mode)


def test_fit_within() -> None:
    img = Image.new("RGB", (400, 100))
    assert fit_within(img, 500) is img
    assert fit_within(img, 200).size == (200, 50)


def test_local_asset_loads_once(loader, tmp_path) -> None:
    (tmp_path / "sketch.png").write_bytes(png_bytes())
    store = ImageStore(loader, upload, asset_dir=str(tmp_path))
    store.request("sketch.png")
    store.request("sketch.png")
    assert loader.submitted == ["image:sketch.png"]
    assert store.get("sketch.png") is None

    loader.poll_ui_events()
    assert store.get("sketch.png") == ("tex", (40, 20), "RGBA")
    store.request("sketch.png")
    assert len(loader.submitted) == 1
    store.close()


def test_remote_image_fetched_over_http(loader, tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(images_mod, "GALLERY_IMAGE_MAX_DIMENSION", 10)
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=png_bytes())

    store = ImageStore(loader, upload, asset_dir=str(tmp_path),
                       transport=httpx.MockTransport(handler))
    store.request("https://img.test/a.png")
    loader.poll_ui_events()
    assert seen == ["https://img.test/a.png"]
    assert store.get("https://img.test/a.png")[1] == (10, 5)
    store.close()


def test_failures_are_remembered(loader, tmp_path) -> None:
    store = ImageStore(loader, upload, asset_dir=str(tmp_path),
                       transport=httpx.MockTransport(lambda r: httpx.Response(404)))
    store.request("missing.png")
    store.request("https://img.test/gone.png")
    loader.poll_ui_events()
    assert store.is_failed("missing.png")
    assert store.is_failed("https://img.test/gone.png")
    store.request("missing.png")
    assert len(loader.submitted) == 2
    store.close()


def test_close_unloads_and_drops_late_results(loader, tmp_path) -> None:
    (tmp_path / "a.png").write_bytes(png_bytes())
    (tmp_path / "b.png").write_bytes(png_bytes())
    store = ImageStore(loader, upload, asset_dir=str(tmp_path))
    store.request("a.png")
    loader.poll_ui_events()
    store.request("b.png")

    unloaded = []
    store.close(unloaded.append)
    loader.poll_ui_events()
    assert len(unloaded) == 1
    assert store.get("b.png") is None
    store.request("c.png")
    assert len(loader.submitted) == 2
