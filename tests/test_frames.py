"""Tests for frame decoding, preloading and nearest-frame lookup."""

from __future__ import annotations

import os

from PIL import Image

import vibrissa.frames as frames_mod
from vibrissa.frames import (
    FramePreloader, decode_frame, frame_filename, frame_paths,
)
from vibrissa.types import FrameInfo

from conftest import make_sequence


def test_frame_names_are_zero_padded() -> None:
    assert frame_filename(1) == "ezgif-frame-001.jpg"
    assert frame_filename(136) == "ezgif-frame-136.jpg"
    paths = frame_paths("images", 3)
    assert [os.path.basename(p) for p in paths] == [
        "ezgif-frame-001.jpg", "ezgif-frame-002.jpg", "ezgif-frame-003.jpg"]


def test_decode_frame_converts_and_downscales(tmp_path, monkeypatch) -> None:
    path = tmp_path / "f.jpg"
    Image.new("RGB", (100, 50), (200, 10, 10)).save(path)
    img = decode_frame(str(path))
    assert img.mode == "RGBA"
    assert img.size == (100, 50)

    monkeypatch.setattr(frames_mod, "MAX_FRAME_DIMENSION", 40)
    assert decode_frame(str(path)).size == (40, 20)


def preload(loader, count: int, failing=()):
    paths = frame_paths("frames", count)
    done = []

    def decode(p):
        if os.path.basename(p) in failing:
            raise OSError(f"cannot read {p}")
        return p

    pre = FramePreloader(loader, paths, lambda img, i: FrameInfo(img, 16, 9, i),
                         done.append, decode=decode)
    pre.start()
    loader.poll_ui_events()
    return pre, done


def test_preload_reports_once_all_frames_finish(loader) -> None:
    pre, done = preload(loader, 4)
    assert pre.done
    assert len(done) == 1
    seq = done[0]
    assert seq.count == 4 and seq.loaded_count == 4 and seq.ready
    assert seq.frame_at(2).index == 2


def test_partial_failure_uses_nearest_frame(loader) -> None:
    _, done = preload(loader, 4, failing={"ezgif-frame-002.jpg", "ezgif-frame-003.jpg"})
    seq = done[0]
    assert seq.ready
    assert seq.failed_indices == [1, 2]
    assert seq.frame_at(1).index == 0
    assert seq.frame_at(2).index == 3
    assert seq.frame_at(99).index == 3


def test_upload_failure_counts_as_missing(loader) -> None:
    paths = frame_paths("frames", 2)
    done = []

    def upload(img, i):
        if i == 0:
            raise RuntimeError("gpu")
        return FrameInfo(img, 1, 1, i)

    FramePreloader(loader, paths, upload, done.append, decode=lambda p: p).start()
    loader.poll_ui_events()
    assert done[0].failed_indices == [0]
    assert done[0].frame_at(0).index == 1


def test_all_frames_failed_is_not_ready(loader) -> None:
    names = {f"ezgif-frame-00{i}.jpg" for i in range(1, 4)}
    _, done = preload(loader, 3, failing=names)
    seq = done[0]
    assert not seq.ready
    assert seq.frame_at(0) is None


def test_empty_preload_finishes_immediately(loader) -> None:
    done = []
    pre = FramePreloader(loader, [], lambda img, i: None, done.append)
    pre.start()
    assert pre.done and not done[0].ready


def test_nearest_prefers_earlier_on_tie() -> None:
    seq = make_sequence(5, missing={2})
    assert seq.frame_at(2).index == 1


def test_release_unloads_once() -> None:
    seq = make_sequence(3, missing={1})
    unloaded = []
    seq.release(unloaded.append)
    seq.release(unloaded.append)
    assert unloaded == ["tex0", "tex2"]
    assert not seq.ready
