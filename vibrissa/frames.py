"""Hero frame source - preloading and nearest-frame lookup.

Every frame is loaded independently and reports its own result. A frame
that fails leaves a gap that is filled at lookup time by the nearest
frame that did load, so a partial preload still animates.
"""

from __future__ import annotations
import os
from typing import Any, Callable, List, Optional, Sequence, Tuple

from PIL import Image

from .async_loader import AsyncLoader
from .config import FRAME_COUNT, FRAME_NAME_PATTERN, MAX_FRAME_DIMENSION
from .types import FrameInfo, LoadPriority
from .logging import log, error


def frame_filename(index: int) -> str:
    """File name of the 1-based frame `index`."""
    return FRAME_NAME_PATTERN.format(index=index)


def frame_paths(frame_dir: str, frame_count: int = FRAME_COUNT) -> List[str]:
    return [os.path.join(frame_dir, frame_filename(i)) for i in range(1, frame_count + 1)]


def decode_frame(path: str) -> Image.Image:
    """Decode a frame to RGBA on a worker thread, downscaling oversized ones."""
    with Image.open(path) as src:
        img = src.convert("RGBA")
    w, h = img.size
    if w <= 0 or h <= 0:
        raise RuntimeError("empty image")
    if w > MAX_FRAME_DIMENSION or h > MAX_FRAME_DIMENSION:
        scale = min(MAX_FRAME_DIMENSION / w, MAX_FRAME_DIMENSION / h)
        new_size = (max(1, int(w * scale)), max(1, int(h * scale)))
        log(f"[PRELOAD][RESIZE] {os.path.basename(path)}: {w}x{h} -> {new_size[0]}x{new_size[1]}")
        img = img.resize(new_size, Image.LANCZOS)
    return img


class FrameSequence:
    """Immutable ordered frames; missing entries are failed loads."""

    def __init__(self, frames: Sequence[Optional[FrameInfo]]):
        self._frames: Tuple[Optional[FrameInfo], ...] = tuple(frames)
        self._released = False

    @property
    def count(self) -> int:
        return len(self._frames)

    @property
    def loaded_count(self) -> int:
        return sum(1 for f in self._frames if f is not None)

    @property
    def ready(self) -> bool:
        """True when at least one frame can be drawn."""
        return not self._released and self.loaded_count > 0

    @property
    def failed_indices(self) -> List[int]:
        return [i for i, f in enumerate(self._frames) if f is None]

    def frame_at(self, index: int) -> Optional[FrameInfo]:
        """Frame at index, or the nearest loaded one (earlier wins a tie)."""
        if not self.ready:
            return None
        n = len(self._frames)
        index = min(max(int(index), 0), n - 1)
        for dist in range(n):
            lo = index - dist
            if lo >= 0 and self._frames[lo] is not None:
                return self._frames[lo]
            hi = index + dist
            if hi < n and self._frames[hi] is not None:
                return self._frames[hi]
        return None

    def release(self, unload: Optional[Callable[[Any], None]] = None) -> None:
        if self._released:
            return
        self._released = True
        if unload is None:
            return
        for f in self._frames:
            if f is None:
                continue
            try:
                unload(f.handle)
            except Exception as e:
                error("FRAMES", f"unload frame {f.index}: {e!r}")


Uploader = Callable[[Any, int], FrameInfo]


class FramePreloader:
    """Loads all frames through the async loader and reports once."""

    def __init__(
        self,
        loader: AsyncLoader,
        paths: Sequence[str],
        upload: Uploader,
        on_complete: Callable[[FrameSequence], None],
        decode: Callable[[str], Any] = decode_frame,
    ):
        self.loader = loader
        self.paths = list(paths)
        self.upload = upload
        self.on_complete = on_complete
        self.decode = decode
        self._results: List[Optional[FrameInfo]] = [None] * len(self.paths)
        self._reported = 0
        self.sequence: Optional[FrameSequence] = None

    @property
    def done(self) -> bool:
        return self.sequence is not None

    def start(self) -> None:
        log(f"[PRELOAD] Loading {len(self.paths)} frames")
        if not self.paths:
            self._finish()
            return
        for i, path in enumerate(self.paths):
            self.loader.submit(
                os.path.basename(path),
                lambda p=path: self.decode(p),
                lambda result, err, idx=i: self._on_frame(idx, result, err),
                LoadPriority.FRAME,
            )

    def _on_frame(self, index: int, img: Any, err: Optional[BaseException]) -> None:
        if err is not None:
            error("PRELOAD", f"frame {index + 1}: {err!r}")
        else:
            try:
                self._results[index] = self.upload(img, index)
            except Exception as e:
                error("PRELOAD", f"upload frame {index + 1}: {e!r}")
        self._reported += 1
        if self._reported == len(self.paths):
            self._finish()

    def _finish(self) -> None:
        self.sequence = FrameSequence(self._results)
        failed = self.sequence.failed_indices
        if failed:
            log(f"[PRELOAD][WARN] {len(failed)}/{self.sequence.count} frames failed; "
                f"nearest loaded frames stand in")
        if not self.sequence.ready:
            error("PRELOAD", "no frames available, hero stays blank")
        else:
            log(f"[PRELOAD] Ready: {self.sequence.loaded_count}/{self.sequence.count} frames")
        self.on_complete(self.sequence)
