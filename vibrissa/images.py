"""Gallery artwork store - decode on workers, upload on the UI thread.

References are either http(s) URLs or file names under the asset
directory. Failed references are remembered and not retried; the
renderer draws a placeholder for them.
"""

from __future__ import annotations
import io
import os
from typing import Any, Callable, Dict, Optional, Set

import httpx
from PIL import Image

from .config import ASSET_DIR, FETCH_TIMEOUT_S, GALLERY_IMAGE_MAX_DIMENSION
from .types import LoadPriority
from .logging import log, error

Upload = Callable[[Image.Image], Any]


def fit_within(img: Image.Image, limit: int) -> Image.Image:
    w, h = img.size
    if w <= limit and h <= limit:
        return img
    scale = min(limit / w, limit / h)
    return img.resize((max(1, int(w * scale)), max(1, int(h * scale))), Image.LANCZOS)


class ImageStore:
    def __init__(
        self,
        loader,
        upload: Upload,
        *,
        asset_dir: str = ASSET_DIR,
        timeout: float = FETCH_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.loader = loader
        self.upload = upload
        self.asset_dir = asset_dir
        self._http = httpx.Client(timeout=timeout, follow_redirects=True, transport=transport)
        self._ready: Dict[str, Any] = {}
        self._pending: Set[str] = set()
        self._failed: Set[str] = set()
        self.closed = False

    def _read(self, ref: str) -> Image.Image:
        if ref.startswith(("http://", "https://")):
            resp = self._http.get(ref)
            resp.raise_for_status()
            src = Image.open(io.BytesIO(resp.content))
        else:
            src = Image.open(os.path.join(self.asset_dir, ref))
        with src:
            img = src.convert("RGBA")
        return fit_within(img, GALLERY_IMAGE_MAX_DIMENSION)

    def request(self, ref: Optional[str]) -> None:
        if not ref or self.closed:
            return
        if ref in self._ready or ref in self._pending or ref in self._failed:
            return
        self._pending.add(ref)
        self.loader.submit(
            f"image:{ref}",
            lambda: self._read(ref),
            lambda img, err: self._on_loaded(ref, img, err),
            LoadPriority.IMAGE,
        )

    def _on_loaded(self, ref: str, img: Optional[Image.Image], err: Optional[BaseException]) -> None:
        self._pending.discard(ref)
        if self.closed:
            return
        if err is not None:
            self._failed.add(ref)
            error("IMAGES", f"{ref}: {err!r}")
            return
        try:
            self._ready[ref] = self.upload(img)
        except Exception as e:
            self._failed.add(ref)
            error("IMAGES", f"upload {ref}: {e!r}")
            return
        log(f"[IMAGES] Ready: {ref}")

    def get(self, ref: Optional[str]) -> Optional[Any]:
        if not ref:
            return None
        return self._ready.get(ref)

    def is_failed(self, ref: Optional[str]) -> bool:
        return bool(ref) and ref in self._failed

    def close(self, unload: Optional[Callable[[Any], None]] = None) -> None:
        self.closed = True
        if unload is not None:
            for handle in self._ready.values():
                try:
                    unload(handle)
                except Exception as e:
                    error("IMAGES", f"unload: {e!r}")
        self._ready.clear()
        self._http.close()
