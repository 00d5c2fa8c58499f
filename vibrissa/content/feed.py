"""Binds a remote fetch to a gallery model.

The fetch runs on a loader worker; its result is applied on the UI thread.
A failed or empty fetch leaves the fallback list in place. Results that
arrive after dispose() are dropped.
"""

from __future__ import annotations
from typing import Callable, List, Optional

from ..async_loader import AsyncLoader
from ..state.gallery import GalleryModel
from ..types import GalleryItem, LoadPriority
from ..logging import log, error

Fetch = Callable[[], List[GalleryItem]]


class ContentFeed:
    def __init__(self, label: str, model: GalleryModel, fetch: Fetch):
        self.label = label
        self.model = model
        self.fetch = fetch
        self.disposed = False
        self.loading = False
        self.last_error: Optional[BaseException] = None

    def start(self, loader: AsyncLoader) -> None:
        self.loading = True
        loader.submit(f"feed:{self.label}", self.fetch, self._on_result, LoadPriority.CONTENT)

    def _on_result(self, items: Optional[List[GalleryItem]], err: Optional[BaseException]) -> None:
        self.loading = False
        if self.disposed or self.model.disposed:
            log(f"[FEED] {self.label}: result after teardown dropped")
            return
        if err is not None:
            self.last_error = err
            error("FEED", f"{self.label}: {err}; fallback content stays")
            return
        if not items:
            log(f"[FEED] {self.label}: nothing fetched, fallback content stays")
            return
        self.model.replace_items(items)

    def dispose(self) -> None:
        self.disposed = True
