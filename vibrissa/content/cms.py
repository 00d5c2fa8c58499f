"""Headless CMS source - tagged image assets from the Contentful Delivery API."""

from __future__ import annotations
from typing import Any, List, Mapping, Optional

import httpx

from ..config import CONTENTFUL_BASE_URL, CONTENTFUL_ENVIRONMENT, FETCH_TIMEOUT_S
from ..types import GalleryItem
from ..logging import log, warn
from .errors import ContentFetchError
from .http import make_client, get_json

SOURCE = "CMS"
DEFAULT_TITLE = "Untitled Sketch"
DEFAULT_DESCRIPTION = "No description provided."


def asset_to_item(asset: Mapping[str, Any]) -> Optional[GalleryItem]:
    """Map one asset record; assets without a file URL are skipped."""
    fields = asset.get("fields") or {}
    file_info = fields.get("file") or {}
    url = file_info.get("url")
    if not url:
        return None
    if url.startswith("//"):
        url = f"https:{url}"
    return GalleryItem(
        id=(asset.get("sys") or {}).get("id"),
        title=fields.get("title") or DEFAULT_TITLE,
        description=fields.get("description") or DEFAULT_DESCRIPTION,
        image_ref=url,
    )


class ContentfulSource:
    """Fetches published assets carrying a tag, newest first.

    Both the space id and the access token are optional; without them the
    source logs a warning and returns an empty list.
    """

    def __init__(
        self,
        space_id: Optional[str],
        access_token: Optional[str],
        *,
        environment: str = CONTENTFUL_ENVIRONMENT,
        base_url: str = CONTENTFUL_BASE_URL,
        timeout: float = FETCH_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.space_id = space_id
        self.environment = environment
        self._client: Optional[httpx.Client] = None
        if space_id and access_token:
            self._client = make_client(
                base_url,
                timeout=timeout,
                headers={"Authorization": f"Bearer {access_token}"},
                transport=transport,
            )

    @property
    def configured(self) -> bool:
        return self._client is not None

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> ContentfulSource:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_assets(self, tag: str) -> List[GalleryItem]:
        if self._client is None:
            warn(SOURCE, "space id or access token missing, keeping fallback content")
            return []

        log(f"[{SOURCE}] Fetching assets tagged '{tag}'")
        payload = get_json(
            self._client,
            f"/spaces/{self.space_id}/environments/{self.environment}/assets",
            params={"metadata.tags.sys.id[in]": tag, "order": "-sys.createdAt"},
            source=SOURCE,
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
            raise ContentFetchError("payload has no items list", source=SOURCE)

        raw = payload["items"]
        if not raw:
            warn(SOURCE, f"no assets tagged '{tag}'; check the assets are uploaded "
                         f"to Media, tagged '{tag}' and published")

        items = [it for it in (asset_to_item(a) for a in raw) if it is not None]
        log(f"[{SOURCE}] {len(items)}/{len(raw)} assets usable for '{tag}'")
        return items
