"""Shared HTTP plumbing for the content clients (httpx)."""

from __future__ import annotations
from typing import Any, Mapping, Optional

import httpx

from ..config import FETCH_TIMEOUT_S
from ..logging import log
from .errors import ContentFetchError

USER_AGENT = "vibrissa/1.0"


def make_client(
    base_url: str,
    *,
    timeout: float = FETCH_TIMEOUT_S,
    headers: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """httpx client with an explicit timeout on every phase of the request."""
    return httpx.Client(
        base_url=base_url,
        headers={"User-Agent": USER_AGENT, **(headers or {})},
        timeout=httpx.Timeout(timeout, connect=min(timeout, 5.0)),
        follow_redirects=True,
        transport=transport,
    )


def get_json(
    client: httpx.Client,
    path: str,
    *,
    params: Mapping[str, Any],
    source: str,
) -> Any:
    """GET a JSON document. Every failure becomes a ContentFetchError."""
    try:
        resp = client.get(path, params=params)
    except httpx.TimeoutException as e:
        raise ContentFetchError("request timed out", source=source, cause=e) from e
    except httpx.HTTPError as e:
        raise ContentFetchError("transport failure", source=source, cause=e) from e

    if not resp.is_success:
        raise ContentFetchError(
            f"HTTP {resp.status_code} {resp.reason_phrase}",
            source=source,
            status_code=resp.status_code,
        )

    try:
        payload = resp.json()
    except ValueError as e:
        raise ContentFetchError("response is not JSON", source=source,
                                status_code=resp.status_code, cause=e) from e

    log(f"[{source}] GET {path} -> {resp.status_code}")
    return payload
