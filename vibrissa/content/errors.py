"""Errors raised by the remote content clients."""

from __future__ import annotations
from typing import Optional


class ContentFetchError(Exception):
    """A remote content request failed (transport, status or payload)."""

    def __init__(
        self,
        message: str,
        *,
        source: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.source = source
        self.status_code = status_code
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"{self.source}: {self.message}"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.cause is not None:
            parts.append(f"cause={self.cause!r}")
        return " ".join(parts)
