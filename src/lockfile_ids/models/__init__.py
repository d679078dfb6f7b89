"""Data models for lockfile content ids."""

from __future__ import annotations

from .content_id import (
    EMPTY_NAMESPACE,
    AnyContentId,
    ContentId,
    InvalidContentId,
    dedupe,
    parse_content_id,
)

__all__ = [
    "EMPTY_NAMESPACE",
    "AnyContentId",
    "ContentId",
    "InvalidContentId",
    "dedupe",
    "parse_content_id",
]
