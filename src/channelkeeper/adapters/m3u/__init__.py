"""M3U playlist adapter."""

from __future__ import annotations

from .fetcher import M3UCatalogFetcher, PlaylistDownloadError
from .parser import (
    IssueReason,
    M3UEntry,
    M3UIssue,
    M3UParseResult,
    PlaylistHeader,
    decode_playlist,
    parse_playlist,
)
from .translator import translate_channel, translate_vod

__all__ = [
    "IssueReason",
    "M3UCatalogFetcher",
    "M3UEntry",
    "M3UIssue",
    "M3UParseResult",
    "PlaylistDownloadError",
    "PlaylistHeader",
    "decode_playlist",
    "parse_playlist",
    "translate_channel",
    "translate_vod",
]
