"""Lenient M3U/M3U8 playlist parser.

Malformed entries never abort a parse; they are reported as ``M3UIssue`` records
next to the entries that could be read.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final
from urllib.parse import quote

import httpx

log = logging.getLogger(__name__)

_ATTRIBUTE_RE: Final = re.compile(r"""([a-zA-Z][a-zA-Z0-9_-]*)=["']([^"']*)["']""")
_DURATION_RE: Final = re.compile(r"^(-?\d+)")
_STREAM_SCHEMES: Final[tuple[str, ...]] = (
    "http://",
    "https://",
    "rtsp://",
    "rtmp://",
    "mms://",
    "mmsh://",
    "rtp://",
    "udp://",
)
_KNOWN_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    {"tvg-id", "tvg-name", "tvg-logo", "tvg-language", "tvg-chno", "channel-number", "group-title"}
)


class IssueReason(StrEnum):
    MISSING_STREAM_URL = "missing_stream_url"
    MALFORMED_EXTINF = "malformed_extinf"
    INVALID_URL = "invalid_url"
    EMPTY_NAME = "empty_name"
    ORPHANED_URL = "orphaned_url"


@dataclass(frozen=True, slots=True)
class M3UIssue:
    line: int
    reason: IssueReason
    raw_text: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.reason} ({self.raw_text[:80]})"


@dataclass(frozen=True, slots=True, kw_only=True)
class M3UEntry:
    name: str
    stream_url: str
    group_title: str | None = None
    tvg_id: str | None = None
    tvg_name: str | None = None
    tvg_logo: str | None = None
    tvg_language: str | None = None
    channel_number: int | None = None
    duration: int = -1
    extras: dict[str, str] = field(default_factory=dict)

    @property
    def is_live(self) -> bool:
        return self.duration <= 0


@dataclass(frozen=True, slots=True)
class PlaylistHeader:
    epg_url: str | None = None
    tvg_shift: str | None = None
    catchup_source: str | None = None


@dataclass(slots=True)
class M3UParseResult:
    entries: list[M3UEntry] = field(default_factory=list)
    issues: list[M3UIssue] = field(default_factory=list)
    header: PlaylistHeader | None = None


@dataclass(frozen=True, slots=True)
class _Extinf:
    duration: int
    name: str
    attributes: dict[str, str]
    raw_line: str
    line: int


def decode_playlist(data: bytes) -> str:
    """Decode raw playlist bytes as UTF-8, falling back to Latin-1."""

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        log.debug("Playlist is not valid UTF-8, decoding as Latin-1")
        return data.decode("latin-1")


def parse_playlist(text: str) -> M3UParseResult:
    result = M3UParseResult()
    pending: _Extinf | None = None

    normalized = text.removeprefix("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    for line_number, raw_line in enumerate(normalized.split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("#EXTM3U"):
            result.header = _parse_header(line)
            continue

        if upper.startswith(("#EXTINF:", "#EXTINF :")):
            if pending is not None:
                result.issues.append(
                    M3UIssue(pending.line, IssueReason.MISSING_STREAM_URL, pending.raw_line)
                )
            pending = _parse_extinf(line, line_number)
            if pending is None:
                result.issues.append(M3UIssue(line_number, IssueReason.MALFORMED_EXTINF, line))
            continue

        if line.startswith("#"):
            # #EXTVLCOPT, #EXTGRP, #KODIPROP and friends
            continue

        if not line.lower().startswith(_STREAM_SCHEMES):
            continue

        stream_url = _normalize_stream_url(line)
        if stream_url is None:
            result.issues.append(M3UIssue(line_number, IssueReason.INVALID_URL, line))
            pending = None
            continue

        if pending is None:
            result.entries.append(M3UEntry(name=_last_path_segment(stream_url), stream_url=stream_url))
            result.issues.append(M3UIssue(line_number, IssueReason.ORPHANED_URL, line))
            continue

        name = pending.name or _last_path_segment(stream_url)
        if not name.strip():
            result.issues.append(M3UIssue(pending.line, IssueReason.EMPTY_NAME, pending.raw_line))
        result.entries.append(_build_entry(pending, name=name, stream_url=stream_url))
        pending = None

    if pending is not None:
        result.issues.append(M3UIssue(pending.line, IssueReason.MISSING_STREAM_URL, pending.raw_line))

    log.info("Parsed %s playlist entries (%s issues)", len(result.entries), len(result.issues))
    return result


def parse_attributes(text: str) -> dict[str, str]:
    return {key.lower(): value for key, value in _ATTRIBUTE_RE.findall(text)}


def extract_name(text: str) -> str:
    """Return the text after the first comma that is not inside quotes."""

    in_quote: str | None = None
    for index, char in enumerate(text):
        if in_quote is not None:
            if char == in_quote:
                in_quote = None
        elif char in {'"', "'"}:
            in_quote = char
        elif char == ",":
            return text[index + 1 :].strip()
    return ""


def _parse_header(line: str) -> PlaylistHeader:
    attributes = parse_attributes(line)
    return PlaylistHeader(
        epg_url=attributes.get("x-tvg-url") or attributes.get("url-tvg"),
        tvg_shift=attributes.get("tvg-shift"),
        catchup_source=attributes.get("catchup-source"),
    )


def _parse_extinf(line: str, line_number: int) -> _Extinf | None:
    after_colon = line.split(":", 1)[1].strip()
    duration_match = _DURATION_RE.match(after_colon)
    if duration_match is None and "," not in after_colon:
        return None

    duration = -1
    rest = after_colon
    if duration_match is not None:
        duration = int(duration_match.group(1))
        rest = after_colon[duration_match.end() :]

    return _Extinf(
        duration=duration,
        name=extract_name(rest),
        attributes=parse_attributes(rest),
        raw_line=line,
        line=line_number,
    )


def _build_entry(extinf: _Extinf, *, name: str, stream_url: str) -> M3UEntry:
    attributes = extinf.attributes
    return M3UEntry(
        name=name,
        stream_url=stream_url,
        group_title=attributes.get("group-title") or None,
        tvg_id=attributes.get("tvg-id") or None,
        tvg_name=attributes.get("tvg-name") or None,
        tvg_logo=attributes.get("tvg-logo") or None,
        tvg_language=attributes.get("tvg-language") or None,
        channel_number=_parse_int(attributes.get("tvg-chno"))
        or _parse_int(attributes.get("channel-number")),
        duration=extinf.duration,
        extras={key: value for key, value in attributes.items() if key not in _KNOWN_ATTRIBUTES},
    )


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _normalize_stream_url(raw: str) -> str | None:
    for candidate in (raw, quote(raw, safe=":/?#[]@!$&'()*+,;=%~")):
        try:
            url = httpx.URL(candidate)
        except httpx.InvalidURL:
            continue
        if url.host:
            return candidate
    return None


def _last_path_segment(stream_url: str) -> str:
    path = httpx.URL(stream_url).path.rstrip("/")
    return path.rsplit("/", 1)[-1]
