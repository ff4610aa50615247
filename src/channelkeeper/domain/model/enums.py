"""Domain enumerations."""

from __future__ import annotations

from enum import StrEnum


class SourceType(StrEnum):
    """Provider family a playlist subscribes to."""

    M3U = "m3u"
    XTREAM = "xtream"
    EMBY = "emby"


class VodType(StrEnum):
    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"
