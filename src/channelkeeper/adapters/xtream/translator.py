"""Translate Xtream API listings into normalized catalog entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from channelkeeper.adapters.translation import year_from_title
from channelkeeper.domain.model import ChannelEntry, VodEntry, VodType

if TYPE_CHECKING:
    from .schema import XtreamLiveStream, XtreamSeries, XtreamVodStream


def translate_live_stream(
    stream: XtreamLiveStream, *, category_name: str | None, stream_url: str
) -> ChannelEntry:
    return ChannelEntry(
        name=stream.name,
        stream_url=stream_url,
        source_channel_id=str(stream.stream_id),
        group_name=category_name,
        logo_url=stream.stream_icon,
        epg_id=stream.epg_channel_id,
        tvg_id=stream.epg_channel_id,
        channel_number=stream.num or None,
    )


def translate_vod_stream(
    stream: XtreamVodStream, *, category_name: str | None, stream_url: str
) -> VodEntry:
    return VodEntry(
        title=stream.name,
        media_type=VodType.MOVIE,
        stream_url=stream_url,
        poster_url=stream.stream_icon,
        rating=stream.rating,
        genre=category_name,
        year=year_from_title(stream.name),
        source_id=str(stream.stream_id),
    )


def translate_series(series: XtreamSeries, *, category_name: str | None) -> VodEntry:
    return VodEntry(
        title=series.name,
        media_type=VodType.SERIES,
        poster_url=series.cover,
        backdrop_url=series.backdrop_path[0] if series.backdrop_path else None,
        description=series.plot,
        year=release_year(series.release_date),
        rating=series.rating,
        genre=series.genre or category_name,
        source_id=str(series.series_id),
    )


def release_year(value: str | None) -> int | None:
    """Year of an Xtream release date (``2019-05-01``) or of a ``Title (2019)`` string."""

    if not value:
        return None
    prefix = value[:4]
    if prefix.isdigit() and 1900 <= int(prefix) <= 2100:
        return int(prefix)
    return year_from_title(value)
