"""Translate parsed M3U entries into normalized catalog entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from channelkeeper.adapters.translation import year_from_title
from channelkeeper.domain.model import ChannelEntry, VodEntry, VodType

if TYPE_CHECKING:
    from .parser import M3UEntry


def translate_channel(entry: M3UEntry) -> ChannelEntry:
    # tvg-id is the only provider-side identifier a playlist file carries
    return ChannelEntry(
        name=entry.name,
        stream_url=entry.stream_url,
        source_channel_id=entry.tvg_id,
        group_name=entry.group_title,
        logo_url=entry.tvg_logo,
        tvg_id=entry.tvg_id,
        channel_number=entry.channel_number,
    )


def translate_vod(entry: M3UEntry) -> VodEntry:
    group = (entry.group_title or "").casefold()
    media_type = VodType.SERIES if "series" in group or "episode" in group else VodType.MOVIE
    return VodEntry(
        title=entry.name,
        media_type=media_type,
        stream_url=entry.stream_url,
        poster_url=entry.tvg_logo,
        year=year_from_title(entry.name),
        genre=entry.group_title,
        duration_seconds=entry.duration if entry.duration > 0 else None,
    )
