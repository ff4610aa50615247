"""Translate Emby items into normalized VOD entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from channelkeeper.domain.model import VodEntry, VodType

from .client import BACKDROP_MAX_WIDTH, POSTER_MAX_WIDTH, direct_stream_url, image_url

if TYPE_CHECKING:
    from .schema import EmbyItem


def translate_movie(item: EmbyItem, *, server_url: str, access_token: str) -> VodEntry:
    return VodEntry(
        title=item.name,
        media_type=VodType.MOVIE,
        stream_url=direct_stream_url(server_url, item.id, access_token),
        poster_url=_poster(item, server_url),
        backdrop_url=_backdrop(item, server_url),
        description=item.overview,
        year=item.production_year,
        rating=item.community_rating,
        genre=item.genre,
        duration_seconds=item.duration_seconds,
        source_id=item.id,
    )


def translate_series(item: EmbyItem, *, server_url: str) -> VodEntry:
    return VodEntry(
        title=item.name,
        media_type=VodType.SERIES,
        poster_url=_poster(item, server_url),
        backdrop_url=_backdrop(item, server_url),
        description=item.overview,
        year=item.production_year,
        rating=item.community_rating,
        genre=item.genre,
        source_id=item.id,
    )


def translate_episode(
    item: EmbyItem, *, series_source_id: str, server_url: str, access_token: str
) -> VodEntry:
    return VodEntry(
        title=item.name,
        media_type=VodType.EPISODE,
        stream_url=direct_stream_url(server_url, item.id, access_token),
        poster_url=_poster(item, server_url),
        description=item.overview,
        season_number=item.parent_index_number,
        episode_number=item.index_number,
        duration_seconds=item.duration_seconds,
        source_id=item.id,
        series_source_id=series_source_id,
    )


def _poster(item: EmbyItem, server_url: str) -> str:
    return image_url(
        server_url,
        item.id,
        "Primary",
        tag=item.image_tags.get("Primary"),
        max_width=POSTER_MAX_WIDTH,
    )


def _backdrop(item: EmbyItem, server_url: str) -> str | None:
    tag = item.image_tags.get("Backdrop")
    if tag is None:
        return None
    return image_url(server_url, item.id, "Backdrop", tag=tag, max_width=BACKDROP_MAX_WIDTH)
