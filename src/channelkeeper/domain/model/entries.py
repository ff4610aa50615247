"""Normalized incoming records produced by provider converters.

These are the fixed canonical shapes the reconciliation engine consumes; every
provider maps onto them with explicit optionals.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import VodType


@dataclass(frozen=True, slots=True, kw_only=True)
class ChannelEntry:
    name: str
    stream_url: str
    source_channel_id: str | None = None
    group_name: str | None = None
    logo_url: str | None = None
    epg_id: str | None = None
    tvg_id: str | None = None
    channel_number: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class VodEntry:
    title: str
    media_type: VodType
    stream_url: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    description: str | None = None
    year: int | None = None
    rating: float | None = None
    genre: str | None = None
    season_number: int | None = None
    episode_number: int | None = None
    duration_seconds: int | None = None
    # provider-native ids, only used to link episodes to their series within one batch
    source_id: str | None = None
    series_source_id: str | None = None
