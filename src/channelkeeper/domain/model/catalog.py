"""Persisted catalog aggregates: playlists own channels and VOD items.

Children reference their playlist by ``playlist_id`` only; there are no back-pointers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .entity import Entity
from .enums import SourceType, VodType

DEFAULT_REFRESH_HOURS = 24


@dataclass(eq=False, kw_only=True)
class Playlist(Entity):
    name: str
    source_type: SourceType
    url: str
    username: str | None = None
    password_ref: str | None = None
    epg_url: str | None = None
    refresh_hours: int = DEFAULT_REFRESH_HOURS
    last_sync: datetime | None = None
    is_active: bool = True
    sort_order: int = 0

    @property
    def refresh_interval(self) -> timedelta:
        return timedelta(hours=self.refresh_hours)

    def is_stale(self, now: datetime) -> bool:
        """Whether the playlist is due for a refresh at ``now``."""

        if not self.is_active:
            return False
        if self.last_sync is None:
            return True
        return now - self.last_sync >= self.refresh_interval

    def mark_synced(self, at: datetime) -> None:
        self.last_sync = at


@dataclass(eq=False, kw_only=True)
class Channel(Entity):
    playlist_id: str
    name: str
    stream_url: str
    source_channel_id: str | None = None
    group_name: str | None = None
    logo_url: str | None = None
    epg_id: str | None = None
    tvg_id: str | None = None
    channel_number: int | None = None
    is_favorite: bool = False
    is_deleted: bool = False
    deleted_at: datetime | None = None

    def soft_delete(self, at: datetime) -> None:
        self.is_deleted = True
        self.deleted_at = at

    def reactivate(self) -> None:
        self.is_deleted = False
        self.deleted_at = None

    def toggle_favorite(self) -> bool:
        self.is_favorite = not self.is_favorite
        return self.is_favorite


@dataclass(eq=False, kw_only=True)
class VodItem(Entity):
    playlist_id: str
    title: str
    media_type: VodType
    stream_url: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    description: str | None = None
    year: int | None = None
    rating: float | None = None
    genre: str | None = None
    series_id: str | None = None
    season_number: int | None = None
    episode_number: int | None = None
    duration_seconds: int | None = None
