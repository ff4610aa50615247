"""Domain model for playlists and their channel and VOD catalogs."""

from __future__ import annotations

from .catalog import DEFAULT_REFRESH_HOURS, Channel, Playlist, VodItem
from .entity import Entity, new_id
from .entries import ChannelEntry, VodEntry
from .enums import SourceType, VodType

__all__ = [
    "DEFAULT_REFRESH_HOURS",
    "Channel",
    "ChannelEntry",
    "Entity",
    "Playlist",
    "SourceType",
    "VodEntry",
    "VodItem",
    "VodType",
    "new_id",
]
