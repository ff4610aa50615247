"""Errors raised by catalog services before or instead of doing any work."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog-level failures."""


class PlaylistNotFoundError(CatalogError, LookupError):
    def __init__(self, playlist_id: str) -> None:
        super().__init__(f"Playlist not found: {playlist_id}")
        self.playlist_id = playlist_id


class UnsupportedSourceTypeError(CatalogError, ValueError):
    def __init__(self, source_type: str) -> None:
        super().__init__(f"Unsupported playlist source type: {source_type}")
        self.source_type = source_type


class EmptyCatalogError(CatalogError):
    """A provider answered successfully but listed nothing to import."""


class ChannelNotFoundError(CatalogError, LookupError):
    def __init__(self, channel_id: str) -> None:
        super().__init__(f"Channel not found: {channel_id}")
        self.channel_id = channel_id
