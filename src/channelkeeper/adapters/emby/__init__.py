"""Emby media server adapter (VOD only)."""

from __future__ import annotations

from .client import EmbyAPIError, EmbyAuthenticationError, EmbyClient, EmbyCredentials, EmbySession
from .fetcher import EmbyCatalogFetcher
from .schema import EmbyAuthResponse, EmbyItem, EmbyItemsResponse, EmbyLibrary
from .translator import translate_episode, translate_movie, translate_series

__all__ = [
    "EmbyAPIError",
    "EmbyAuthResponse",
    "EmbyAuthenticationError",
    "EmbyCatalogFetcher",
    "EmbyClient",
    "EmbyCredentials",
    "EmbyItem",
    "EmbyItemsResponse",
    "EmbyLibrary",
    "EmbySession",
    "translate_episode",
    "translate_movie",
    "translate_series",
]
