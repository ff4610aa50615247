"""Fetch an M3U playlist and split it into live channels and VOD entries."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from channelkeeper.adapters.http_resilience import ClientFactory, default_client_factory
from channelkeeper.config import ResilienceConfig, get_provider_resilience
from channelkeeper.domain.errors import EmptyCatalogError
from channelkeeper.domain.ports.fetching import CatalogBatch, CatalogFetcher

from .parser import decode_playlist, parse_playlist
from .translator import translate_channel, translate_vod

if TYPE_CHECKING:
    from channelkeeper.domain.model import Playlist

log = getLogger(__name__)


class PlaylistDownloadError(RuntimeError):
    """Raised when a playlist file cannot be downloaded or read."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_resilience() -> ResilienceConfig:
    return get_provider_resilience("m3u")


@dataclass(slots=True)
class M3UCatalogFetcher:
    resilience: ResilienceConfig = field(default_factory=_default_resilience)
    client_factory: ClientFactory = field(default=default_client_factory)

    def __call__(self, playlist: Playlist) -> CatalogBatch:
        data = self._load(playlist.url)
        parsed = parse_playlist(decode_playlist(data))
        if not parsed.entries:
            raise EmptyCatalogError(f"Playlist {playlist.name!r} contains no entries")

        channels = [translate_channel(entry) for entry in parsed.entries if entry.is_live]
        vod_items = [translate_vod(entry) for entry in parsed.entries if not entry.is_live]
        log.info(
            "Fetched M3U playlist %s: %s channels, %s VOD entries",
            playlist.id,
            len(channels),
            len(vod_items),
        )
        return CatalogBatch(
            channels=channels,
            vod_items=vod_items,
            epg_url=parsed.header.epg_url if parsed.header else None,
            issues=[str(issue) for issue in parsed.issues],
        )

    def _load(self, location: str) -> bytes:
        if location.lower().startswith(("http://", "https://")):
            return asyncio.run(self._download(location))
        path = Path(location.removeprefix("file://")).expanduser()
        try:
            return path.read_bytes()
        except OSError as exc:
            raise PlaylistDownloadError(f"Cannot read playlist file {path}: {exc}") from exc

    async def _download(self, url: str) -> bytes:
        async with self.client_factory(self.resilience) as client:
            response = await client.get(url)
        if not response.is_success:
            raise PlaylistDownloadError(
                f"Playlist download failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.content


if TYPE_CHECKING:
    _fetcher_check: CatalogFetcher = M3UCatalogFetcher()
