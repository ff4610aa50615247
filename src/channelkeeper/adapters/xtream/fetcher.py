"""Fetch an Xtream Codes account's live and VOD catalogs."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from channelkeeper.adapters.http_resilience import ClientFactory, default_client_factory
from channelkeeper.config import ResilienceConfig, get_provider_resilience
from channelkeeper.domain.errors import EmptyCatalogError
from channelkeeper.domain.ports.fetching import CatalogBatch, CatalogFetcher, CredentialStore

from .client import XtreamAPIError, XtreamAuthenticationError, XtreamClient, XtreamCredentials
from .translator import translate_live_stream, translate_series, translate_vod_stream

if TYPE_CHECKING:
    from collections.abc import Callable

    from channelkeeper.domain.model import ChannelEntry, Playlist, VodEntry

    from .schema import XtreamCategory

log = getLogger(__name__)


def _default_resilience() -> ResilienceConfig:
    return get_provider_resilience("xtream")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class XtreamCatalogFetcher:
    credential_store: CredentialStore
    resilience: ResilienceConfig = field(default_factory=_default_resilience)
    client_factory: ClientFactory = field(default=default_client_factory)
    clock: Callable[[], datetime] = field(default=_utcnow)
    include_vod: bool = True

    def __call__(self, playlist: Playlist) -> CatalogBatch:
        credentials = self._credentials(playlist)
        return asyncio.run(self._fetch(playlist, credentials))

    def _credentials(self, playlist: Playlist) -> XtreamCredentials:
        password = (
            self.credential_store.get(playlist.password_ref) if playlist.password_ref else None
        )
        if not playlist.username or password is None:
            raise XtreamAuthenticationError(
                f"No stored Xtream credentials for playlist {playlist.id}"
            )
        return XtreamCredentials(
            server_url=playlist.url, username=playlist.username, password=password
        )

    async def _fetch(self, playlist: Playlist, credentials: XtreamCredentials) -> CatalogBatch:
        async with self.client_factory(self.resilience) as http:
            client = XtreamClient(http, credentials)
            await client.authenticate(now=self.clock())
            channels = await self._fetch_channels(client)
            if not channels:
                raise EmptyCatalogError(f"Xtream account for {playlist.name!r} lists no streams")
            vod_items = await self._fetch_vod(client) if self.include_vod else None

        log.info(
            "Fetched Xtream playlist %s: %s channels, %s VOD entries",
            playlist.id,
            len(channels),
            "n/a" if vod_items is None else len(vod_items),
        )
        return CatalogBatch(channels=channels, vod_items=vod_items)

    async def _fetch_channels(self, client: XtreamClient) -> list[ChannelEntry]:
        categories = _category_names(await client.live_categories())
        return [
            translate_live_stream(
                stream,
                category_name=categories.get(stream.category_id or ""),
                stream_url=client.live_stream_url(stream.stream_id),
            )
            for stream in await client.live_streams()
        ]

    async def _fetch_vod(self, client: XtreamClient) -> list[VodEntry] | None:
        try:
            vod_categories = _category_names(await client.vod_categories())
            vod_streams = await client.vod_streams()
            series_categories = _category_names(await client.series_categories())
            series = await client.series()
        except (XtreamAPIError, httpx.HTTPError) as exc:
            log.warning("Xtream VOD listing failed, keeping the stored VOD catalog: %s", exc)
            return None

        entries = [
            translate_vod_stream(
                stream,
                category_name=vod_categories.get(stream.category_id or ""),
                stream_url=client.movie_url(stream.stream_id, stream.container_extension),
            )
            for stream in vod_streams
        ]
        entries.extend(
            translate_series(item, category_name=series_categories.get(item.category_id or ""))
            for item in series
        )
        return entries


def _category_names(categories: list[XtreamCategory]) -> dict[str, str]:
    return {category.category_id: category.category_name for category in categories}


if TYPE_CHECKING:

    def _check(store: CredentialStore) -> None:
        _fetcher: CatalogFetcher = XtreamCatalogFetcher(credential_store=store)
