"""Fetch the movie and series libraries of an Emby server."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from channelkeeper.adapters.http_resilience import ClientFactory, default_client_factory
from channelkeeper.config import (
    EmbyClientIdentity,
    ResilienceConfig,
    get_emby_identity,
    get_provider_resilience,
    get_sync_config,
)
from channelkeeper.domain.ports.fetching import CatalogBatch, CatalogFetcher, CredentialStore

from .client import EmbyAuthenticationError, EmbyClient, EmbyCredentials, EmbySession
from .translator import translate_episode, translate_movie, translate_series

if TYPE_CHECKING:
    from channelkeeper.domain.model import Playlist, VodEntry

    from .schema import EmbyLibrary

log = getLogger(__name__)

MOVIES_COLLECTION = "movies"
SHOWS_COLLECTION = "tvshows"


def _default_resilience() -> ResilienceConfig:
    return get_provider_resilience("emby")


def _default_page_size() -> int:
    return get_sync_config().emby_page_size


@dataclass(slots=True)
class EmbyCatalogFetcher:
    """Emby servers expose no live channels; the batch only carries VOD entries."""

    credential_store: CredentialStore
    resilience: ResilienceConfig = field(default_factory=_default_resilience)
    client_factory: ClientFactory = field(default=default_client_factory)
    identity: EmbyClientIdentity = field(default_factory=get_emby_identity)
    page_size: int = field(default_factory=_default_page_size)

    def __call__(self, playlist: Playlist) -> CatalogBatch:
        credentials = self._credentials(playlist)
        return asyncio.run(self._fetch(playlist, credentials))

    def _credentials(self, playlist: Playlist) -> EmbyCredentials:
        password = (
            self.credential_store.get(playlist.password_ref) if playlist.password_ref else None
        )
        if not playlist.username or password is None:
            raise EmbyAuthenticationError(f"No stored Emby credentials for playlist {playlist.id}")
        return EmbyCredentials(
            server_url=playlist.url, username=playlist.username, password=password
        )

    async def _fetch(self, playlist: Playlist, credentials: EmbyCredentials) -> CatalogBatch:
        async with self.client_factory(self.resilience) as http:
            client = EmbyClient(http, credentials, self.identity)
            session = await client.authenticate()
            entries: list[VodEntry] = []
            for library in await client.libraries(session):
                entries.extend(await self._fetch_library(client, session, library))

        log.info("Fetched Emby server %s: %s VOD entries", playlist.id, len(entries))
        return CatalogBatch(channels=None, vod_items=entries)

    async def _fetch_library(
        self, client: EmbyClient, session: EmbySession, library: EmbyLibrary
    ) -> list[VodEntry]:
        server_url = client.credentials.base_url
        if library.collection_type == MOVIES_COLLECTION:
            return [
                translate_movie(item, server_url=server_url, access_token=session.access_token)
                async for item in client.iter_items(
                    session, parent_id=library.id, item_type="Movie", page_size=self.page_size
                )
            ]
        if library.collection_type == SHOWS_COLLECTION:
            return await self._fetch_shows(client, session, library)
        log.debug("Skipping Emby library %r (%s)", library.name, library.collection_type)
        return []

    async def _fetch_shows(
        self, client: EmbyClient, session: EmbySession, library: EmbyLibrary
    ) -> list[VodEntry]:
        server_url = client.credentials.base_url
        entries: list[VodEntry] = []
        series_items = [
            item
            async for item in client.iter_items(
                session, parent_id=library.id, item_type="Series", page_size=self.page_size
            )
        ]
        for series in series_items:
            entries.append(translate_series(series, server_url=server_url))
            async for episode in client.iter_items(
                session, parent_id=series.id, item_type="Episode", page_size=self.page_size
            ):
                entries.append(
                    translate_episode(
                        episode,
                        series_source_id=series.id,
                        server_url=server_url,
                        access_token=session.access_token,
                    )
                )
        return entries


if TYPE_CHECKING:

    def _check(store: CredentialStore) -> None:
        _fetcher: CatalogFetcher = EmbyCatalogFetcher(credential_store=store)
