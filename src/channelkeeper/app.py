"""Application orchestration entry points."""

from __future__ import annotations

import threading
from collections.abc import Callable
from contextlib import contextmanager
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from sqlalchemy.exc import SQLAlchemyError

from channelkeeper.adapters.credentials import default_credential_store
from channelkeeper.adapters.emby import EmbyCatalogFetcher
from channelkeeper.adapters.m3u import M3UCatalogFetcher
from channelkeeper.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from channelkeeper.adapters.xtream import XtreamCatalogFetcher
from channelkeeper.config import get_sync_config
from channelkeeper.domain import catalog_sync
from channelkeeper.domain.catalog_sync import RefreshResult, load_playlist, stale_playlists, utcnow
from channelkeeper.domain.errors import CatalogError, ChannelNotFoundError
from channelkeeper.domain.model import Playlist, SourceType, new_id
from channelkeeper.domain.ports.unit_of_work import CatalogUnitOfWork
from channelkeeper.domain.reconciliation import lifecycle

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from datetime import datetime

    from channelkeeper.domain.model import Channel
    from channelkeeper.domain.ports.fetching import CatalogFetcher, CredentialStore

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

_CREDENTIAL_SOURCES = frozenset({SourceType.XTREAM, SourceType.EMBY})

log = getLogger(__name__)


class RefreshInProgressError(RuntimeError):
    def __init__(self, playlist_id: str) -> None:
        super().__init__(f"Playlist {playlist_id} is already being refreshed")
        self.playlist_id = playlist_id


class RefreshGuard:
    """Allows at most one refresh per playlist at a time within this process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active: set[str] = set()

    @contextmanager
    def hold(self, playlist_id: str) -> Iterator[None]:
        with self._lock:
            if playlist_id in self._active:
                raise RefreshInProgressError(playlist_id)
            self._active.add(playlist_id)
        try:
            yield
        finally:
            with self._lock:
                self._active.discard(playlist_id)

    def is_refreshing(self, playlist_id: str) -> bool:
        with self._lock:
            return playlist_id in self._active


_REFRESH_GUARD = RefreshGuard()


def _ensure_started() -> None:
    if not is_started():
        startup()


def _uow_factory(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    _ensure_started()
    return SqlAlchemyCatalogUnitOfWork


def build_fetchers(credential_store: CredentialStore) -> dict[SourceType, CatalogFetcher]:
    return {
        SourceType.M3U: M3UCatalogFetcher(),
        SourceType.XTREAM: XtreamCatalogFetcher(credential_store=credential_store),
        SourceType.EMBY: EmbyCatalogFetcher(credential_store=credential_store),
    }


def password_ref_for(playlist: Playlist) -> str:
    return f"{playlist.source_type}-{playlist.id}"


def create_playlist(
    *,
    name: str,
    source_type: SourceType,
    url: str,
    username: str | None = None,
    password: str | None = None,
    epg_url: str | None = None,
    refresh_hours: int | None = None,
    credential_store: CredentialStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    id_factory: Callable[[], str] = new_id,
) -> Playlist:
    """Register a playlist subscription; passwords go to the credential store."""

    if not name.strip():
        raise ValueError("Playlist name must not be empty")
    if not url.strip():
        raise ValueError("Playlist URL must not be empty")
    if source_type in _CREDENTIAL_SOURCES and (not username or not password):
        raise ValueError(f"{source_type} playlists need a username and a password")
    hours = refresh_hours if refresh_hours is not None else get_sync_config().default_refresh_hours
    if hours <= 0:
        raise ValueError("Refresh interval must be a positive number of hours")

    uow_factory = _uow_factory(unit_of_work_factory)
    playlist = Playlist(
        id=id_factory(),
        name=name.strip(),
        source_type=source_type,
        url=url.strip(),
        username=username,
        epg_url=epg_url,
        refresh_hours=hours,
    )
    if password:
        store = credential_store or default_credential_store()
        playlist.password_ref = password_ref_for(playlist)
        store.put(playlist.password_ref, password)

    with uow_factory() as uow:
        uow.repositories.playlists.add(playlist)
        uow.commit()
    log.info("Created %s playlist %s (%s)", source_type, playlist.id, playlist.name)
    return playlist


def list_playlists(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> list[Playlist]:
    uow_factory = _uow_factory(unit_of_work_factory)
    with uow_factory() as uow:
        return uow.repositories.playlists.list_all()


def remove_playlist(
    playlist_id: str,
    *,
    credential_store: CredentialStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> None:
    """Delete a playlist with its channels, VOD items, and stored password."""

    uow_factory = _uow_factory(unit_of_work_factory)
    playlist = load_playlist(playlist_id, unit_of_work_factory=uow_factory)
    with uow_factory() as uow:
        stored = uow.repositories.playlists.get(playlist.id)
        if stored is not None:
            uow.repositories.playlists.remove(stored)
        uow.commit()
    if playlist.password_ref:
        (credential_store or default_credential_store()).delete(playlist.password_ref)
    log.info("Removed playlist %s (%s)", playlist.id, playlist.name)


def refresh_playlist(
    playlist_id: str,
    *,
    fetchers: Mapping[SourceType, CatalogFetcher] | None = None,
    credential_store: CredentialStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    guard: RefreshGuard | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> RefreshResult:
    """Refresh one playlist using the configured adapters."""

    uow_factory = _uow_factory(unit_of_work_factory)
    effective_fetchers = fetchers or build_fetchers(
        credential_store or default_credential_store()
    )
    with (guard or _REFRESH_GUARD).hold(playlist_id):
        result = catalog_sync.refresh_playlist(
            playlist_id=playlist_id,
            fetchers=effective_fetchers,
            unit_of_work_factory=uow_factory,
            clock=clock,
        )

    channels = result.channels
    log.info(
        f"Finished refresh of {playlist_id}: "
        f"added={channels.added if channels else 0}, "
        f"updated={channels.updated if channels else 0}, "
        f"soft_deleted={channels.soft_deleted if channels else 0}, "
        f"unchanged={channels.unchanged if channels else 0}, "
        f"vod={result.vod.added if result.vod else 'kept'}, issues={len(result.issues)}"
    )
    return result


def refresh_stale_playlists(
    *,
    fetchers: Mapping[SourceType, CatalogFetcher] | None = None,
    credential_store: CredentialStore | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    guard: RefreshGuard | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> list[RefreshResult]:
    """Refresh every active playlist that is due; one failing provider does not stop the rest."""

    uow_factory = _uow_factory(unit_of_work_factory)
    effective_fetchers = fetchers or build_fetchers(
        credential_store or default_credential_store()
    )
    due = stale_playlists(unit_of_work_factory=uow_factory, now=clock())
    log.info("Found %s playlists due for refresh", len(due))

    results: list[RefreshResult] = []
    for playlist in due:
        try:
            results.append(
                refresh_playlist(
                    playlist.id,
                    fetchers=effective_fetchers,
                    unit_of_work_factory=uow_factory,
                    guard=guard,
                    clock=clock,
                )
            )
        except (CatalogError, RuntimeError, httpx.HTTPError, SQLAlchemyError):
            log.exception("Refresh of playlist %s (%s) failed", playlist.id, playlist.name)
    return results


def purge_deleted_channels(
    *,
    retention_days: int | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> int:
    """Hard-delete channels soft-deleted longer ago than the retention period."""

    if retention_days is not None and retention_days < 0:
        raise ValueError("Retention days must be non-negative")
    retention = (
        timedelta(days=retention_days)
        if retention_days is not None
        else get_sync_config().deleted_channel_retention
    )
    return lifecycle.purge_deleted_channels(
        unit_of_work_factory=_uow_factory(unit_of_work_factory),
        older_than=clock() - retention,
    )


def toggle_favorite(
    channel_id: str, *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> Channel:
    uow_factory = _uow_factory(unit_of_work_factory)
    with uow_factory() as uow:
        channel = uow.repositories.channels.get(channel_id)
        if channel is None:
            raise ChannelNotFoundError(channel_id)
        channel.toggle_favorite()
        uow.commit()
    log.info("Channel %s favorite=%s", channel.id, channel.is_favorite)
    return channel


def list_channels(
    playlist_id: str,
    *,
    search: str | None = None,
    favorites_only: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[Channel]:
    """Active channels of a playlist, optionally filtered by name or favorite flag."""

    uow_factory = _uow_factory(unit_of_work_factory)
    load_playlist(playlist_id, unit_of_work_factory=uow_factory)
    with uow_factory() as uow:
        channels = uow.repositories.channels
        if search:
            found = channels.search(search, playlist_id=playlist_id)
        elif favorites_only:
            found = channels.list_favorites(playlist_id)
        else:
            found = channels.list_for_playlist(playlist_id)
    if favorites_only:
        return [channel for channel in found if channel.is_favorite]
    return found
