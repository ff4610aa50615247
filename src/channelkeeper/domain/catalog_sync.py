"""Playlist refresh: fetch a provider catalog and reconcile it into the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from channelkeeper.domain.errors import PlaylistNotFoundError, UnsupportedSourceTypeError
from channelkeeper.domain.model import new_id
from channelkeeper.domain.reconciliation import (
    ImportResult,
    VodImportResult,
    import_channels,
    replace_vod_items,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from channelkeeper.domain.model import Playlist, SourceType
    from channelkeeper.domain.ports.fetching import CatalogFetcher
    from channelkeeper.domain.ports.unit_of_work import CatalogUnitOfWork

log = getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class RefreshResult:
    """Outcome of refreshing one playlist."""

    playlist_id: str
    channels: ImportResult | None
    vod: VodImportResult | None
    synced_at: datetime
    issues: list[str] = field(default_factory=list)


def load_playlist(
    playlist_id: str, *, unit_of_work_factory: Callable[[], CatalogUnitOfWork]
) -> Playlist:
    with unit_of_work_factory() as uow:
        playlist = uow.repositories.playlists.get(playlist_id)
    if playlist is None:
        raise PlaylistNotFoundError(playlist_id)
    return playlist


def refresh_playlist(
    *,
    playlist_id: str,
    fetchers: Mapping[SourceType, CatalogFetcher],
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    clock: Callable[[], datetime] = utcnow,
    id_factory: Callable[[], str] = new_id,
) -> RefreshResult:
    """Refresh one playlist from its provider.

    Fetch and parse errors propagate before any transaction is opened. Channel
    reconciliation and the VOD replacement each run in their own transaction.
    """

    playlist = load_playlist(playlist_id, unit_of_work_factory=unit_of_work_factory)
    fetcher = fetchers.get(playlist.source_type)
    if fetcher is None:
        raise UnsupportedSourceTypeError(playlist.source_type)

    log.info("Refreshing playlist %s (%s, %s)", playlist.id, playlist.name, playlist.source_type)
    batch = fetcher(playlist)
    now = clock()

    channel_result: ImportResult | None = None
    if batch.channels is not None:
        channel_result = import_channels(
            playlist_id=playlist.id,
            entries=batch.channels,
            unit_of_work_factory=unit_of_work_factory,
            now=now,
            id_factory=id_factory,
        )

    vod_result: VodImportResult | None = None
    if batch.vod_items:
        vod_result = replace_vod_items(
            playlist_id=playlist.id,
            entries=batch.vod_items,
            unit_of_work_factory=unit_of_work_factory,
            id_factory=id_factory,
        )

    _record_sync(playlist.id, now=now, epg_url=batch.epg_url, uow_factory=unit_of_work_factory)
    if batch.issues:
        log.info("Playlist %s refreshed with %s parse issues", playlist.id, len(batch.issues))
    return RefreshResult(
        playlist_id=playlist.id,
        channels=channel_result,
        vod=vod_result,
        synced_at=now,
        issues=list(batch.issues),
    )


def stale_playlists(
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    now: datetime,
) -> list[Playlist]:
    with unit_of_work_factory() as uow:
        playlists = uow.repositories.playlists.list_all(active_only=True)
    return [playlist for playlist in playlists if playlist.is_stale(now)]


def _record_sync(
    playlist_id: str,
    *,
    now: datetime,
    epg_url: str | None,
    uow_factory: Callable[[], CatalogUnitOfWork],
) -> None:
    with uow_factory() as uow:
        playlist = uow.repositories.playlists.get(playlist_id)
        if playlist is None:
            raise PlaylistNotFoundError(playlist_id)
        playlist.mark_synced(now)
        if epg_url and not playlist.epg_url:
            playlist.epg_url = epg_url
        uow.commit()
