"""VOD replace strategy: wipe and reinsert a playlist's VOD catalog."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from channelkeeper.domain.errors import PlaylistNotFoundError
from channelkeeper.domain.model import VodItem, VodType, new_id

from .contracts import VodImportResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from channelkeeper.domain.model import VodEntry
    from channelkeeper.domain.ports.unit_of_work import CatalogUnitOfWork

log = getLogger(__name__)


def build_vod_items(
    playlist_id: str,
    entries: Iterable[VodEntry],
    *,
    id_factory: Callable[[], str] = new_id,
) -> list[VodItem]:
    """Create fresh VOD items, linking episodes to series present in the same batch."""

    staged = [(id_factory(), entry) for entry in entries]
    series_ids = {
        entry.source_id: item_id
        for item_id, entry in staged
        if entry.media_type is VodType.SERIES and entry.source_id
    }
    return [
        VodItem(
            id=item_id,
            playlist_id=playlist_id,
            title=entry.title,
            media_type=entry.media_type,
            stream_url=entry.stream_url,
            poster_url=entry.poster_url,
            backdrop_url=entry.backdrop_url,
            description=entry.description,
            year=entry.year,
            rating=entry.rating,
            genre=entry.genre,
            series_id=series_ids.get(entry.series_source_id) if entry.series_source_id else None,
            season_number=entry.season_number,
            episode_number=entry.episode_number,
            duration_seconds=entry.duration_seconds,
        )
        for item_id, entry in staged
    ]


def replace_vod_items(
    *,
    playlist_id: str,
    entries: Iterable[VodEntry],
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    id_factory: Callable[[], str] = new_id,
) -> VodImportResult:
    """Delete every VOD item of the playlist and insert ``entries`` with new ids.

    No identity matching happens here. Watch progress is keyed by a content
    identifier owned by the player, not by these row ids.
    """

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        if repositories.playlists.get(playlist_id) is None:
            raise PlaylistNotFoundError(playlist_id)

        removed = repositories.vod_items.delete_for_playlist(playlist_id)
        items = build_vod_items(playlist_id, entries, id_factory=id_factory)
        repositories.vod_items.add_all(items)
        uow.commit()

    log.info(
        "VOD replace for playlist %s finished: added=%s, removed=%s",
        playlist_id,
        len(items),
        removed,
    )
    return VodImportResult(added=len(items), removed=removed)
