"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from itertools import batched
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, select, update

from channelkeeper.adapters.sqlalchemy.mappings import (
    channel_table,
    playlist_table,
    vod_item_table,
)
from channelkeeper.domain.model import Channel, Playlist, VodItem

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable
    from datetime import datetime

    from sqlalchemy import CursorResult, Executable
    from sqlalchemy.orm import Session

    from channelkeeper.domain.model import VodType

# stays below SQLite's default bound-parameter limit
_IN_CLAUSE_CHUNK = 500

_CHANNEL_ORDER = (
    channel_table.c.channel_number.is_(None),
    channel_table.c.channel_number,
    channel_table.c.name,
    channel_table.c.id,
)


def _rowcount(session: Session, statement: Executable) -> int:
    result = cast("CursorResult[Any]", session.execute(statement))
    return result.rowcount


class SqlAlchemyPlaylistRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Playlist) -> None:
        self.session.add(entity)

    def get(self, entity_id: str) -> Playlist | None:
        return self.session.get(Playlist, entity_id)

    def list_all(self, *, active_only: bool = False) -> list[Playlist]:
        stmt = select(Playlist).order_by(playlist_table.c.sort_order, playlist_table.c.name)
        if active_only:
            stmt = stmt.where(playlist_table.c.is_active.is_(True))
        return list(self.session.scalars(stmt))

    def remove(self, playlist: Playlist) -> None:
        for table, entity_cls in ((channel_table, Channel), (vod_item_table, VodItem)):
            self.session.execute(
                delete(entity_cls)
                .where(table.c.playlist_id == playlist.id)
                .execution_options(synchronize_session="fetch")
            )
        self.session.delete(playlist)


class SqlAlchemyChannelRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Channel) -> None:
        self.session.add(entity)

    def get(self, entity_id: str) -> Channel | None:
        return self.session.get(Channel, entity_id)

    def list_for_playlist(
        self, playlist_id: str, *, include_deleted: bool = False
    ) -> list[Channel]:
        stmt = select(Channel).where(channel_table.c.playlist_id == playlist_id)
        if not include_deleted:
            stmt = stmt.where(channel_table.c.is_deleted.is_(False))
        return list(self.session.scalars(stmt.order_by(*_CHANNEL_ORDER)))

    def soft_delete(self, playlist_id: str, channel_ids: Collection[str], *, at: datetime) -> int:
        affected = 0
        for chunk in batched(channel_ids, _IN_CLAUSE_CHUNK):
            stmt = (
                update(Channel)
                .where(channel_table.c.playlist_id == playlist_id)
                .where(channel_table.c.id.in_(chunk))
                .where(channel_table.c.is_deleted.is_(False))
                .values(is_deleted=True, deleted_at=at)
                .execution_options(synchronize_session="fetch")
            )
            affected += _rowcount(self.session, stmt)
        return affected

    def purge_deleted(self, *, older_than: datetime) -> int:
        stmt = (
            delete(Channel)
            .where(channel_table.c.is_deleted.is_(True))
            .where(channel_table.c.deleted_at < older_than)
            .execution_options(synchronize_session="fetch")
        )
        return _rowcount(self.session, stmt)

    def list_favorites(self, playlist_id: str | None = None) -> list[Channel]:
        stmt = (
            select(Channel)
            .where(channel_table.c.is_favorite.is_(True))
            .where(channel_table.c.is_deleted.is_(False))
        )
        if playlist_id is not None:
            stmt = stmt.where(channel_table.c.playlist_id == playlist_id)
        return list(self.session.scalars(stmt.order_by(*_CHANNEL_ORDER)))

    def search(self, query: str, *, playlist_id: str | None = None) -> list[Channel]:
        stmt = (
            select(Channel)
            .where(channel_table.c.name.icontains(query, autoescape=True))
            .where(channel_table.c.is_deleted.is_(False))
        )
        if playlist_id is not None:
            stmt = stmt.where(channel_table.c.playlist_id == playlist_id)
        return list(self.session.scalars(stmt.order_by(*_CHANNEL_ORDER)))

    def get_by_number(self, playlist_id: str, channel_number: int) -> Channel | None:
        stmt = (
            select(Channel)
            .where(channel_table.c.playlist_id == playlist_id)
            .where(channel_table.c.channel_number == channel_number)
            .where(channel_table.c.is_deleted.is_(False))
            .order_by(channel_table.c.name, channel_table.c.id)
            .limit(1)
        )
        return self.session.scalars(stmt).first()


class SqlAlchemyVodItemRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add_all(self, items: Iterable[VodItem]) -> None:
        self.session.add_all(items)

    def delete_for_playlist(self, playlist_id: str) -> int:
        stmt = (
            delete(VodItem)
            .where(vod_item_table.c.playlist_id == playlist_id)
            .execution_options(synchronize_session="fetch")
        )
        return _rowcount(self.session, stmt)

    def list_for_playlist(
        self, playlist_id: str, *, media_type: VodType | None = None
    ) -> list[VodItem]:
        stmt = select(VodItem).where(vod_item_table.c.playlist_id == playlist_id)
        if media_type is not None:
            stmt = stmt.where(vod_item_table.c.media_type == media_type)
        return list(self.session.scalars(stmt.order_by(vod_item_table.c.title)))

    def list_episodes(self, series_id: str) -> list[VodItem]:
        stmt = (
            select(VodItem)
            .where(vod_item_table.c.series_id == series_id)
            .order_by(
                vod_item_table.c.season_number,
                vod_item_table.c.episode_number,
                vod_item_table.c.title,
            )
        )
        return list(self.session.scalars(stmt))

    def list_genres(self, playlist_id: str) -> list[str]:
        stmt = (
            select(vod_item_table.c.genre)
            .where(vod_item_table.c.playlist_id == playlist_id)
            .where(vod_item_table.c.genre.is_not(None))
            .distinct()
            .order_by(vod_item_table.c.genre)
        )
        return [genre for genre in self.session.scalars(stmt) if genre]


if TYPE_CHECKING:
    from channelkeeper.domain.ports.persistence import (
        ChannelRepository,
        PlaylistRepository,
        VodItemRepository,
    )

    def _check(session: Session) -> None:
        _playlists: PlaylistRepository = SqlAlchemyPlaylistRepository(session)
        _channels: ChannelRepository = SqlAlchemyChannelRepository(session)
        _vod_items: VodItemRepository = SqlAlchemyVodItemRepository(session)
