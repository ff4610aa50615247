"""SQLAlchemy mapping metadata for the catalog domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers

from channelkeeper.domain.model import Channel, Playlist, SourceType, VodItem, VodType

log = logging.getLogger(__name__)

ID_LENGTH = 64


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

playlist_table = Table(
    "playlist",
    mapper_registry.metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column("name", String, nullable=False),
    Column("source_type", Enum(SourceType, native_enum=False), nullable=False),
    Column("url", String, nullable=False),
    Column("username", String, nullable=True),
    Column("password_ref", String, nullable=True),
    Column("epg_url", String, nullable=True),
    Column("refresh_hours", Integer, nullable=False),
    Column("last_sync", UTCDateTime, nullable=True),
    Column("is_active", Boolean, nullable=False),
    Column("sort_order", Integer, nullable=False),
)

channel_table = Table(
    "channel",
    mapper_registry.metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column(
        "playlist_id",
        String(ID_LENGTH),
        ForeignKey("playlist.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("source_channel_id", String, nullable=True),
    Column("name", String, nullable=False),
    Column("group_name", String, nullable=True),
    Column("stream_url", String, nullable=False),
    Column("logo_url", String, nullable=True),
    Column("epg_id", String, nullable=True),
    Column("tvg_id", String, nullable=True),
    Column("channel_number", Integer, nullable=True),
    Column("is_favorite", Boolean, nullable=False),
    Column("is_deleted", Boolean, nullable=False),
    Column("deleted_at", UTCDateTime, nullable=True),
    Index("ix_channel_playlist_id", "playlist_id"),
    Index("ix_channel_is_deleted_deleted_at", "is_deleted", "deleted_at"),
)

vod_item_table = Table(
    "vod_item",
    mapper_registry.metadata,
    Column("id", String(ID_LENGTH), primary_key=True),
    Column(
        "playlist_id",
        String(ID_LENGTH),
        ForeignKey("playlist.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("title", String, nullable=False),
    Column("media_type", Enum(VodType, native_enum=False), nullable=False),
    Column("stream_url", String, nullable=True),
    Column("poster_url", String, nullable=True),
    Column("backdrop_url", String, nullable=True),
    Column("description", String, nullable=True),
    Column("year", Integer, nullable=True),
    Column("rating", Float, nullable=True),
    Column("genre", String, nullable=True),
    Column("series_id", String(ID_LENGTH), nullable=True),
    Column("season_number", Integer, nullable=True),
    Column("episode_number", Integer, nullable=True),
    Column("duration_seconds", Integer, nullable=True),
    Index("ix_vod_item_playlist_id", "playlist_id"),
    Index("ix_vod_item_series_id", "series_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model.

    Children are mapped without relationships; they refer to their playlist by id.
    """

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Playlist, playlist_table)
    mapper_registry.map_imperatively(Channel, channel_table)
    mapper_registry.map_imperatively(VodItem, vod_item_table)

    configure_mappers()
    return mapper_registry


