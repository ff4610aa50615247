"""Initial catalog schema: playlists, channels, VOD items.

Revision ID: 0001_initial_catalog
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from channelkeeper.adapters.sqlalchemy.mappings import UTCDateTime

revision: str = "0001_initial_catalog"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "playlist",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column(
            "source_type",
            sa.Enum("M3U", "XTREAM", "EMBY", name="sourcetype", native_enum=False),
            nullable=False,
        ),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("username", sa.String(), nullable=True),
        sa.Column("password_ref", sa.String(), nullable=True),
        sa.Column("epg_url", sa.String(), nullable=True),
        sa.Column("refresh_hours", sa.Integer(), nullable=False),
        sa.Column("last_sync", UTCDateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_playlist")),
    )
    op.create_table(
        "channel",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("playlist_id", sa.String(length=64), nullable=False),
        sa.Column("source_channel_id", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("group_name", sa.String(), nullable=True),
        sa.Column("stream_url", sa.String(), nullable=False),
        sa.Column("logo_url", sa.String(), nullable=True),
        sa.Column("epg_id", sa.String(), nullable=True),
        sa.Column("tvg_id", sa.String(), nullable=True),
        sa.Column("channel_number", sa.Integer(), nullable=True),
        sa.Column("is_favorite", sa.Boolean(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        sa.Column("deleted_at", UTCDateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ["playlist_id"],
            ["playlist.id"],
            name=op.f("fk_channel_playlist_id_playlist"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_channel")),
    )
    op.create_index("ix_channel_playlist_id", "channel", ["playlist_id"])
    op.create_index("ix_channel_is_deleted_deleted_at", "channel", ["is_deleted", "deleted_at"])
    op.create_table(
        "vod_item",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("playlist_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column(
            "media_type",
            sa.Enum("MOVIE", "SERIES", "EPISODE", name="vodtype", native_enum=False),
            nullable=False,
        ),
        sa.Column("stream_url", sa.String(), nullable=True),
        sa.Column("poster_url", sa.String(), nullable=True),
        sa.Column("backdrop_url", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("genre", sa.String(), nullable=True),
        sa.Column("series_id", sa.String(length=64), nullable=True),
        sa.Column("season_number", sa.Integer(), nullable=True),
        sa.Column("episode_number", sa.Integer(), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["playlist_id"],
            ["playlist.id"],
            name=op.f("fk_vod_item_playlist_id_playlist"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_vod_item")),
    )
    op.create_index("ix_vod_item_playlist_id", "vod_item", ["playlist_id"])
    op.create_index("ix_vod_item_series_id", "vod_item", ["series_id"])


def downgrade() -> None:
    op.drop_index("ix_vod_item_series_id", table_name="vod_item")
    op.drop_index("ix_vod_item_playlist_id", table_name="vod_item")
    op.drop_table("vod_item")
    op.drop_index("ix_channel_is_deleted_deleted_at", table_name="channel")
    op.drop_index("ix_channel_playlist_id", table_name="channel")
    op.drop_table("channel")
    op.drop_table("playlist")
