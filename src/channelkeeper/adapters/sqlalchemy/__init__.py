"""SQLAlchemy adapter package for channelkeeper."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyChannelRepository,
    SqlAlchemyPlaylistRepository,
    SqlAlchemyVodItemRepository,
)
from .unit_of_work import SqlAlchemyCatalogUnitOfWork, is_started, shutdown, startup

__all__ = [
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyChannelRepository",
    "SqlAlchemyPlaylistRepository",
    "SqlAlchemyVodItemRepository",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
