"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CatalogBatch, CatalogFetcher, CredentialStore
from .persistence import (
    ChannelRepository,
    PlaylistRepository,
    Repository,
    VodItemRepository,
)
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogBatch",
    "CatalogFetcher",
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "ChannelRepository",
    "CredentialStore",
    "PlaylistRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "VodItemRepository",
]
