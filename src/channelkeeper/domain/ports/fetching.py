"""Ports for fetching provider catalogs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from channelkeeper.domain.model import ChannelEntry, Playlist, VodEntry


@dataclass(slots=True)
class CatalogBatch:
    """Normalized records fetched for one playlist.

    ``None`` means the provider has nothing to say about that catalog in this
    refresh and the stored records must be left alone.
    """

    channels: list[ChannelEntry] | None = None
    vod_items: list[VodEntry] | None = None
    epg_url: str | None = None
    issues: list[str] = field(default_factory=list)


@runtime_checkable
class CatalogFetcher(Protocol):
    """Callable port turning a playlist subscription into normalized records."""

    def __call__(self, playlist: Playlist) -> CatalogBatch: ...


@runtime_checkable
class CredentialStore(Protocol):
    def get(self, ref: str) -> str | None: ...

    def put(self, ref: str, secret: str) -> None: ...

    def delete(self, ref: str) -> None: ...


__all__ = ["CatalogBatch", "CatalogFetcher", "CredentialStore"]
