"""Ports for persisting catalog aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from channelkeeper.domain.model import Channel, Playlist, VodItem

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable
    from datetime import datetime

    from channelkeeper.domain.model import VodType


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: str) -> TEntity | None: ...


@runtime_checkable
class PlaylistRepository(Repository[Playlist], Protocol):
    def list_all(self, *, active_only: bool = False) -> list[Playlist]: ...

    def remove(self, playlist: Playlist) -> None:
        """Delete the playlist together with its channels and VOD items."""
        ...


@runtime_checkable
class ChannelRepository(Repository[Channel], Protocol):
    """Persistence contract for channel records, soft-deleted ones included."""

    def list_for_playlist(
        self, playlist_id: str, *, include_deleted: bool = False
    ) -> list[Channel]: ...

    def soft_delete(self, playlist_id: str, channel_ids: Collection[str], *, at: datetime) -> int:
        """Bulk-mark the given active channels of one playlist as deleted."""
        ...

    def purge_deleted(self, *, older_than: datetime) -> int:
        """Hard-delete soft-deleted channels whose deletion precedes ``older_than``."""
        ...

    def list_favorites(self, playlist_id: str | None = None) -> list[Channel]: ...

    def search(self, query: str, *, playlist_id: str | None = None) -> list[Channel]: ...

    def get_by_number(self, playlist_id: str, channel_number: int) -> Channel | None: ...


@runtime_checkable
class VodItemRepository(Protocol):
    def add_all(self, items: Iterable[VodItem]) -> None: ...

    def delete_for_playlist(self, playlist_id: str) -> int: ...

    def list_for_playlist(
        self, playlist_id: str, *, media_type: VodType | None = None
    ) -> list[VodItem]: ...

    def list_episodes(self, series_id: str) -> list[VodItem]: ...

    def list_genres(self, playlist_id: str) -> list[str]: ...
