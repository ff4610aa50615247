"""Builders and in-memory fakes for catalog tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import count
from typing import TYPE_CHECKING

from channelkeeper.domain.model import Channel, ChannelEntry, Playlist, SourceType
from channelkeeper.domain.ports.fetching import CatalogBatch

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from channelkeeper.domain.ports.unit_of_work import CatalogUnitOfWork

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def make_playlist(
    playlist_id: str = "p1",
    *,
    name: str = "Home",
    source_type: SourceType = SourceType.M3U,
    url: str = "http://example.test/list.m3u",
    **overrides: object,
) -> Playlist:
    return Playlist(id=playlist_id, name=name, source_type=source_type, url=url, **overrides)


def make_entry(name: str = "CNN", **overrides: object) -> ChannelEntry:
    values: dict[str, object] = {"stream_url": f"http://cdn.test/{name.lower()}.m3u8"}
    values.update(overrides)
    return ChannelEntry(name=name, **values)  # type: ignore[arg-type]


def make_channel(channel_id: str, *, playlist_id: str = "p1", **overrides: object) -> Channel:
    values: dict[str, object] = {"name": channel_id, "stream_url": f"http://cdn.test/{channel_id}"}
    values.update(overrides)
    return Channel(id=channel_id, playlist_id=playlist_id, **values)  # type: ignore[arg-type]


def sequential_ids(prefix: str = "c") -> Callable[[], str]:
    counter = count(1)
    return lambda: f"{prefix}{next(counter)}"


def seed(
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    playlist: Playlist,
    channels: Iterable[Channel] = (),
) -> None:
    with unit_of_work_factory() as uow:
        uow.repositories.playlists.add(playlist)
        for channel in channels:
            uow.repositories.channels.add(channel)
        uow.commit()


def stored_channels(
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    playlist_id: str = "p1",
) -> dict[str, Channel]:
    with unit_of_work_factory() as uow:
        channels = uow.repositories.channels.list_for_playlist(playlist_id, include_deleted=True)
    return {channel.id: channel for channel in channels}


@dataclass
class FakeFetcher:
    """Catalog fetcher returning queued batches and recording the playlists it saw."""

    batches: list[CatalogBatch] = field(default_factory=list)
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    def __call__(self, playlist: Playlist) -> CatalogBatch:
        self.calls.append(playlist.id)
        if self.error is not None:
            raise self.error
        return self.batches.pop(0)


class InMemoryCredentialStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.secrets: dict[str, str] = dict(initial or {})

    def get(self, ref: str) -> str | None:
        return self.secrets.get(ref)

    def put(self, ref: str, secret: str) -> None:
        self.secrets[ref] = secret

    def delete(self, ref: str) -> None:
        self.secrets.pop(ref, None)
