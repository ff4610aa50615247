from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

import pytest

from channelkeeper.domain.catalog_sync import RefreshResult, refresh_playlist, stale_playlists
from channelkeeper.domain.errors import (
    EmptyCatalogError,
    PlaylistNotFoundError,
    UnsupportedSourceTypeError,
)
from channelkeeper.domain.model import SourceType, VodEntry, VodType
from channelkeeper.domain.ports.fetching import CatalogBatch
from channelkeeper.domain.reconciliation import ImportResult, VodImportResult
from tests.helpers.catalog import (
    T0,
    FakeFetcher,
    make_entry,
    make_playlist,
    seed,
    sequential_ids,
    stored_channels,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from channelkeeper.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork

    UowFactory = Callable[[], SqlAlchemyCatalogUnitOfWork]


def _movie(title: str) -> VodEntry:
    return VodEntry(title=title, media_type=VodType.MOVIE)


def _refresh(
    uow: UowFactory, fetcher: FakeFetcher, *, source: SourceType = SourceType.M3U
) -> RefreshResult:
    return refresh_playlist(
        playlist_id="p1",
        fetchers={source: fetcher},
        unit_of_work_factory=uow,
        clock=lambda: T0,
        id_factory=sequential_ids(),
    )


def test_refresh_reconciles_channels_and_vod(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist())
    fetcher = FakeFetcher(
        [
            CatalogBatch(
                channels=[make_entry("CNN"), make_entry("BBC")],
                vod_items=[_movie("Heat")],
                epg_url="http://guide.test/xmltv.xml",
                issues=["line 4: malformed_extinf"],
            )
        ]
    )

    result = _refresh(sqlite_unit_of_work, fetcher)

    assert fetcher.calls == ["p1"]
    assert result.channels == ImportResult(added=2)
    assert result.vod == VodImportResult(added=1)
    assert result.synced_at == T0
    assert result.issues == ["line 4: malformed_extinf"]
    with sqlite_unit_of_work() as uow:
        playlist = uow.repositories.playlists.get("p1")
    assert playlist is not None
    assert playlist.last_sync == T0
    assert playlist.epg_url == "http://guide.test/xmltv.xml"


def test_configured_guide_url_is_kept(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist(epg_url="http://mine.test/epg"))
    fetcher = FakeFetcher([CatalogBatch(channels=[], epg_url="http://provider.test/epg")])

    _refresh(sqlite_unit_of_work, fetcher)

    with sqlite_unit_of_work() as uow:
        playlist = uow.repositories.playlists.get("p1")
    assert playlist is not None
    assert playlist.epg_url == "http://mine.test/epg"


def test_missing_catalogs_are_left_untouched(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist(source_type=SourceType.EMBY))
    first = FakeFetcher([CatalogBatch(channels=None, vod_items=[_movie("Heat")])])
    _refresh(sqlite_unit_of_work, first, source=SourceType.EMBY)

    second = FakeFetcher([CatalogBatch(channels=None, vod_items=[])])
    result = _refresh(sqlite_unit_of_work, second, source=SourceType.EMBY)

    assert result.channels is None
    assert result.vod is None
    with sqlite_unit_of_work() as uow:
        assert len(uow.repositories.vod_items.list_for_playlist("p1")) == 1


def test_unknown_playlist_fails_before_fetching(sqlite_unit_of_work: UowFactory) -> None:
    fetcher = FakeFetcher()

    with pytest.raises(PlaylistNotFoundError):
        _refresh(sqlite_unit_of_work, fetcher)
    assert fetcher.calls == []


def test_source_type_without_fetcher_is_rejected(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist(source_type=SourceType.XTREAM))

    with pytest.raises(UnsupportedSourceTypeError):
        _refresh(sqlite_unit_of_work, FakeFetcher())


def test_fetch_error_propagates_without_writes(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist())
    _refresh(sqlite_unit_of_work, FakeFetcher([CatalogBatch(channels=[make_entry("CNN")])]))

    failing = FakeFetcher(error=EmptyCatalogError("nothing listed"))
    with pytest.raises(EmptyCatalogError):
        _refresh(sqlite_unit_of_work, failing)

    assert [c.is_deleted for c in stored_channels(sqlite_unit_of_work).values()] == [False]


def test_stale_playlists_respect_interval_and_active_flag(
    sqlite_unit_of_work: UowFactory,
) -> None:
    seed(sqlite_unit_of_work, make_playlist("never"))
    seed(sqlite_unit_of_work, make_playlist("fresh", last_sync=T0 - timedelta(hours=1)))
    seed(sqlite_unit_of_work, make_playlist("due", last_sync=T0 - timedelta(hours=24)))
    seed(sqlite_unit_of_work, make_playlist("off", is_active=False))

    due = stale_playlists(unit_of_work_factory=sqlite_unit_of_work, now=T0)

    assert {playlist.id for playlist in due} == {"never", "due"}
