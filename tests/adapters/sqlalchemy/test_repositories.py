from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from channelkeeper.domain.model import VodItem, VodType
from tests.helpers.catalog import T0, make_channel, make_playlist, seed, stored_channels

if TYPE_CHECKING:
    from collections.abc import Callable

    from channelkeeper.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork

    UowFactory = Callable[[], SqlAlchemyCatalogUnitOfWork]


def _vod(item_id: str, title: str, **overrides: object) -> VodItem:
    values: dict[str, object] = {"media_type": VodType.MOVIE}
    values.update(overrides)
    return VodItem(id=item_id, playlist_id="p1", title=title, **values)  # type: ignore[arg-type]


def _episode(item_id: str, title: str, number: int) -> VodItem:
    return _vod(
        item_id,
        title,
        media_type=VodType.EPISODE,
        series_id="s1",
        season_number=1,
        episode_number=number,
    )


def test_playlist_round_trip_keeps_enum_and_utc(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist(last_sync=T0, epg_url="http://epg"))

    with sqlite_unit_of_work() as uow:
        playlist = uow.repositories.playlists.get("p1")

    assert playlist is not None
    assert playlist.source_type == "m3u"
    assert playlist.last_sync == T0
    assert playlist.last_sync.tzinfo is not None
    assert playlist.epg_url == "http://epg"


def test_list_playlists_orders_and_filters(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist("b", name="Beta", sort_order=1))
    seed(sqlite_unit_of_work, make_playlist("a", name="Alpha", sort_order=1))
    seed(sqlite_unit_of_work, make_playlist("z", name="Zulu", sort_order=0, is_active=False))

    with sqlite_unit_of_work() as uow:
        every = [p.id for p in uow.repositories.playlists.list_all()]
        active = [p.id for p in uow.repositories.playlists.list_all(active_only=True)]

    assert every == ["z", "a", "b"]
    assert active == ["a", "b"]


def test_remove_playlist_cascades(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist(), [make_channel("c1")])
    seed(sqlite_unit_of_work, make_playlist("p2"), [make_channel("c2", playlist_id="p2")])
    with sqlite_unit_of_work() as uow:
        uow.repositories.vod_items.add_all([_vod("v1", "Film")])
        uow.commit()

    with sqlite_unit_of_work() as uow:
        playlist = uow.repositories.playlists.get("p1")
        assert playlist is not None
        uow.repositories.playlists.remove(playlist)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.playlists.get("p1") is None
        assert uow.repositories.vod_items.list_for_playlist("p1") == []
    assert stored_channels(sqlite_unit_of_work) == {}
    assert set(stored_channels(sqlite_unit_of_work, "p2")) == {"c2"}


def test_soft_delete_is_scoped_and_skips_deleted(sqlite_unit_of_work: UowFactory) -> None:
    seed(
        sqlite_unit_of_work,
        make_playlist(),
        [make_channel("a"), make_channel("b", is_deleted=True, deleted_at=T0)],
    )
    seed(sqlite_unit_of_work, make_playlist("p2"), [make_channel("x", playlist_id="p2")])
    later = T0 + timedelta(days=1)

    with sqlite_unit_of_work() as uow:
        affected = uow.repositories.channels.soft_delete("p1", ["a", "b", "x"], at=later)
        uow.commit()

    assert affected == 1
    stored = stored_channels(sqlite_unit_of_work)
    assert stored["a"].deleted_at == later
    assert stored["b"].deleted_at == T0
    assert not stored_channels(sqlite_unit_of_work, "p2")["x"].is_deleted


def test_soft_delete_handles_large_id_sets(sqlite_unit_of_work: UowFactory) -> None:
    channels = [make_channel(f"c{index:04d}") for index in range(1200)]
    seed(sqlite_unit_of_work, make_playlist(), channels)

    with sqlite_unit_of_work() as uow:
        affected = uow.repositories.channels.soft_delete(
            "p1", [channel.id for channel in channels], at=T0
        )
        uow.commit()

    assert affected == 1200


def test_channel_read_paths(sqlite_unit_of_work: UowFactory) -> None:
    seed(
        sqlite_unit_of_work,
        make_playlist(),
        [
            make_channel("c1", name="CNN International", channel_number=2, is_favorite=True),
            make_channel("c2", name="BBC News", channel_number=1),
            make_channel("c3", name="cnn replay", is_deleted=True, deleted_at=T0),
            make_channel("c4", name="Local 100%"),
        ],
    )

    with sqlite_unit_of_work() as uow:
        channels = uow.repositories.channels
        active = [c.id for c in channels.list_for_playlist("p1")]
        everything = channels.list_for_playlist("p1", include_deleted=True)
        favorites = [c.id for c in channels.list_favorites("p1")]
        found = [c.id for c in channels.search("cnn")]
        percent = [c.id for c in channels.search("100%", playlist_id="p1")]
        by_number = channels.get_by_number("p1", 1)

    assert active == ["c2", "c1", "c4"]
    assert len(everything) == 4
    assert favorites == ["c1"]
    assert found == ["c1"]
    assert percent == ["c4"]
    assert by_number is not None
    assert by_number.id == "c2"


def test_vod_read_paths(sqlite_unit_of_work: UowFactory) -> None:
    seed(sqlite_unit_of_work, make_playlist())
    with sqlite_unit_of_work() as uow:
        uow.repositories.vod_items.add_all(
            [
                _vod("m1", "Heat", genre="Action"),
                _vod("s1", "Show", media_type=VodType.SERIES, genre="Drama"),
                _episode("e2", "Two", 2),
                _episode("e1", "One", 1),
                _vod("m2", "Alien", genre="Action"),
            ]
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        vod = uow.repositories.vod_items
        movies = [item.title for item in vod.list_for_playlist("p1", media_type=VodType.MOVIE)]
        episodes = [item.id for item in vod.list_episodes("s1")]
        genres = vod.list_genres("p1")
        removed = vod.delete_for_playlist("p1")
        uow.commit()

    assert movies == ["Alien", "Heat"]
    assert episodes == ["e1", "e2"]
    assert genres == ["Action", "Drama"]
    assert removed == 5
