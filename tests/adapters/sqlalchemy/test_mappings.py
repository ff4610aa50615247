from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import text

from channelkeeper.adapters.sqlalchemy import start_mappers
from tests.helpers.catalog import make_channel, make_playlist, seed, stored_channels

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

    from channelkeeper.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork


def test_start_mappers_is_idempotent() -> None:
    # First invocation happens in the sqlite_engine fixture
    start_mappers()
    start_mappers()


def test_datetimes_are_stored_as_utc(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    berlin = timezone(timedelta(hours=1))
    seed(
        sqlite_unit_of_work,
        make_playlist(),
        [
            make_channel(
                "c1", is_deleted=True, deleted_at=datetime(2025, 3, 1, 13, 0, tzinfo=berlin)
            )
        ],
    )

    with sqlite_engine.connect() as connection:
        raw = connection.execute(text("SELECT deleted_at FROM channel")).scalar_one()

    assert str(raw).startswith("2025-03-01 12:00:00")
    loaded = stored_channels(sqlite_unit_of_work)["c1"].deleted_at
    assert loaded == datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    assert loaded is not None
    assert loaded.tzinfo is not None


def test_enums_are_stored_by_name(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    seed(sqlite_unit_of_work, make_playlist())

    with sqlite_engine.connect() as connection:
        raw = connection.execute(text("SELECT source_type FROM playlist")).scalar_one()

    assert raw == "M3U"
