"""SQLAlchemy-backed unit of work for the catalog store.

The adapter keeps one engine per process. ``startup()`` maps the domain
classes, migrates the schema to head and binds a session factory; every
``SqlAlchemyCatalogUnitOfWork`` then opens a fresh session from it.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from channelkeeper.adapters.sqlalchemy.mappings import start_mappers
from channelkeeper.adapters.sqlalchemy.migrations import upgrade_head
from channelkeeper.adapters.sqlalchemy.repositories import (
    SqlAlchemyChannelRepository,
    SqlAlchemyPlaylistRepository,
    SqlAlchemyVodItemRepository,
)
from channelkeeper.config import get_database_config
from channelkeeper.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the catalog store is used before ``startup()`` or reconfigured twice."""


class _StoreState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def open_session(self) -> Session:
        if self.sessions is None:
            raise StartupError(
                "Catalog store not initialised; call "
                "channelkeeper.adapters.sqlalchemy.unit_of_work.startup() first"
            )
        return self.sessions()


_STATE = _StoreState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the catalog store to ``engine`` (or a new one built from the configured URI)."""

    if _STATE.engine is not None and not force:
        raise StartupError("Catalog store already initialised; pass force=True to rebind")

    resolved = engine or create_engine(database_uri or get_database_config().uri, future=True)
    start_mappers()
    upgrade_head(engine=resolved)
    _STATE.bind(resolved)
    log.debug("Catalog store bound to %s", resolved.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; mostly useful between tests."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.bind(None)


class SqlAlchemyCatalogUnitOfWork:
    """One session's worth of playlist, channel and VOD repositories.

    Leaving the block with an exception rolls back. Leaving it without
    ``commit()`` closes the session, which discards pending writes.
    """

    def __init__(self) -> None:
        if not is_started():
            raise StartupError("Catalog store not initialised")
        self._session: Session | None = None
        self._repositories: CatalogRepositories | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        session = _STATE.open_session()
        self._session = session
        self._repositories = CatalogRepositories(
            playlists=SqlAlchemyPlaylistRepository(session),
            channels=SqlAlchemyChannelRepository(session),
            vod_items=SqlAlchemyVodItemRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its 'with' block")
        return self._session

    @property
    def repositories(self) -> CatalogRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its 'with' block")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from channelkeeper.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
