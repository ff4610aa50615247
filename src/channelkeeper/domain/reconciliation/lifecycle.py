"""Soft-delete sweep and purge of channels that disappeared from a provider."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from channelkeeper.domain.model import Channel
    from channelkeeper.domain.ports.persistence import ChannelRepository
    from channelkeeper.domain.ports.unit_of_work import CatalogUnitOfWork

log = getLogger(__name__)


def unseen_active_ids(existing: Iterable[Channel], seen_ids: set[str]) -> list[str]:
    return [
        channel.id for channel in existing if not channel.is_deleted and channel.id not in seen_ids
    ]


def sweep_unseen(
    channels: ChannelRepository,
    *,
    playlist_id: str,
    existing: Iterable[Channel],
    seen_ids: set[str],
    now: datetime,
) -> int:
    """Soft-delete every previously active channel not matched or inserted this pass.

    Reactivation has no counterpart here: it happens in the merge step when a
    soft-deleted channel is matched again.
    """

    stale_ids = unseen_active_ids(existing, seen_ids)
    if not stale_ids:
        return 0
    return channels.soft_delete(playlist_id, stale_ids, at=now)


def purge_deleted_channels(
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    older_than: datetime,
) -> int:
    """Hard-delete channels soft-deleted strictly before ``older_than``."""

    with unit_of_work_factory() as uow:
        removed = uow.repositories.channels.purge_deleted(older_than=older_than)
        uow.commit()
    log.info("Purged %s soft-deleted channels older than %s", removed, older_than.isoformat())
    return removed
