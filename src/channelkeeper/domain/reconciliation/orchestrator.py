"""Import orchestrator: one atomic reconciliation pass per playlist refresh."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from channelkeeper.domain.errors import PlaylistNotFoundError
from channelkeeper.domain.model import new_id

from .contracts import ImportPhase, ImportResult
from .lifecycle import sweep_unseen
from .merge import channel_from_entry, merge_channel
from .resolve import ChannelIndex, resolve_channel

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from channelkeeper.domain.model import Channel, ChannelEntry
    from channelkeeper.domain.ports.persistence import ChannelRepository
    from channelkeeper.domain.ports.unit_of_work import CatalogUnitOfWork

type IdFactory = Callable[[], str]

log = getLogger(__name__)


@dataclass(slots=True)
class _ImportRun:
    playlist_id: str
    phase: ImportPhase = ImportPhase.IDLE
    added: int = 0
    updated: int = 0
    unchanged: int = 0
    soft_deleted: int = 0
    seen_ids: set[str] = field(default_factory=set)

    def advance(self, phase: ImportPhase) -> None:
        if phase is self.phase:
            return
        log.debug("Channel import %s: %s -> %s", self.playlist_id, self.phase, phase)
        self.phase = phase

    def result(self) -> ImportResult:
        return ImportResult(
            added=self.added,
            updated=self.updated,
            soft_deleted=self.soft_deleted,
            unchanged=self.unchanged,
        )


def import_channels(
    *,
    playlist_id: str,
    entries: Iterable[ChannelEntry],
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    now: datetime,
    id_factory: IdFactory = new_id,
) -> ImportResult:
    """Reconcile ``entries`` against the playlist's stored channels in one transaction.

    Matched channels keep their id and favorite flag, unmatched entries become
    new channels, and active channels absent from ``entries`` are soft-deleted
    at ``now``. Any failure rolls back the whole pass.
    """

    run = _ImportRun(playlist_id=playlist_id)
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        if repositories.playlists.get(playlist_id) is None:
            raise PlaylistNotFoundError(playlist_id)

        log.info("Reconciling channels for playlist %s", playlist_id)
        try:
            _reconcile(run, repositories.channels, entries, now=now, id_factory=id_factory)
            uow.commit()
        except Exception:
            log.error("Channel import for playlist %s aborted during %s", playlist_id, run.phase)
            raise
        run.advance(ImportPhase.DONE)

    result = run.result()
    log.info(
        "Channel import for playlist %s finished: added=%s, updated=%s, soft_deleted=%s, "
        "unchanged=%s",
        playlist_id,
        result.added,
        result.updated,
        result.soft_deleted,
        result.unchanged,
    )
    return result


def _reconcile(
    run: _ImportRun,
    channels: ChannelRepository,
    entries: Iterable[ChannelEntry],
    *,
    now: datetime,
    id_factory: IdFactory,
) -> None:
    existing = channels.list_for_playlist(run.playlist_id, include_deleted=True)
    index = ChannelIndex.build(existing)

    run.advance(ImportPhase.RESOLVING)
    for entry in entries:
        run.phase = ImportPhase.RESOLVING
        match = resolve_channel(index, entry)

        run.phase = ImportPhase.MERGING
        channel: Channel
        if match is None:
            channel = channel_from_entry(entry, playlist_id=run.playlist_id, channel_id=id_factory())
            channels.add(channel)
            run.added += 1
        else:
            outcome = merge_channel(match.channel, entry)
            channel = outcome.channel
            if outcome.changed:
                run.updated += 1
            else:
                run.unchanged += 1
        run.seen_ids.add(channel.id)
        # only the source id tier sees channels from this pass; a repeated source id
        # is a provider defect and the last entry wins
        index.claim_source_id(channel)

    run.advance(ImportPhase.SWEEPING)
    run.soft_deleted = sweep_unseen(
        channels,
        playlist_id=run.playlist_id,
        existing=existing,
        seen_ids=run.seen_ids,
        now=now,
    )
