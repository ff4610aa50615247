"""Field-level diff and merge of an incoming entry into an existing channel."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from channelkeeper.domain.model import Channel

from .contracts import MergeOutcome

if TYPE_CHECKING:
    from channelkeeper.domain.model import ChannelEntry

# id and is_favorite are user-facing state and never part of a merge
MERGED_FIELDS: Final[tuple[str, ...]] = (
    "stream_url",
    "logo_url",
    "name",
    "group_name",
    "epg_id",
    "tvg_id",
    "channel_number",
    "source_channel_id",
)


def diff_fields(channel: Channel, entry: ChannelEntry) -> tuple[str, ...]:
    return tuple(
        name for name in MERGED_FIELDS if getattr(channel, name) != getattr(entry, name)
    )


def merge_channel(channel: Channel, entry: ChannelEntry) -> MergeOutcome:
    """Apply ``entry`` onto ``channel`` in place when anything differs.

    A soft-deleted channel always counts as changed: it is reactivated and
    refreshed even when every descriptive field already matches.
    """

    changed_fields = diff_fields(channel, entry)
    reactivated = channel.is_deleted
    if not changed_fields and not reactivated:
        return MergeOutcome(channel=channel)

    for name in MERGED_FIELDS:
        setattr(channel, name, getattr(entry, name))
    if reactivated:
        channel.reactivate()
    return MergeOutcome(channel=channel, changed_fields=changed_fields, reactivated=reactivated)


def channel_from_entry(entry: ChannelEntry, *, playlist_id: str, channel_id: str) -> Channel:
    return Channel(
        id=channel_id,
        playlist_id=playlist_id,
        name=entry.name,
        stream_url=entry.stream_url,
        source_channel_id=entry.source_channel_id,
        group_name=entry.group_name,
        logo_url=entry.logo_url,
        epg_id=entry.epg_id,
        tvg_id=entry.tvg_id,
        channel_number=entry.channel_number,
    )
