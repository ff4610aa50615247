"""Identity resolution of incoming channel entries against one playlist's channels."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .contracts import ChannelMatch, MatchTier

if TYPE_CHECKING:
    from collections.abc import Iterable

    from channelkeeper.domain.model import Channel, ChannelEntry

type NameGroupKey = tuple[str, str]


def name_group_key(name: str, group_name: str | None) -> NameGroupKey:
    return (name, group_name or "")


@dataclass(slots=True)
class ChannelIndex:
    """Three last-write-wins lookup maps over a playlist's existing channels.

    Channels sharing a key collapse to whichever was indexed last. Soft-deleted
    channels are indexed first so that an active channel always wins a shared key
    while a deleted one can still be found and reactivated.
    """

    by_source_id: dict[str, Channel] = field(default_factory=dict)
    by_guide_id: dict[str, Channel] = field(default_factory=dict)
    by_name_group: dict[NameGroupKey, Channel] = field(default_factory=dict)

    @classmethod
    def build(cls, channels: Iterable[Channel]) -> ChannelIndex:
        index = cls()
        ordered = sorted(channels, key=lambda channel: not channel.is_deleted)
        for channel in ordered:
            index.add(channel)
        return index

    def add(self, channel: Channel) -> None:
        if channel.source_channel_id:
            self.by_source_id[channel.source_channel_id] = channel
        if channel.tvg_id:
            self.by_guide_id[channel.tvg_id] = channel
        self.by_name_group[name_group_key(channel.name, channel.group_name)] = channel

    def claim_source_id(self, channel: Channel) -> None:
        """Route later entries carrying the same source id in this pass to ``channel``."""

        if channel.source_channel_id:
            self.by_source_id[channel.source_channel_id] = channel


def resolve_channel(index: ChannelIndex, entry: ChannelEntry) -> ChannelMatch | None:
    """Return the existing channel ``entry`` refers to, or ``None`` for a new channel."""

    if entry.source_channel_id:
        match = index.by_source_id.get(entry.source_channel_id)
        if match is not None:
            return ChannelMatch(channel=match, tier=MatchTier.SOURCE_ID)

    if entry.tvg_id:
        match = index.by_guide_id.get(entry.tvg_id)
        if match is not None:
            return ChannelMatch(channel=match, tier=MatchTier.GUIDE_ID)

    match = index.by_name_group.get(name_group_key(entry.name, entry.group_name))
    if match is not None:
        return ChannelMatch(channel=match, tier=MatchTier.NAME_GROUP)
    return None
