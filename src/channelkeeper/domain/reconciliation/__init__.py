"""Catalog reconciliation engine.

Channels are reconciled by identity (source id, then guide id, then name and
group) so their ids and favorite flags survive refreshes. VOD items are replaced
wholesale on each refresh.
"""

from __future__ import annotations

from .contracts import (
    ChannelMatch,
    ImportPhase,
    ImportResult,
    MatchTier,
    MergeOutcome,
    VodImportResult,
)
from .lifecycle import purge_deleted_channels, sweep_unseen
from .merge import MERGED_FIELDS, channel_from_entry, merge_channel
from .orchestrator import import_channels
from .resolve import ChannelIndex, resolve_channel
from .vod import build_vod_items, replace_vod_items

__all__ = [
    "MERGED_FIELDS",
    "ChannelIndex",
    "ChannelMatch",
    "ImportPhase",
    "ImportResult",
    "MatchTier",
    "MergeOutcome",
    "VodImportResult",
    "build_vod_items",
    "channel_from_entry",
    "import_channels",
    "merge_channel",
    "purge_deleted_channels",
    "replace_vod_items",
    "resolve_channel",
    "sweep_unseen",
]
