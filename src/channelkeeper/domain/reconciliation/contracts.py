"""Result types and enums shared by the reconciliation components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from channelkeeper.domain.model import Channel


class MatchTier(StrEnum):
    """Identity keys tried by the resolver, in priority order."""

    SOURCE_ID = "source_id"
    GUIDE_ID = "guide_id"
    NAME_GROUP = "name_group"


class ImportPhase(StrEnum):
    IDLE = "idle"
    RESOLVING = "resolving"
    MERGING = "merging"
    SWEEPING = "sweeping"
    DONE = "done"


@dataclass(frozen=True, slots=True, kw_only=True)
class ChannelMatch:
    channel: Channel
    tier: MatchTier


@dataclass(frozen=True, slots=True, kw_only=True)
class MergeOutcome:
    """Result of merging one incoming entry into an existing channel."""

    channel: Channel
    changed_fields: tuple[str, ...] = ()
    reactivated: bool = False

    @property
    def changed(self) -> bool:
        return self.reactivated or bool(self.changed_fields)


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportResult:
    """Aggregate counts of one channel reconciliation pass."""

    added: int = 0
    updated: int = 0
    soft_deleted: int = 0
    unchanged: int = 0

    @property
    def total(self) -> int:
        """Channels present in the incoming set."""
        return self.added + self.updated + self.unchanged


@dataclass(frozen=True, slots=True, kw_only=True)
class VodImportResult:
    added: int = 0
    removed: int = 0
