"""Refresh and retention defaults for catalog synchronisation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from .env import optional_int_env

DEFAULT_RETENTION_DAYS = 30
DEFAULT_REFRESH_HOURS = 24
DEFAULT_EMBY_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class SyncConfig:
    deleted_channel_retention_days: int = DEFAULT_RETENTION_DAYS
    default_refresh_hours: int = DEFAULT_REFRESH_HOURS
    emby_page_size: int = DEFAULT_EMBY_PAGE_SIZE

    @property
    def deleted_channel_retention(self) -> timedelta:
        return timedelta(days=self.deleted_channel_retention_days)


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        deleted_channel_retention_days=optional_int_env(
            "CHANNELKEEPER_RETENTION_DAYS", default=DEFAULT_RETENTION_DAYS
        ),
    )
