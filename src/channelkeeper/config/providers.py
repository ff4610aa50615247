"""Per-provider HTTP defaults and client identity."""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from typing import Final

from channelkeeper import __version__

from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

USER_AGENT: Final[str] = f"channelkeeper/{__version__}"

_PROVIDER_DEFAULTS: Final[dict[str, tuple[float, RateLimit | None]]] = {
    "m3u": (60.0, None),
    "xtream": (30.0, RateLimit(max_calls=5, per_seconds=1.0)),
    "emby": (30.0, RateLimit(max_calls=10, per_seconds=1.0)),
}


def get_provider_resilience(name: str) -> ResilienceConfig:
    try:
        timeout, ratelimit = _PROVIDER_DEFAULTS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown provider: {name}") from exc
    return ResilienceConfig(
        name=name,
        timeout_seconds=timeout,
        ratelimit=ratelimit,
        retry=RetryPolicy(),
        default_headers={"User-Agent": USER_AGENT},
    )


@dataclass(frozen=True, slots=True)
class EmbyClientIdentity:
    """Values sent in the ``X-Emby-Authorization`` header."""

    client: str = "channelkeeper"
    device: str = "channelkeeper"
    device_id: str = "channelkeeper"
    version: str = __version__

    def authorization_header(self, token: str | None = None) -> str:
        header = (
            f'MediaBrowser Client="{self.client}", Device="{self.device}", '
            f'DeviceId="{self.device_id}", Version="{self.version}"'
        )
        if token:
            header += f', Token="{token}"'
        return header


def get_emby_identity() -> EmbyClientIdentity:
    device_id = os.getenv("CHANNELKEEPER_EMBY_DEVICE_ID") or f"channelkeeper-{socket.gethostname()}"
    return EmbyClientIdentity(device_id=device_id)
