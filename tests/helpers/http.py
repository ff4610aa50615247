"""HTTP test doubles built on ``httpx.MockTransport``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from channelkeeper.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from channelkeeper.adapters.http_resilience import ClientFactory
    from channelkeeper.config import ResilienceConfig

type Handler = Callable[[httpx.Request], httpx.Response]


def mock_client_factory(handler: Handler) -> ClientFactory:
    def factory(config: ResilienceConfig) -> ResilientClient:
        return ResilientClient(config, transport=httpx.MockTransport(handler))

    return factory


class FakeXtreamPanel:
    """Answers ``player_api.php`` requests from a per-action payload table."""

    def __init__(self, payloads: dict[str | None, object]) -> None:
        self.payloads = payloads
        self.requests: list[httpx.Request] = []

    @property
    def actions(self) -> list[str | None]:
        return [request.url.params.get("action") for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = self.payloads.get(request.url.params.get("action"), [])
        if isinstance(payload, httpx.Response):
            return payload
        if payload is None:
            # httpx treats json=None as "no body"; send a literal JSON null
            return httpx.Response(
                200, content=b"null", headers={"content-type": "application/json"}
            )
        return httpx.Response(200, json=payload)


def xtream_auth_payload(**user_info: object) -> dict[str, object]:
    return {
        "user_info": {"username": "joe", "auth": 1, "status": "Active", **user_info},
        "server_info": {"url": "panel.test", "port": "8080"},
    }
