"""Async client for the Emby media server REST API."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from .schema import EmbyAuthResponse, EmbyItem, EmbyItemsResponse, EmbyLibrariesResponse, EmbyLibrary

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from channelkeeper.adapters.http_resilience import ResilientClient
    from channelkeeper.config import EmbyClientIdentity

log = getLogger(__name__)

ITEM_FIELDS = "Overview,Genres,OfficialRating"
POSTER_MAX_WIDTH = 300
BACKDROP_MAX_WIDTH = 1280


class EmbyAPIError(RuntimeError):
    """Raised when the Emby server answers with an error or an unreadable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmbyAuthenticationError(EmbyAPIError):
    pass


@dataclass(frozen=True, slots=True)
class EmbyCredentials:
    server_url: str
    username: str
    password: str

    @property
    def base_url(self) -> str:
        return self.server_url.rstrip("/")


@dataclass(frozen=True, slots=True)
class EmbySession:
    user_id: str
    access_token: str


def image_url(
    server_url: str, item_id: str, image_type: str, *, tag: str | None, max_width: int
) -> str:
    params: dict[str, str | int] = {"maxWidth": max_width}
    if tag is not None:
        params["tag"] = tag
    url = httpx.URL(f"{server_url.rstrip('/')}/Items/{item_id}/Images/{image_type}", params=params)
    return str(url)


def direct_stream_url(server_url: str, item_id: str, access_token: str) -> str:
    url = httpx.URL(
        f"{server_url.rstrip('/')}/Videos/{item_id}/stream",
        params={"Static": "true", "api_key": access_token},
    )
    return str(url)


class EmbyClient:
    def __init__(
        self,
        http: ResilientClient,
        credentials: EmbyCredentials,
        identity: EmbyClientIdentity,
    ) -> None:
        self._http = http
        self.credentials = credentials
        self.identity = identity

    async def authenticate(self) -> EmbySession:
        response = await self._http.post(
            f"{self.credentials.base_url}/Users/AuthenticateByName",
            json={"Username": self.credentials.username, "Pw": self.credentials.password},
            headers={"X-Emby-Authorization": self.identity.authorization_header()},
        )
        payload = self._validate(EmbyAuthResponse, self._json(response, "authentication"))
        return EmbySession(user_id=payload.user.id, access_token=payload.access_token)

    async def libraries(self, session: EmbySession) -> list[EmbyLibrary]:
        response = await self._get(session, f"Users/{session.user_id}/Views")
        return self._validate(EmbyLibrariesResponse, self._json(response, "libraries")).items

    async def items_page(
        self,
        session: EmbySession,
        *,
        parent_id: str,
        item_type: str,
        start_index: int,
        limit: int,
    ) -> EmbyItemsResponse:
        response = await self._get(
            session,
            f"Users/{session.user_id}/Items",
            params={
                "ParentId": parent_id,
                "IncludeItemTypes": item_type,
                "Recursive": "true",
                "Fields": ITEM_FIELDS,
                "StartIndex": start_index,
                "Limit": limit,
            },
        )
        return self._validate(EmbyItemsResponse, self._json(response, "items"))

    async def iter_items(
        self,
        session: EmbySession,
        *,
        parent_id: str,
        item_type: str,
        page_size: int,
    ) -> AsyncIterator[EmbyItem]:
        """Yield every item below ``parent_id``, following ``TotalRecordCount`` paging."""

        start_index = 0
        while True:
            page = await self.items_page(
                session,
                parent_id=parent_id,
                item_type=item_type,
                start_index=start_index,
                limit=page_size,
            )
            for item in page.items:
                yield item
            start_index += len(page.items)
            if not page.items or start_index >= page.total_record_count:
                return

    async def _get(
        self,
        session: EmbySession,
        path: str,
        *,
        params: dict[str, str | int] | None = None,
    ) -> httpx.Response:
        return await self._http.get(
            f"{self.credentials.base_url}/{path}",
            params=params,
            headers={"X-Emby-Token": session.access_token},
        )

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> object:
        if response.status_code == 401:
            raise EmbyAuthenticationError("Emby rejected the credentials", status_code=401)
        if not response.is_success:
            log.error("Emby %s failed with HTTP %s", operation, response.status_code)
            raise EmbyAPIError(
                f"Emby {operation} failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise EmbyAPIError(f"Emby {operation} returned non-JSON content") from exc

    @staticmethod
    def _validate[TModel: BaseModel](model: type[TModel], payload: object) -> TModel:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise EmbyAPIError(f"Malformed Emby payload for {model.__name__}") from exc
