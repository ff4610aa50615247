"""Async client for the Xtream Codes player API."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, TypeAdapter, ValidationError

from .schema import (
    XtreamAuthResponse,
    XtreamCategory,
    XtreamLiveStream,
    XtreamSeries,
    XtreamVodStream,
)

if TYPE_CHECKING:
    from datetime import datetime

    import httpx

    from channelkeeper.adapters.http_resilience import ResilientClient

log = getLogger(__name__)

LIVE_STREAM_EXTENSION = "m3u8"
DEFAULT_MOVIE_EXTENSION = "mp4"


class XtreamAPIError(RuntimeError):
    """Raised when an Xtream panel answers with an error or an unreadable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class XtreamAuthenticationError(XtreamAPIError):
    pass


class XtreamAccountExpiredError(XtreamAPIError):
    pass


@dataclass(frozen=True, slots=True)
class XtreamCredentials:
    server_url: str
    username: str
    password: str

    @property
    def base_url(self) -> str:
        return self.server_url.rstrip("/")

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/player_api.php"


class XtreamClient:
    def __init__(self, http: ResilientClient, credentials: XtreamCredentials) -> None:
        self._http = http
        self.credentials = credentials

    async def authenticate(self, *, now: datetime) -> XtreamAuthResponse:
        payload = await self._call(None)
        if not isinstance(payload, dict) or "user_info" not in payload:
            raise XtreamAuthenticationError("Xtream login rejected: no account information")
        response = self._validate(XtreamAuthResponse, payload)
        if not response.is_authenticated:
            raise XtreamAuthenticationError("Xtream login rejected")
        if response.user_info.is_expired(now):
            raise XtreamAccountExpiredError("Xtream account has expired")
        return response

    async def live_categories(self) -> list[XtreamCategory]:
        return await self._list("get_live_categories", XtreamCategory)

    async def live_streams(self) -> list[XtreamLiveStream]:
        return await self._list("get_live_streams", XtreamLiveStream)

    async def vod_categories(self) -> list[XtreamCategory]:
        return await self._list("get_vod_categories", XtreamCategory)

    async def vod_streams(self) -> list[XtreamVodStream]:
        return await self._list("get_vod_streams", XtreamVodStream)

    async def series_categories(self) -> list[XtreamCategory]:
        return await self._list("get_series_categories", XtreamCategory)

    async def series(self) -> list[XtreamSeries]:
        return await self._list("get_series", XtreamSeries)

    def live_stream_url(self, stream_id: int) -> str:
        return self._stream_url("live", stream_id, LIVE_STREAM_EXTENSION)

    def movie_url(self, stream_id: int, extension: str | None) -> str:
        return self._stream_url("movie", stream_id, extension or DEFAULT_MOVIE_EXTENSION)

    def _stream_url(self, kind: str, stream_id: int, extension: str) -> str:
        creds = self.credentials
        return f"{creds.base_url}/{kind}/{creds.username}/{creds.password}/{stream_id}.{extension}"

    async def _list[TModel: BaseModel](self, action: str, model: type[TModel]) -> list[TModel]:
        payload = await self._call(action)
        # empty listings come back as null, {} or [] depending on the panel
        if payload is None or payload == {}:
            return []
        if not isinstance(payload, list):
            raise XtreamAPIError(f"Unexpected payload for {action}: {type(payload).__name__}")
        return self._validate(list[model], payload)

    def _validate[T](self, schema: type[T], payload: object) -> T:
        try:
            return TypeAdapter(schema).validate_python(payload)
        except ValidationError as exc:
            raise XtreamAPIError(f"Malformed Xtream payload: {exc.error_count()} errors") from exc

    async def _call(self, action: str | None) -> object:
        params = {"username": self.credentials.username, "password": self.credentials.password}
        if action is not None:
            params["action"] = action
        response = await self._http.get(self.credentials.api_url, params=params)
        self._check_status(response, action)
        try:
            return response.json()
        except ValueError as exc:
            raise XtreamAPIError(f"Xtream {action or 'login'} returned non-JSON content") from exc

    @staticmethod
    def _check_status(response: httpx.Response, action: str | None) -> None:
        if response.status_code in {401, 403}:
            raise XtreamAuthenticationError(
                "Xtream credentials rejected", status_code=response.status_code
            )
        if not response.is_success:
            log.error("Xtream %s failed with HTTP %s", action or "login", response.status_code)
            raise XtreamAPIError(
                f"Xtream {action or 'login'} failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )
