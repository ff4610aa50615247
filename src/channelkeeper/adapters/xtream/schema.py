"""Xtream Codes ``player_api.php`` response schemas.

Panels disagree on JSON types (numbers as strings, ``""`` for missing values,
single strings where arrays are documented), so numeric and string fields are
decoded leniently instead of failing the whole listing.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field


def _to_optional_int(value: object) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            try:
                return int(float(text))
            except ValueError:
                return None
    return None


def _to_int(value: object) -> int:
    parsed = _to_optional_int(value)
    return 0 if parsed is None else parsed


def _to_optional_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _to_str(value: object) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return ""


def _to_optional_str(value: object) -> str | None:
    text = _to_str(value).strip()
    return text or None


def _to_str_tuple(value: object) -> tuple[str, ...]:
    if isinstance(value, list):
        return tuple(item for item in value if isinstance(item, str) and item)
    if isinstance(value, str) and value:
        return (value,)
    return ()


LenientInt = Annotated[int, BeforeValidator(_to_int)]
LenientOptionalInt = Annotated[int | None, BeforeValidator(_to_optional_int)]
LenientOptionalFloat = Annotated[float | None, BeforeValidator(_to_optional_float)]
LenientStr = Annotated[str, BeforeValidator(_to_str)]
OptionalStr = Annotated[str | None, BeforeValidator(_to_optional_str)]
StrOrList = Annotated[tuple[str, ...], BeforeValidator(_to_str_tuple)]


class XtreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class XtreamUserInfo(XtreamModel):
    username: OptionalStr = None
    status: OptionalStr = None
    auth: LenientInt = 0
    exp_date: LenientOptionalInt = None
    max_connections: LenientOptionalInt = None

    def is_expired(self, now: datetime) -> bool:
        if self.exp_date is None:
            return False
        return datetime.fromtimestamp(self.exp_date, tz=UTC) < now


class XtreamServerInfo(XtreamModel):
    url: OptionalStr = None
    port: OptionalStr = None
    server_protocol: OptionalStr = None
    timezone: OptionalStr = None


class XtreamAuthResponse(XtreamModel):
    user_info: XtreamUserInfo
    server_info: XtreamServerInfo | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_info.auth == 1


class XtreamCategory(XtreamModel):
    category_id: LenientStr
    category_name: LenientStr = ""
    parent_id: LenientInt = 0


class XtreamLiveStream(XtreamModel):
    num: LenientInt = 0
    name: LenientStr = ""
    stream_id: LenientInt
    stream_icon: OptionalStr = None
    epg_channel_id: OptionalStr = None
    category_id: OptionalStr = None
    tv_archive: LenientInt = 0


class XtreamVodStream(XtreamModel):
    num: LenientInt = 0
    name: LenientStr = ""
    stream_id: LenientInt
    stream_icon: OptionalStr = None
    rating: LenientOptionalFloat = None
    category_id: OptionalStr = None
    container_extension: OptionalStr = None


class XtreamSeries(XtreamModel):
    num: LenientInt = 0
    name: LenientStr = ""
    series_id: LenientInt
    cover: OptionalStr = None
    plot: OptionalStr = None
    genre: OptionalStr = None
    release_date: OptionalStr = Field(
        default=None, validation_alias=AliasChoices("releaseDate", "release_date")
    )
    rating: LenientOptionalFloat = None
    category_id: OptionalStr = None
    backdrop_path: StrOrList = ()
