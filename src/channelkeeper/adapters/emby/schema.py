"""Emby REST API response schemas (PascalCase JSON)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

TICKS_PER_SECOND = 10_000_000


class EmbyModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore", alias_generator=to_pascal, populate_by_name=True, frozen=True
    )


class EmbyUser(EmbyModel):
    id: str
    name: str = ""


class EmbyAuthResponse(EmbyModel):
    user: EmbyUser
    access_token: str


class EmbyLibrary(EmbyModel):
    id: str
    name: str = ""
    collection_type: str | None = None


class EmbyLibrariesResponse(EmbyModel):
    items: list[EmbyLibrary] = Field(default_factory=list)


class EmbyGenreItem(EmbyModel):
    name: str


class EmbyItem(EmbyModel):
    id: str
    name: str = ""
    type: str = ""
    overview: str | None = None
    production_year: int | None = None
    official_rating: str | None = None
    community_rating: float | None = None
    run_time_ticks: int | None = None
    series_id: str | None = None
    series_name: str | None = None
    parent_index_number: int | None = None
    index_number: int | None = None
    image_tags: dict[str, str] = Field(default_factory=dict)
    genre_items: list[EmbyGenreItem] = Field(default_factory=list)

    @property
    def duration_seconds(self) -> int | None:
        if not self.run_time_ticks or self.run_time_ticks <= 0:
            return None
        return self.run_time_ticks // TICKS_PER_SECOND

    @property
    def genre(self) -> str | None:
        names = [genre.name for genre in self.genre_items if genre.name]
        return ", ".join(names) if names else None


class EmbyItemsResponse(EmbyModel):
    items: list[EmbyItem] = Field(default_factory=list)
    total_record_count: int = 0
