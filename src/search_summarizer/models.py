"""Data models for search results and saved searches.

Search payloads arrive from Exa in camelCase; the models accept both the wire
names and the Python field names, and serialize back to camelCase so the
persisted saved-search file keeps the upstream shape.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, ValidatorFunctionWrapHandler, field_validator, model_validator
from pydantic.alias_generators import to_camel

SNIPPET_LENGTH = 300


class _WireModel(BaseModel):
    """Frozen model using camelCase aliases on the wire."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class SearchResult(_WireModel):
    """A single ranked search result. Immutable once received."""

    id: str
    url: str
    title: str = ""
    snippet: str = ""
    text: str | None = None
    published_date: datetime | None = None
    author: str | None = None
    score: float

    @model_validator(mode="before")
    @classmethod
    def _fill_derived_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        # Exa leaves these null rather than omitting them
        if data.get("title") is None:
            data["title"] = ""
        if not data.get("snippet"):
            highlights = data.get("highlights") or []
            text = data.get("text") or ""
            if highlights and isinstance(highlights[0], str):
                data["snippet"] = highlights[0]
            else:
                data["snippet"] = text[:SNIPPET_LENGTH].strip()
        if not data.get("id") and data.get("url"):
            data["id"] = data["url"]
        return data

    @field_validator("published_date", mode="wrap")
    @classmethod
    def _bad_date_is_none(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> datetime | None:
        # A single unparseable date must not reject the whole response
        if isinstance(value, str) and not value.strip():
            return None
        try:
            return handler(value)
        except ValidationError:
            return None


class SearchResponse(_WireModel):
    """Ordered results for one query, as returned by the search service."""

    results: tuple[SearchResult, ...] = ()
    total_count: int = 0
    autoprompt_string: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_total_count(cls, data: Any) -> Any:
        if isinstance(data, dict) and "totalCount" not in data and "total_count" not in data:
            data = {**data, "total_count": len(data.get("results") or ())}
        return data


class SavedSearch(_WireModel):
    """A persisted query/results/summary triple."""

    query: str
    results: SearchResponse
    summary: str

    @field_validator("query", "summary")
    @classmethod
    def _require_text(cls, value: str, info: ValidationInfo) -> str:
        if not value or not value.strip():
            raise ValueError(f"{info.field_name} must be non-empty")
        return value

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

