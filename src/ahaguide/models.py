"""Guideline document models, scoring weights and query outcomes."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_CATEGORY = "General"
DEFAULT_SOURCE = "AHA"
YEAR_RANGE = (1900, 2100)


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


NonBlankStr = Annotated[str, Field(min_length=1), AfterValidator(_require_text)]


class ScoringWeights(BaseModel):
    """Named weight table for lexical relevance scoring."""

    model_config = ConfigDict(frozen=True)

    title_term: int = Field(10, ge=0)
    content_term: int = Field(3, ge=0)
    keyword_term: int = Field(5, ge=0)
    title_phrase: int = Field(15, ge=0)
    content_phrase: int = Field(8, ge=0)
    min_term_length: int = Field(3, ge=1)


class GuidelineDocument(BaseModel):
    """A guideline held by the store. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: NonBlankStr
    content: NonBlankStr
    category: str = DEFAULT_CATEGORY
    year: int
    source: str = DEFAULT_SOURCE
    keywords: tuple[str, ...] = ()

    @property
    def citation(self) -> str:
        return f"{self.title} - {self.source} ({self.year})"


class DocumentInput(BaseModel):
    """Partial document accepted on insertion; only title and content are required."""

    id: str | None = None
    title: NonBlankStr
    content: NonBlankStr
    category: str | None = None
    year: int | None = None
    source: str | None = None
    keywords: list[str] | None = None

    @field_validator("id", "category", "source", mode="before")
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("year")
    def _check_year(cls, value: int | None, info: ValidationInfo) -> int | None:
        # Persisted collections keep whatever year they were saved with.
        if value is None or (info.context or {}).get("persisted"):
            return value
        low, high = YEAR_RANGE
        if not low <= value <= high:
            raise ValueError(f"must be between {low} and {high}")
        return value


def normalize_document(
    data: DocumentInput,
    *,
    doc_id: str,
    today: date | None = None,
) -> GuidelineDocument:
    """Apply insertion defaults to a validated partial document."""

    year = data.year if data.year is not None else (today or date.today()).year
    return GuidelineDocument(
        id=doc_id,
        title=data.title,
        content=data.content,
        category=data.category or DEFAULT_CATEGORY,
        year=year,
        source=data.source or DEFAULT_SOURCE,
        keywords=tuple(data.keywords or ()),
    )


class QueryRequest(BaseModel):
    query: NonBlankStr


class QueryOutcome(BaseModel):
    """Truncated ranking handed to response formatting."""

    query: str
    total_matches: int = 0
    results: list[GuidelineDocument] = Field(default_factory=list)

    @property
    def has_matches(self) -> bool:
        return self.total_matches > 0


__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_SOURCE",
    "YEAR_RANGE",
    "DocumentInput",
    "GuidelineDocument",
    "QueryOutcome",
    "QueryRequest",
    "ScoringWeights",
    "normalize_document",
]
