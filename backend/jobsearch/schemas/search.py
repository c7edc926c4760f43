from __future__ import annotations
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from jobsearch.core.constants import (
    DEFAULT_PAGE,
    DEFAULT_RESULTS_LIMIT,
    DEFAULT_RESULTS_PER_PAGE,
    EMPLOYMENT_TYPES,
    EXPERIENCE_LEVELS,
    MAX_PAGE_SIZE,
    MAX_RESULTS_LIMIT,
)


class SearchQuery(BaseModel):
    keywords: str
    location: str = ""
    employment_type: str | None = None
    experience_level: str | None = None
    date_posted: Literal["today", "week", "month", "all"] = "all"
    page: int = DEFAULT_PAGE
    page_size: int = Field(default=DEFAULT_RESULTS_PER_PAGE, ge=1, le=MAX_PAGE_SIZE)
    limit: int = Field(default=DEFAULT_RESULTS_LIMIT, ge=1, le=MAX_RESULTS_LIMIT)
    sources: list[str] | None = None

    @field_validator("keywords")
    @classmethod
    def keywords_required(cls, value: str) -> str:
        value = " ".join((value or "").split())
        if not value:
            raise ValueError("Keywords parameter is required")
        return value

    @field_validator("employment_type", "experience_level")
    @classmethod
    def known_facet(cls, value: str | None, info: ValidationInfo) -> str | None:
        text = (value or "").strip().lower()
        if text in {"", "any", "all"}:
            return None
        allowed = EMPLOYMENT_TYPES if info.field_name == "employment_type" else EXPERIENCE_LEVELS
        if text not in allowed:
            raise ValueError(f"must be one of: {', '.join(allowed)}")
        return text

    @field_validator("location")
    @classmethod
    def strip_location(cls, value: str) -> str:
        return (value or "").strip()


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class JobOut(CamelModel):
    id: str
    title: str
    company: str
    location: str
    description: str
    salary: str | None = None
    employment_type: str
    experience_level: str
    source: str
    site: str = ""
    original_url: str
    posted_date: date
    requirements: list[str] = []
    keywords: list[str] = []
    benefits: list[str] = []
    is_active: bool = True
    is_remote: bool = False
    match_score: float | None = None
    annotations: dict = {}


class SourceStatusOut(CamelModel):
    source: str
    status: str
    fetched: int
    error: str = ""
    elapsed_ms: int = 0


class SearchResponse(CamelModel):
    success: bool = True
    jobs: list[JobOut]
    total_count: int
    total_results_available: int | None = None
    max_results_returnable: int | None = None
    page: int
    page_size: int
    total_pages: int
    message: str
    partial: bool = False
    quota_exceeded: bool = False
    warnings: list[str] = []
    sources: list[SourceStatusOut] = []
    filters: dict[str, list[str]] = {}
