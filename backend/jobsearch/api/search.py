from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobsearch.api.deps import get_registry
from jobsearch.core.constants import DEFAULT_PAGE, DEFAULT_RESULTS_LIMIT, DEFAULT_RESULTS_PER_PAGE
from jobsearch.crawlers.registry import SourceRegistry
from jobsearch.db.database import get_db
from jobsearch.errors import InvalidQuery
from jobsearch.schemas.search import SearchQuery, SearchResponse
from jobsearch.services.search_service import (
    build_response,
    record_search_run,
    search_jobs,
    suggest,
    trending_keywords,
)
from jobsearch.services.settings_service import enabled_sources

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


def describe_validation_error(exc: ValidationError | RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def _split_sources(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    names = [part.strip().lower() for part in raw.split(",") if part.strip()]
    return names or None


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str | None = None,
    keywords: str | None = None,
    location: str = "",
    limit: int = DEFAULT_RESULTS_LIMIT,
    page: int = DEFAULT_PAGE,
    page_size: int = Query(default=DEFAULT_RESULTS_PER_PAGE, alias="pageSize"),
    employment_type: str | None = Query(default=None, alias="employmentType"),
    experience_level: str | None = Query(default=None, alias="experienceLevel"),
    date_posted: str = Query(default="all", alias="datePosted"),
    sources: str | None = None,
    db: Session = Depends(get_db),
    registry: SourceRegistry = Depends(get_registry),
):
    text = (q or keywords or "").strip()
    if not text:
        raise InvalidQuery("Keywords parameter is required")
    try:
        query = SearchQuery(
            keywords=text,
            location=location,
            employment_type=employment_type,
            experience_level=experience_level,
            date_posted=date_posted.lower(),
            page=page,
            page_size=page_size,
            limit=limit,
            sources=_split_sources(sources),
        )
    except ValidationError as exc:
        raise InvalidQuery(describe_validation_error(exc)) from exc

    fetchers = registry.fetchers_for(enabled_sources(db, query.sources))
    if not fetchers:
        logger.warning("No enabled sources match %s", query.sources or "the configuration")

    outcome = await search_jobs(query, fetchers)

    try:
        record_search_run(db, outcome)
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Could not record search run for %r", query.keywords, exc_info=True)

    return build_response(outcome)


@router.get("/suggest")
def get_suggestions(q: str | None = None):
    text = (q or "").strip()
    if not text:
        raise InvalidQuery("Query parameter is required")
    return {"success": True, "query": text, "suggestions": suggest(text)}


@router.get("/trending")
def get_trending(limit: int = Query(default=10, ge=1, le=50), db: Session = Depends(get_db)):
    return {"success": True, "trending": trending_keywords(db, limit)}
