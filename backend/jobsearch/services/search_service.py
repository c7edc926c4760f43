from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Sequence

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from jobsearch.crawlers.base import SourceFetcher
from jobsearch.models.search_run import SearchRun
from jobsearch.pipeline.dedupe import dedupe
from jobsearch.pipeline.filters import facets, filter_jobs, rank
from jobsearch.pipeline.normalize import normalize_all
from jobsearch.pipeline.paginate import Page, paginate
from jobsearch.schemas.search import JobOut, SearchQuery, SearchResponse, SourceStatusOut
from jobsearch.services.aggregator import AggregateResult, aggregate

logger = logging.getLogger(__name__)

SUGGESTION_TEMPLATES = ("{q} developer", "senior {q}", "{q} engineer", "{q} manager", "junior {q}")


@dataclass
class SearchOutcome:
    query: SearchQuery
    page: Page
    aggregate: AggregateResult
    facets: dict[str, list[str]] = field(default_factory=dict)
    started_at: datetime = field(default_factory=datetime.utcnow)
    finished_at: datetime | None = None

    @property
    def message(self) -> str:
        if self.aggregate.no_sources:
            return f"No enabled sources to search for '{self.query.keywords}'"
        if self.aggregate.all_failed:
            return f"No sources could be reached for '{self.query.keywords}'"
        if not self.page.total_count:
            return f"No jobs found for '{self.query.keywords}'"
        return f"Found {self.page.total_count} jobs for '{self.query.keywords}'"

    @property
    def status(self) -> str:
        if self.aggregate.no_sources or self.aggregate.all_failed:
            return "failed"
        return "partial" if self.aggregate.partial else "success"


async def search_jobs(query: SearchQuery, fetchers: Sequence[SourceFetcher], today: date | None = None) -> SearchOutcome:
    started_at = datetime.utcnow()
    agg = await aggregate(query, fetchers)

    jobs = normalize_all(agg.results, query.keywords, today)
    unique = dedupe(jobs)
    kept = rank(filter_jobs(unique, query, today), query.keywords)
    logger.info(
        "Pipeline for %r: %d raw, %d normalized, %d unique, %d after filters",
        query.keywords,
        agg.fetched_count,
        len(jobs),
        len(unique),
        len(kept),
    )

    # Pages past what survived dedupe and filters cannot be filled.
    returnable = agg.max_results_returnable
    if returnable is not None:
        returnable = min(returnable, len(kept))
    page = paginate(
        kept,
        query.page,
        query.page_size,
        total_results_available=agg.total_results_available,
        max_results_returnable=returnable,
    )
    return SearchOutcome(
        query=query,
        page=page,
        aggregate=agg,
        facets=facets(kept),
        started_at=started_at,
        finished_at=datetime.utcnow(),
    )


def build_response(outcome: SearchOutcome) -> SearchResponse:
    page = outcome.page
    agg = outcome.aggregate
    return SearchResponse(
        success=True,
        jobs=[JobOut.model_validate(job) for job in page.items],
        total_count=page.total_count,
        total_results_available=agg.total_results_available,
        max_results_returnable=agg.max_results_returnable,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
        message=outcome.message,
        partial=agg.partial,
        quota_exceeded=agg.quota_exceeded,
        warnings=list(agg.warnings),
        sources=[
            SourceStatusOut(
                source=r.source,
                status=r.status.value,
                fetched=len(r.records),
                error=r.error,
                elapsed_ms=r.elapsed_ms,
            )
            for r in agg.results
        ],
        filters=outcome.facets,
    )


def record_search_run(db: Session, outcome: SearchOutcome) -> SearchRun:
    agg = outcome.aggregate
    run = SearchRun(
        keywords=outcome.query.keywords,
        location=outcome.query.location,
        sources=[r.source for r in agg.results],
        started_at=outcome.started_at,
        finished_at=outcome.finished_at or datetime.utcnow(),
        status=outcome.status,
        fetched_count=agg.fetched_count,
        returned_count=outcome.page.total_count,
        source_stats=[
            {"source": r.source, "status": r.status.value, "fetched": len(r.records), "elapsed_ms": r.elapsed_ms}
            for r in agg.results
        ],
        error_summary="; ".join(agg.warnings)[:2000],
    )
    db.add(run)
    db.commit()
    db.refresh(run)
    return run


def list_runs(db: Session, limit: int = 100) -> list[SearchRun]:
    return db.query(SearchRun).order_by(desc(SearchRun.started_at)).limit(limit).all()


def trending_keywords(db: Session, limit: int = 10) -> list[str]:
    """Most searched keyword strings, taken from the run history."""
    term = func.lower(SearchRun.keywords)
    rows = (
        db.query(term.label("term"), func.count(SearchRun.id).label("n"))
        .group_by(term)
        .order_by(desc("n"), term)
        .limit(limit)
        .all()
    )
    return [row.term for row in rows]


def suggest(q: str) -> list[str]:
    q = " ".join(q.split())
    return [t.format(q=q) for t in SUGGESTION_TEMPLATES]
