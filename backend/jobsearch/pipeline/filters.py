from __future__ import annotations
from datetime import date, timedelta
from typing import Iterable

from jobsearch.core.constants import DATE_POSTED_WINDOWS
from jobsearch.crawlers.base import JobPosting
from jobsearch.schemas.search import SearchQuery

ANY = {"", "any", "all"}


def _wanted(value: str | None) -> str | None:
    text = (value or "").strip().lower()
    return None if text in ANY else text


def matches_location(job: JobPosting, location: str | None) -> bool:
    wanted = _wanted(location)
    if wanted is None:
        return True
    have = job.location.lower()
    # Remote postings satisfy any location filter.
    if job.is_remote or "remote" in have:
        return True
    return wanted in have


def posted_within(job: JobPosting, date_posted: str | None, today: date) -> bool:
    days = DATE_POSTED_WINDOWS.get((date_posted or "all").lower())
    if days is None:
        return True
    return job.posted_date >= today - timedelta(days=days)


def filter_jobs(jobs: Iterable[JobPosting], query: SearchQuery, today: date | None = None) -> list[JobPosting]:
    today = today or date.today()
    employment_type = _wanted(query.employment_type)
    experience_level = _wanted(query.experience_level)

    kept: list[JobPosting] = []
    for job in jobs:
        if employment_type and job.employment_type.lower() != employment_type:
            continue
        if experience_level and job.experience_level.lower() != experience_level:
            continue
        if not matches_location(job, query.location):
            continue
        if not posted_within(job, query.date_posted, today):
            continue
        kept.append(job)
    return kept


def rank(jobs: Iterable[JobPosting], keywords: str) -> list[JobPosting]:
    """Stable partition: titles containing the keywords first, order otherwise untouched."""
    needle = keywords.strip().lower()
    jobs = list(jobs)
    if not needle:
        return jobs
    hits = [job for job in jobs if needle in job.title.lower()]
    misses = [job for job in jobs if needle not in job.title.lower()]
    return hits + misses


def facets(jobs: Iterable[JobPosting]) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {"sources": [], "locations": [], "companies": [], "employmentTypes": []}
    fields = (
        ("sources", "source"),
        ("locations", "location"),
        ("companies", "company"),
        ("employmentTypes", "employment_type"),
    )
    for job in jobs:
        for key, attr in fields:
            value = getattr(job, attr)
            if value and value not in out[key]:
                out[key].append(value)
    return out
