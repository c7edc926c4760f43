from __future__ import annotations
import logging
from datetime import date
from typing import Iterable
from uuid import uuid4

from jobsearch.crawlers.base import FetchResult, JobPosting, RawJob
from jobsearch.pipeline import extractors as ex

logger = logging.getLogger(__name__)


def _job_id(source_name: str, raw: RawJob) -> str:
    if raw.source_job_id:
        return f"{source_name}-{raw.source_job_id}"
    return f"{source_name}-{uuid4().hex[:12]}"


def normalize(raw: RawJob, source_name: str, keywords: str, today: date | None = None) -> JobPosting | None:
    """Map one raw record onto a JobPosting, or None if title/company can't be determined."""
    today = today or date.today()
    homepage = str((raw.raw_payload or {}).get("site") or "")
    title = ex.clean_title(raw.title)
    company = ex.collapse(raw.company) or ex.extract_company(raw.title, raw.display_link)
    if not title or not company:
        return None

    description = ex.clean_description(raw.description)
    text = f"{title} {description}"
    location = (
        ex.collapse(raw.location)
        or ex.extract_location(description)
        or "Not specified"
    )

    employment_type = ex.normalize_employment_type(raw.employment_type) or ex.extract_employment_type(text)
    experience_level = ex.normalize_experience_level(raw.experience_level) or ex.extract_experience_level(text)
    posted_date = (
        ex.extract_posted_date(raw.posted_text, today)
        or ex.extract_posted_date(description, today)
        or today
    )

    return JobPosting(
        id=_job_id(source_name, raw),
        title=title,
        company=company,
        location=location,
        description=description or f"{title} position at {company}",
        salary=ex.collapse(raw.salary) or ex.extract_salary(description),
        employment_type=employment_type,
        experience_level=experience_level,
        source=source_name,
        site=ex.site_label(raw.display_link or raw.url),
        original_url=ex.clean_url(raw.url, fallback=homepage if homepage.startswith("http") else ""),
        posted_date=posted_date,
        requirements=list(raw.requirements) or ex.extract_requirements(text, keywords),
        keywords=ex.extract_keywords(text, keywords),
        benefits=list(raw.benefits) or ex.extract_benefits(description),
        is_remote=ex.is_remote(f"{location} {description}"),
    )


def normalize_all(results: Iterable[FetchResult], keywords: str, today: date | None = None) -> list[JobPosting]:
    """Normalize every successful result, keeping source order then per-source order."""
    jobs: list[JobPosting] = []
    dropped = 0
    for result in results:
        for raw in result.records:
            job = normalize(raw, result.source, keywords, today)
            if job is None:
                dropped += 1
                continue
            jobs.append(job)
    if dropped:
        logger.debug("Dropped %d records without title or company", dropped)
    return jobs
