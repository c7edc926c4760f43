from __future__ import annotations
from typing import Iterable

from jobsearch.crawlers.base import JobPosting


def dedupe_key(job: JobPosting) -> tuple[str, str]:
    # Case-folded only: "Sr. React Developer" and "Senior React Developer" stay distinct.
    return job.title.lower(), job.company.lower()


def dedupe(jobs: Iterable[JobPosting]) -> list[JobPosting]:
    seen: set[tuple[str, str]] = set()
    unique: list[JobPosting] = []
    for job in jobs:
        key = dedupe_key(job)
        if key in seen:
            continue
        seen.add(key)
        unique.append(job)
    return unique
