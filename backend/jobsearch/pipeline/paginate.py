from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Sequence

from jobsearch.crawlers.base import JobPosting


@dataclass
class Page:
    items: list[JobPosting] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int = 10
    total_results_available: int | None = None
    max_results_returnable: int | None = None


def effective_total(
    total_count: int,
    total_results_available: int | None = None,
    max_results_returnable: int | None = None,
) -> int:
    if total_results_available is not None and max_results_returnable is not None:
        return min(total_results_available, max_results_returnable)
    return total_count


def paginate(
    jobs: Sequence[JobPosting],
    page: int,
    page_size: int,
    total_results_available: int | None = None,
    max_results_returnable: int | None = None,
) -> Page:
    """Slice one page out of the in-memory result set.

    Out-of-range pages are not an error: they come back with empty `items`
    and the same metadata.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    total = effective_total(len(jobs), total_results_available, max_results_returnable)
    total_pages = math.ceil(total / page_size)
    items: list[JobPosting] = []
    if 1 <= page <= total_pages:
        start = (page - 1) * page_size
        items = list(jobs[start : start + page_size])

    return Page(
        items=items,
        total_count=len(jobs),
        total_pages=total_pages,
        page=page,
        page_size=page_size,
        total_results_available=total_results_available,
        max_results_returnable=max_results_returnable,
    )
