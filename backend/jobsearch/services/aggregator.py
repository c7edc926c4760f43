from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Sequence

from jobsearch.crawlers.base import FetchResult, FetchStatus, SourceFetcher
from jobsearch.schemas.search import SearchQuery

logger = logging.getLogger(__name__)


@dataclass
class AggregateResult:
    results: list[FetchResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_results_available: int | None = None
    max_results_returnable: int | None = None

    @property
    def no_sources(self) -> bool:
        return not self.results

    @property
    def partial(self) -> bool:
        return self.no_sources or any(not r.ok for r in self.results)

    @property
    def all_failed(self) -> bool:
        return bool(self.results) and all(not r.ok for r in self.results)

    @property
    def quota_exceeded(self) -> bool:
        return any(r.status == FetchStatus.QUOTA_EXCEEDED for r in self.results)

    @property
    def fetched_count(self) -> int:
        return sum(len(r.records) for r in self.results)


def split_limit(limit: int, fetchers: Sequence[SourceFetcher]) -> dict[str, int]:
    """Share `limit` across fetchers by weight; the allotments sum to exactly `limit`.

    Largest-remainder rounding, ties broken by declaration order. A fetcher
    allotted 0 is not worth calling.
    """
    if not fetchers or limit <= 0:
        return {f.source_name: 0 for f in fetchers}

    weights = [max(f.weight, 0) for f in fetchers]
    total_weight = sum(weights) or len(fetchers)
    if not sum(weights):
        weights = [1] * len(fetchers)

    exact = [limit * w / total_weight for w in weights]
    shares = [int(x) for x in exact]
    leftover = limit - sum(shares)
    order = sorted(range(len(fetchers)), key=lambda i: (-(exact[i] - shares[i]), i))
    for i in order[:leftover]:
        shares[i] += 1
    return {f.source_name: share for f, share in zip(fetchers, shares)}


def _warning_for(result: FetchResult) -> str:
    if result.status == FetchStatus.QUOTA_EXCEEDED:
        return f"{result.source}: search quota exceeded, showing partial results"
    if result.status == FetchStatus.RATE_LIMITED:
        return f"{result.source}: rate limited, skipped for this search"
    if result.status == FetchStatus.TIMEOUT:
        return f"{result.source}: timed out"
    return f"{result.source}: unavailable ({result.error})" if result.error else f"{result.source}: unavailable"


def _sum_reported(results: list[FetchResult], allotment: dict[str, int]) -> tuple[int | None, int | None]:
    reporting = [r for r in results if r.ok and r.total_results_available is not None]
    if not reporting:
        return None, None
    others = sum(len(r.records) for r in results if r.ok and r.total_results_available is None)
    available = sum(r.total_results_available or 0 for r in reporting) + others
    # A source can only return what this request asked it for, whatever its upstream cap.
    returnable = sum(
        min(
            r.max_results_returnable if r.max_results_returnable is not None else len(r.records),
            allotment.get(r.source, len(r.records)),
        )
        for r in reporting
    )
    return available, returnable + others


def _source_warnings(query: SearchQuery, fetchers: Sequence[SourceFetcher]) -> list[str]:
    if not fetchers:
        if query.sources:
            return [f"no enabled sources match '{', '.join(query.sources)}'"]
        return ["no job sources are enabled"]
    running = {f.source_name for f in fetchers}
    return [f"{name}: no enabled source by that name" for name in (query.sources or []) if name not in running]


async def aggregate(query: SearchQuery, fetchers: Sequence[SourceFetcher]) -> AggregateResult:
    allotment = split_limit(query.limit, fetchers)
    active = [f for f in fetchers if allotment[f.source_name] > 0]
    skipped = [f.source_name for f in fetchers if allotment[f.source_name] <= 0]
    if skipped:
        logger.debug("Limit %d leaves no share for: %s", query.limit, ", ".join(skipped))

    logger.info(
        "Searching %r in %r across %s",
        query.keywords,
        query.location or "any location",
        ", ".join(f"{f.source_name}={allotment[f.source_name]}" for f in active),
    )

    outcomes = await asyncio.gather(
        *(f.fetch(query.keywords, query.location, allotment[f.source_name]) for f in active),
        return_exceptions=True,
    )

    result = AggregateResult(warnings=_source_warnings(query, fetchers))
    for fetcher, outcome in zip(active, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error("Source %s raised through its fetch wrapper: %r", fetcher.source_name, outcome)
            outcome = FetchResult(
                source=fetcher.source_name,
                status=FetchStatus.FAILED,
                error=str(outcome)[:500] or outcome.__class__.__name__,
            )
        result.results.append(outcome)
        if not outcome.ok:
            result.warnings.append(_warning_for(outcome))

    result.total_results_available, result.max_results_returnable = _sum_reported(result.results, allotment)
    logger.info(
        "Aggregated %d raw records from %d/%d sources",
        result.fetched_count,
        sum(1 for r in result.results if r.ok),
        len(result.results),
    )
    return result
