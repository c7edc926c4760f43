from __future__ import annotations
from datetime import date

import pytest

from jobsearch.crawlers.base import FetchStatus, RawJob, SourceFetcher, SourcePage
from jobsearch.schemas.search import SearchQuery
from jobsearch.services.aggregator import aggregate, split_limit
from jobsearch.services.search_service import search_jobs

TODAY = date(2026, 10, 19)


class FakeFetcher(SourceFetcher):
    def __init__(self, name, records=None, weight=1, error=None, page=None):
        self.source_name = name
        self.weight = weight
        super().__init__(rate_limit_per_minute=100)
        self.records = records or []
        self.error = error
        self.page = page
        self.limits: list[int] = []

    async def _fetch(self, keywords, location, limit):
        self.limits.append(limit)
        if self.error:
            raise self.error
        return self.page or self.records


class ContractBreakingFetcher(FakeFetcher):
    async def fetch(self, keywords, location, limit):
        raise RuntimeError("fetch wrapper bypassed")


def test_split_limit_is_proportional_and_exact():
    fetchers = [FakeFetcher("a", weight=4), FakeFetcher("b", weight=3), FakeFetcher("c", weight=2)]

    shares = split_limit(100, fetchers)

    assert shares == {"a": 45, "b": 33, "c": 22}
    assert sum(shares.values()) == 100


def test_split_limit_can_leave_sources_out():
    fetchers = [FakeFetcher("a"), FakeFetcher("b"), FakeFetcher("c")]
    assert split_limit(2, fetchers) == {"a": 1, "b": 1, "c": 0}
    assert split_limit(10, []) == {}


@pytest.mark.asyncio
async def test_zero_share_sources_are_not_called():
    fetchers = [FakeFetcher("a"), FakeFetcher("b"), FakeFetcher("c")]

    result = await aggregate(SearchQuery(keywords="dev", limit=2), fetchers)

    assert [r.source for r in result.results] == ["a", "b"]
    assert fetchers[2].limits == []


@pytest.mark.asyncio
async def test_one_failing_source_does_not_sink_the_search():
    good = FakeFetcher("alljobs", [RawJob(title=f"Dev {i}", company="Acme") for i in range(5)])
    bad = FakeFetcher("techit", error=RuntimeError("connection reset"))

    outcome = await search_jobs(SearchQuery(keywords="dev"), [bad, good], TODAY)

    assert outcome.page.total_count == 5
    assert outcome.aggregate.partial is True
    assert outcome.aggregate.all_failed is False
    assert [r.status for r in outcome.aggregate.results] == [FetchStatus.FAILED, FetchStatus.SUCCESS]
    assert outcome.aggregate.warnings == ["techit: unavailable (connection reset)"]
    assert outcome.status == "partial"


@pytest.mark.asyncio
async def test_duplicates_across_sources_collapse_to_first():
    first = FakeFetcher("alljobs", [RawJob(title="Frontend Developer", company="Acme", source_job_id="1")])
    second = FakeFetcher("jobnet", [RawJob(title="frontend developer", company="ACME", source_job_id="2")])
    broken = FakeFetcher("drushim", error=TimeoutError("slow"))

    outcome = await search_jobs(SearchQuery(keywords="frontend"), [first, second, broken], TODAY)

    assert outcome.page.total_count == 1
    assert outcome.page.items[0].id == "alljobs-1"
    assert outcome.message == "Found 1 jobs for 'frontend'"


@pytest.mark.asyncio
async def test_contract_breaking_fetcher_is_recorded_as_failed():
    good = FakeFetcher("alljobs", [RawJob(title="Dev", company="Acme")])
    rogue = ContractBreakingFetcher("rogue")

    result = await aggregate(SearchQuery(keywords="dev"), [good, rogue])

    assert [r.status for r in result.results] == [FetchStatus.SUCCESS, FetchStatus.FAILED]
    assert "fetch wrapper bypassed" in result.results[1].error
    assert result.partial


@pytest.mark.asyncio
async def test_reported_totals_are_summed():
    google = FakeFetcher(
        "google",
        page=SourcePage(
            records=[RawJob(title=f"Engineer {i}", company="Wix") for i in range(3)],
            total_results_available=4500,
            max_results_returnable=100,
        ),
    )
    board = FakeFetcher("alljobs", [RawJob(title="Dev", company="Acme"), RawJob(title="QA", company="Acme")])

    result = await aggregate(SearchQuery(keywords="dev"), [google, board])

    assert result.total_results_available == 4502
    # google was only asked for its share of 50
    assert result.max_results_returnable == 52
    assert result.fetched_count == 5


@pytest.mark.asyncio
async def test_all_sources_failing_still_returns_an_outcome():
    outcome = await search_jobs(
        SearchQuery(keywords="dev"),
        [FakeFetcher("a", error=RuntimeError("x")), FakeFetcher("b", error=RuntimeError("y"))],
        TODAY,
    )

    assert outcome.page.items == []
    assert outcome.status == "failed"
    assert outcome.message == "No sources could be reached for 'dev'"


@pytest.mark.asyncio
async def test_total_pages_only_count_pages_that_can_be_filled():
    google = FakeFetcher(
        "google",
        weight=4,
        page=SourcePage(
            records=[RawJob(title=f"Engineer {i}", company="Wix") for i in range(23)],
            total_results_available=4500,
            max_results_returnable=100,
        ),
    )
    board = FakeFetcher("alljobs", [RawJob(title=f"Engineer {i}", company="Acme") for i in range(5)], weight=3)

    outcome = await search_jobs(SearchQuery(keywords="engineer", limit=40, page_size=10), [google, board], TODAY)

    assert google.limits == [23]
    assert outcome.aggregate.max_results_returnable == 28
    assert outcome.page.total_pages == 3
    assert len(outcome.page.items) == 10

    last = await search_jobs(SearchQuery(keywords="engineer", limit=40, page_size=10, page=3), [google, board], TODAY)
    assert len(last.page.items) == 8

    filtered = await search_jobs(
        SearchQuery(keywords="engineer", limit=40, page_size=10, employment_type="contract"), [google, board], TODAY
    )
    assert filtered.page.total_count == 0
    assert filtered.page.total_pages == 0


@pytest.mark.asyncio
async def test_no_matching_source_is_reported():
    outcome = await search_jobs(SearchQuery(keywords="dev", sources=["typo"]), [], TODAY)

    assert outcome.aggregate.results == []
    assert outcome.aggregate.warnings == ["no enabled sources match 'typo'"]
    assert outcome.aggregate.partial is True
    assert outcome.status == "failed"
    assert outcome.message == "No enabled sources to search for 'dev'"

    result = await aggregate(SearchQuery(keywords="dev"), [])
    assert result.warnings == ["no job sources are enabled"]


@pytest.mark.asyncio
async def test_unknown_source_name_is_warned_about():
    board = FakeFetcher("alljobs", [RawJob(title="Dev", company="Acme")])

    result = await aggregate(SearchQuery(keywords="dev", sources=["alljobs", "typo"]), [board])

    assert result.warnings == ["typo: no enabled source by that name"]
    assert result.fetched_count == 1
    assert result.partial is False
