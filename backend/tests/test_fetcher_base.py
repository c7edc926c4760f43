from __future__ import annotations
import asyncio

import pytest

from jobsearch.crawlers.base import FetchStatus, RawJob, SourceFetcher, SourcePage
from jobsearch.errors import SourceUnavailable, UpstreamQuotaExceeded


class StaticFetcher(SourceFetcher):
    source_name = "static"

    def __init__(self, records=None, **kwargs):
        super().__init__(**kwargs)
        self.records = records or []
        self.calls = 0

    async def _fetch(self, keywords, location, limit):
        self.calls += 1
        return self.records


class SlowFetcher(SourceFetcher):
    source_name = "slow"
    timeout = 0.05

    async def _fetch(self, keywords, location, limit):
        await asyncio.sleep(5)
        return []


class RaisingFetcher(SourceFetcher):
    source_name = "raising"

    def __init__(self, exc, **kwargs):
        super().__init__(**kwargs)
        self.exc = exc

    async def _fetch(self, keywords, location, limit):
        raise self.exc


@pytest.mark.asyncio
async def test_success_truncates_to_limit():
    fetcher = StaticFetcher([RawJob(title=f"Job {i}", company="Acme") for i in range(5)])

    result = await fetcher.fetch("python", "", 3)

    assert result.ok
    assert result.status == FetchStatus.SUCCESS
    assert [r.title for r in result.records] == ["Job 0", "Job 1", "Job 2"]
    assert result.elapsed_ms >= 0


@pytest.mark.asyncio
async def test_source_page_totals_are_carried():
    class PagedFetcher(SourceFetcher):
        source_name = "paged"

        async def _fetch(self, keywords, location, limit):
            return SourcePage(records=[RawJob(title="A", company="B")], total_results_available=4500, max_results_returnable=100)

    result = await PagedFetcher().fetch("python", "", 10)

    assert result.total_results_available == 4500
    assert result.max_results_returnable == 100
    assert len(result.records) == 1


@pytest.mark.asyncio
async def test_timeout_becomes_timeout_status():
    result = await SlowFetcher().fetch("python", "", 10)

    assert result.status == FetchStatus.TIMEOUT
    assert result.records == []
    assert "timed out" in result.error


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc, status",
    [
        (RuntimeError("boom"), FetchStatus.FAILED),
        (SourceUnavailable("raising", "status=503"), FetchStatus.FAILED),
        (UpstreamQuotaExceeded("raising", "quota"), FetchStatus.QUOTA_EXCEEDED),
    ],
)
async def test_errors_never_escape_fetch(exc, status):
    result = await RaisingFetcher(exc).fetch("python", "", 10)

    assert result.status == status
    assert result.records == []
    assert result.error


@pytest.mark.asyncio
async def test_rate_limited_source_is_skipped_without_calling_upstream():
    fetcher = StaticFetcher([RawJob(title="A", company="B")], rate_limit_per_minute=1)

    first = await fetcher.fetch("python", "", 10)
    second = await fetcher.fetch("python", "", 10)

    assert first.ok
    assert second.status == FetchStatus.RATE_LIMITED
    assert fetcher.calls == 1
