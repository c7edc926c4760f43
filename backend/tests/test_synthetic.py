from __future__ import annotations
from datetime import date, timedelta

import pytest

from jobsearch.crawlers.adapters.synthetic import MAX_AGE_DAYS, SyntheticFetcher
from jobsearch.pipeline.normalize import normalize


@pytest.mark.asyncio
async def test_synthetic_postings_are_built_from_keywords():
    result = await SyntheticFetcher(seed=7).fetch("React", "", 5)

    assert result.ok
    assert len(result.records) == 5
    for raw in result.records:
        assert "React" in raw.title
        assert raw.salary.startswith("₪")
        assert raw.raw_payload["generated"] is True
        assert raw.url.startswith("https://example.com/jobs/")


@pytest.mark.asyncio
async def test_same_seed_same_postings():
    a = await SyntheticFetcher(seed=42).fetch("Python", "Haifa", 4)
    b = await SyntheticFetcher(seed=42).fetch("Python", "Haifa", 4)

    assert [(r.title, r.company, r.salary) for r in a.records] == [(r.title, r.company, r.salary) for r in b.records]
    assert {r.location for r in a.records} == {"Haifa"}


@pytest.mark.asyncio
async def test_synthetic_dates_stay_recent():
    today = date(2026, 10, 19)
    result = await SyntheticFetcher(seed=3).fetch("QA", "", 20)

    for raw in result.records:
        job = normalize(raw, "synthetic", "QA", today)
        assert today - timedelta(days=MAX_AGE_DAYS) <= job.posted_date <= today
