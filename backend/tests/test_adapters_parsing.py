from __future__ import annotations
from contextlib import asynccontextmanager

import pytest

from jobsearch.crawlers.adapters import alljobs, common, drushim, linkedin, techit
from jobsearch.crawlers.base import FetchStatus


def _serve(html: str, seen: list | None = None):
    async def fake_fetch_html(url, *_args, **kwargs):
        if seen is not None:
            seen.append((url, kwargs.get("params")))
        return html

    return fake_fetch_html


@pytest.mark.asyncio
async def test_alljobs_cards_are_scraped(monkeypatch):
    html = """
    <div class='JobListRow'>
      <div class='JobTitle'><a href='/Search/UploadSingle.aspx?JobID=1'>Python Developer</a></div>
      <div class='CompanyName'>Wix</div>
      <div class='JobLocation'>Tel   Aviv</div>
      <div class='JobDescription'>Build backend services</div>
    </div>
    <div class='JobListRow'><div class='CompanyName'>No title here</div></div>
    """
    seen: list = []
    monkeypatch.setattr(common, "fetch_html", _serve(html, seen))

    result = await alljobs.AllJobsFetcher().fetch("python", "", 10)

    assert result.status == FetchStatus.SUCCESS
    assert len(result.records) == 1
    job = result.records[0]
    assert job.title == "Python Developer"
    assert job.company == "Wix"
    assert job.location == "Tel Aviv"
    assert job.url == "https://www.alljobs.co.il/Search/UploadSingle.aspx?JobID=1"
    assert seen[0][0] == "https://www.alljobs.co.il/?q=python"


@pytest.mark.asyncio
async def test_techit_card_without_link_points_at_search_page(monkeypatch):
    html = """
    <div class='job-card'>
      <h3>DevOps Engineer</h3>
      <span class='company'>Check Point</span>
    </div>
    """
    monkeypatch.setattr(common, "fetch_html", _serve(html))

    result = await techit.TechItFetcher().fetch("devops engineer", "", 10)

    job = result.records[0]
    assert job.url == "https://www.techit.co.il/jobs?q=devops+engineer"
    assert job.location == "Tel Aviv, Israel"


def test_scrape_cards_respects_limit():
    cards = "".join(
        f"<div class='job-item'><h2>Role {i}</h2><div class='company'>Co {i}</div></div>" for i in range(6)
    )
    selectors = common.CardSelectors(card=(".job-item",), title=("h2",), company=(".company",))

    jobs = common.scrape_cards(cards, "https://board.example", selectors, limit=4)

    assert [j.title for j in jobs] == ["Role 0", "Role 1", "Role 2", "Role 3"]
    assert jobs[0].url == "https://board.example"


@pytest.mark.asyncio
async def test_linkedin_fetcher_extracts_company(monkeypatch):
    html = """
    <div class='base-card'>
      <a class='base-card__full-link' href='https://www.linkedin.com/jobs/view/senior-react-developer-12345?trk=x'>open</a>
      <h3 class='base-search-card__title'>Senior React Developer</h3>
      <h4 class='base-search-card__subtitle'><a href='/company/wix'>Wix</a></h4>
      <span class='job-search-card__location'>Tel Aviv, Israel</span>
      <time datetime='2026-10-17'>2 days ago</time>
    </div>
    <div class='base-card'>
      <h3 class='base-search-card__title'>No link</h3>
    </div>
    """
    seen: list = []
    monkeypatch.setattr(linkedin, "fetch_html", _serve(html, seen))

    result = await linkedin.LinkedInFetcher().fetch("react", "Israel", 10)

    assert len(result.records) == 1
    job = result.records[0]
    assert job.title == "Senior React Developer"
    assert job.company == "Wix"
    assert job.source_job_id == "12345"
    assert job.url == "https://www.linkedin.com/jobs/view/senior-react-developer-12345"
    assert job.posted_text == "2 days ago"
    assert seen[0][1] == {"keywords": "react", "location": "Israel"}


@pytest.mark.asyncio
async def test_board_http_error_is_a_failed_result(monkeypatch):
    async def broken(*_args, **_kwargs):
        raise ConnectionError("dns failure")

    monkeypatch.setattr(common, "fetch_html", broken)

    result = await alljobs.AllJobsFetcher().fetch("python", "", 10)

    assert result.status == FetchStatus.FAILED
    assert result.records == []


class FakePage:
    def __init__(self, html):
        self.html = html
        self.visited = []

    async def goto(self, url, **_kwargs):
        self.visited.append(url)

    async def content(self):
        return self.html


class FakePool:
    def __init__(self, html):
        self.pages = []
        self.html = html

    @asynccontextmanager
    async def page(self):
        page = FakePage(self.html)
        self.pages.append(page)
        yield page


@pytest.mark.asyncio
async def test_drushim_renders_through_browser_pool():
    html = """
    <div class='job-item-wrapper'>
      <a class='job-link' href='/job/777/'>Full Stack Developer</a>
      <span class='employer'>Fiverr</span>
      <span class='location'>Tel Aviv</span>
    </div>
    """
    pool = FakePool(html)
    fetcher = drushim.DrushimFetcher(pool)
    fetcher.settle_seconds = 0

    result = await fetcher.fetch("full stack", "", 10)

    assert result.ok
    assert pool.pages[0].visited == ["https://www.drushim.co.il/jobs/search/?q=full+stack"]
    job = result.records[0]
    assert job.title == "Full Stack Developer"
    assert job.company == "Fiverr"
    assert job.url == "https://www.drushim.co.il/job/777/"
