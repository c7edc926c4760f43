from __future__ import annotations
from dataclasses import dataclass

from jobsearch.crawlers.adapters.drushim import DrushimFetcher
from jobsearch.crawlers.adapters.google_search import GoogleSearchFetcher
from jobsearch.crawlers.browser import BrowserPool
from jobsearch.crawlers.registry import FETCHERS, SourceRegistry


@dataclass
class Cfg:
    name: str
    rate_limit_per_minute: int = 10


def test_fetchers_are_long_lived_per_source():
    registry = SourceRegistry(BrowserPool(headless=True))

    first = registry.get("google", 5)
    second = registry.get("google", 5)

    assert isinstance(first, GoogleSearchFetcher)
    assert first is second
    assert first.rate_limiter.max_requests == 5


def test_rate_limit_change_is_applied_to_existing_fetcher():
    registry = SourceRegistry(BrowserPool(headless=True))
    fetcher = registry.get("alljobs", 5)
    fetcher.rate_limiter.acquire()

    assert registry.get("alljobs", 1) is fetcher
    assert fetcher.rate_limiter.max_requests == 1
    assert not fetcher.rate_limiter.try_acquire()


def test_browser_fetchers_share_the_pool():
    pool = BrowserPool(headless=True)
    registry = SourceRegistry(pool)

    fetcher = registry.get("drushim")

    assert isinstance(fetcher, DrushimFetcher)
    assert fetcher.browser_pool is pool


def test_fetchers_for_skips_unknown_sources_and_keeps_order():
    registry = SourceRegistry(BrowserPool(headless=True))

    fetchers = registry.fetchers_for([Cfg("techit"), Cfg("monster"), Cfg("alljobs")])

    assert [f.source_name for f in fetchers] == ["techit", "alljobs"]
    assert registry.get("monster") is None
    assert set(FETCHERS) >= {"google", "linkedin", "alljobs", "drushim", "techit", "jobnet", "jobmaster", "synthetic"}
