from __future__ import annotations
import logging
from typing import Iterable, Protocol

from jobsearch.crawlers.adapters.alljobs import AllJobsFetcher
from jobsearch.crawlers.adapters.drushim import DrushimFetcher
from jobsearch.crawlers.adapters.google_search import GoogleSearchFetcher
from jobsearch.crawlers.adapters.jobmaster import JobMasterFetcher
from jobsearch.crawlers.adapters.jobnet import JobNetFetcher
from jobsearch.crawlers.adapters.linkedin import LinkedInFetcher
from jobsearch.crawlers.adapters.synthetic import SyntheticFetcher
from jobsearch.crawlers.adapters.techit import TechItFetcher
from jobsearch.crawlers.base import FetcherKind, SourceFetcher
from jobsearch.crawlers.browser import BrowserPool

logger = logging.getLogger(__name__)

FETCHERS: dict[str, type[SourceFetcher]] = {
    "google": GoogleSearchFetcher,
    "linkedin": LinkedInFetcher,
    "alljobs": AllJobsFetcher,
    "drushim": DrushimFetcher,
    "techit": TechItFetcher,
    "jobnet": JobNetFetcher,
    "jobmaster": JobMasterFetcher,
    "synthetic": SyntheticFetcher,
}


class SourceConfig(Protocol):
    name: str
    rate_limit_per_minute: int


class SourceRegistry:
    """Long-lived fetcher instances, one per source, so rate-limit windows persist."""

    def __init__(self, browser_pool: BrowserPool | None = None):
        self.browser_pool = browser_pool or BrowserPool()
        self._fetchers: dict[str, SourceFetcher] = {}

    def register(self, fetcher: SourceFetcher) -> None:
        self._fetchers[fetcher.source_name] = fetcher

    def get(self, name: str, rate_limit_per_minute: int | None = None) -> SourceFetcher | None:
        fetcher = self._fetchers.get(name)
        if fetcher is None:
            fetcher_cls = FETCHERS.get(name)
            if fetcher_cls is None:
                logger.warning("Unknown job source: %s", name)
                return None
            if fetcher_cls.kind == FetcherKind.BROWSER:
                fetcher = fetcher_cls(self.browser_pool, rate_limit_per_minute=rate_limit_per_minute)
            else:
                fetcher = fetcher_cls(rate_limit_per_minute=rate_limit_per_minute)
            self._fetchers[name] = fetcher
        elif rate_limit_per_minute and fetcher.rate_limiter.max_requests != rate_limit_per_minute:
            fetcher.rate_limiter.reconfigure(rate_limit_per_minute)
        return fetcher

    def fetchers_for(self, configs: Iterable[SourceConfig]) -> list[SourceFetcher]:
        fetchers: list[SourceFetcher] = []
        for cfg in configs:
            fetcher = self.get(cfg.name, cfg.rate_limit_per_minute)
            if fetcher is not None:
                fetchers.append(fetcher)
        return fetchers

    async def close(self) -> None:
        if self.browser_pool.started:
            await self.browser_pool.close()
