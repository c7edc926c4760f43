from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote_plus

from jobsearch.crawlers.adapters.common import CardSelectors, scrape_cards
from jobsearch.crawlers.base import FetcherKind, RawJob, SourceFetcher
from jobsearch.crawlers.browser import BrowserPool

logger = logging.getLogger(__name__)

BASE_URL = "https://www.drushim.co.il"

SELECTORS = CardSelectors(
    card=(".job-item-wrapper", ".job-result", ".position", ".job-card", "[class*='job-item']"),
    title=(".job-link", ".job-title", "h2", "h3", ".title", "[class*='title']"),
    company=(".employer", ".company", ".company-name", "[class*='company']"),
    location=(".location", ".area", ".city", "[class*='location']"),
    description=(".job-teaser", ".description", ".desc", ".summary"),
    link=("a.job-link[href]", "a[href*='/job']", "a[href]"),
)


class DrushimFetcher(SourceFetcher):
    """Drushim renders results client-side, so it goes through the shared browser."""

    source_name = "drushim"
    kind = FetcherKind.BROWSER
    weight = 2
    timeout = 30
    settle_seconds = 3.0

    def __init__(self, browser_pool: BrowserPool, **kwargs):
        super().__init__(**kwargs)
        self.browser_pool = browser_pool

    async def _fetch(self, keywords: str, location: str, limit: int) -> list[RawJob]:
        search_url = f"{BASE_URL}/jobs/search/?q={quote_plus(keywords)}"
        async with self.browser_pool.page() as page:
            logger.info("Browser navigating to %s", search_url)
            await page.goto(search_url, wait_until="networkidle", timeout=int(self.timeout * 1000))
            if self.settle_seconds:
                await asyncio.sleep(self.settle_seconds)
            html = await page.content()

        return scrape_cards(
            html,
            BASE_URL,
            SELECTORS,
            limit,
            search_url=search_url,
            fallback_location=location or "Israel",
        )
