from __future__ import annotations
import logging
from dataclasses import dataclass
from urllib.parse import quote_plus, urljoin

from jobsearch.crawlers.base import FetcherKind, RawJob, SourceFetcher
from jobsearch.crawlers.http_helpers import clean_text, fetch_html, make_soup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardSelectors:
    """Ordered CSS selector candidates; the first one that matches wins."""

    card: tuple[str, ...]
    title: tuple[str, ...]
    company: tuple[str, ...]
    location: tuple[str, ...] = (".location", ".city", ".area")
    description: tuple[str, ...] = (".description", ".summary")
    salary: tuple[str, ...] = (".salary", ".wage")
    link: tuple[str, ...] = ("a[href]",)
    posted: tuple[str, ...] = ()


def first_match(card, selectors: tuple[str, ...]):
    for selector in selectors:
        el = card.select_one(selector)
        if el is not None and clean_text(el):
            return el
    return None


def first_text(card, selectors: tuple[str, ...], default: str = "") -> str:
    el = first_match(card, selectors)
    return clean_text(el) if el is not None else default


def first_link(card, selectors: tuple[str, ...], base_url: str) -> str:
    for selector in selectors:
        el = card.select_one(selector)
        href = (el.get("href") or "").strip() if el is not None else ""
        if href:
            return urljoin(base_url, href)
    return ""


def find_cards(soup, selectors: tuple[str, ...]) -> list:
    for selector in selectors:
        cards = soup.select(selector)
        if cards:
            return cards
    return []


def scrape_cards(
    html: str,
    base_url: str,
    selectors: CardSelectors,
    limit: int,
    search_url: str = "",
    fallback_location: str = "",
) -> list[RawJob]:
    soup = make_soup(html)
    cards = find_cards(soup, selectors.card)
    logger.debug("Found %d candidate cards on %s", len(cards), base_url)

    jobs: list[RawJob] = []
    for card in cards:
        if len(jobs) >= limit:
            break

        title = first_text(card, selectors.title)
        company = first_text(card, selectors.company)
        if not title:
            continue

        url = first_link(card, selectors.link, base_url) or search_url or base_url
        jobs.append(
            RawJob(
                title=title[:220],
                company=company,
                location=first_text(card, selectors.location, fallback_location),
                description=first_text(card, selectors.description)[:4000],
                salary=first_text(card, selectors.salary),
                posted_text=first_text(card, selectors.posted) if selectors.posted else "",
                url=url,
                raw_payload={"site": base_url},
            )
        )
    return jobs


class HtmlListingFetcher(SourceFetcher):
    """Plain-HTTP search-results page scraped with a selector table."""

    kind = FetcherKind.HTTP
    base_url: str
    search_path: str = "/?q={keywords}"
    selectors: CardSelectors
    fallback_location: str = "Israel"

    def build_search_url(self, keywords: str, location: str) -> str:
        path = self.search_path.format(keywords=quote_plus(keywords), location=quote_plus(location or ""))
        return urljoin(self.base_url, path)

    async def _fetch(self, keywords: str, location: str, limit: int) -> list[RawJob]:
        search_url = self.build_search_url(keywords, location)
        logger.info("Scraping %s: %s", self.source_name, search_url)
        html = await fetch_html(search_url, timeout=self.timeout)
        jobs = scrape_cards(
            html,
            self.base_url,
            self.selectors,
            limit,
            search_url=search_url,
            fallback_location=location or self.fallback_location,
        )
        if not jobs:
            logger.info("Source %s: no job cards matched, page layout may be script-rendered", self.source_name)
        return jobs
