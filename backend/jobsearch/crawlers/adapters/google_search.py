from __future__ import annotations

import logging
import math

import httpx

from jobsearch.core.config import settings
from jobsearch.core.constants import (
    GOOGLE_MAX_API_RESULTS,
    GOOGLE_MAX_RESULTS_PER_REQUEST,
    GOOGLE_REQUEST_TIMEOUT,
)
from jobsearch.crawlers.base import FetcherKind, RawJob, SourceFetcher, SourcePage
from jobsearch.crawlers.http_helpers import fetch_json
from jobsearch.errors import SourceUnavailable, UpstreamQuotaExceeded

logger = logging.getLogger(__name__)

API_URL = "https://www.googleapis.com/customsearch/v1"

JOB_TERMS = "hiring OR careers OR vacancy OR position"
SITE_FILTERS = (
    "linkedin.com",
    "indeed.com",
    "glassdoor.com",
    "stackoverflow.com/jobs",
    "alljobs.co.il",
    "drushim.co.il",
    "jobmaster.co.il",
    "techit.co.il",
)
QUOTA_REASONS = {"quotaExceeded", "rateLimitExceeded", "dailyLimitExceeded", "userRateLimitExceeded"}


def build_search_query(keywords: str, location: str = "") -> str:
    query = f"{keywords} jobs"
    if location:
        query += f" {location}"
    query += f" {JOB_TERMS}"
    query += " " + " OR ".join(f"site:{site}" for site in SITE_FILTERS)
    return query


def _is_quota_error(resp: httpx.Response) -> bool:
    if resp.status_code == 429:
        return True
    if resp.status_code != 403:
        return False
    try:
        errors = resp.json().get("error", {}).get("errors", [])
    except ValueError:
        return "quotaExceeded" in resp.text
    return any(isinstance(e, dict) and e.get("reason") in QUOTA_REASONS for e in errors)


def parse_items(items: list[dict]) -> list[RawJob]:
    jobs: list[RawJob] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        jobs.append(
            RawJob(
                title=str(item.get("title") or "").strip(),
                description=str(item.get("snippet") or "").strip(),
                url=str(item.get("link") or "").strip(),
                display_link=str(item.get("displayLink") or "").strip(),
                raw_payload={"site": "google"},
            )
        )
    return jobs


class GoogleSearchFetcher(SourceFetcher):
    """Custom Search JSON API; pages through results 10 at a time up to the API cap."""

    source_name = "google"
    kind = FetcherKind.API
    weight = 4
    timeout = 30
    max_results_returnable = GOOGLE_MAX_API_RESULTS

    def __init__(self, api_key: str | None = None, search_engine_id: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = settings.google_api_key if api_key is None else api_key
        self.search_engine_id = settings.google_search_engine_id if search_engine_id is None else search_engine_id

    async def _fetch(self, keywords: str, location: str, limit: int) -> SourcePage:
        if not self.api_key or not self.search_engine_id:
            raise SourceUnavailable(
                self.source_name,
                "Google API keys not configured, set GOOGLE_API_KEY and GOOGLE_SEARCH_ENGINE_ID",
            )

        query = build_search_query(keywords, location)
        wanted = min(limit, self.max_results_returnable)
        total_requests = math.ceil(wanted / GOOGLE_MAX_RESULTS_PER_REQUEST)
        results: list[RawJob] = []
        total_available: int | None = None

        for request_index in range(total_requests):
            num = min(GOOGLE_MAX_RESULTS_PER_REQUEST, wanted - len(results))
            if num <= 0:
                break
            params = {
                "key": self.api_key,
                "cx": self.search_engine_id,
                "q": query,
                "num": num,
                "start": 1 + request_index * GOOGLE_MAX_RESULTS_PER_REQUEST,
            }
            try:
                resp = await fetch_json(API_URL, params=params, timeout=GOOGLE_REQUEST_TIMEOUT)
            except httpx.HTTPError as exc:
                if not results:
                    raise SourceUnavailable(self.source_name, f"request failed: {exc}") from exc
                logger.warning("Google request %d failed, keeping %d results: %s", request_index + 1, len(results), exc)
                break

            if _is_quota_error(resp):
                if not results:
                    raise UpstreamQuotaExceeded(self.source_name, "Google API quota exceeded")
                logger.warning("Google quota hit on request %d, keeping %d results", request_index + 1, len(results))
                break
            if resp.status_code >= 400:
                if not results:
                    raise SourceUnavailable(self.source_name, f"status={resp.status_code} body={resp.text[:300]}")
                logger.warning("Google request %d returned status=%s", request_index + 1, resp.status_code)
                break

            payload = resp.json()
            if request_index == 0:
                raw_total = (payload.get("searchInformation") or {}).get("totalResults")
                try:
                    total_available = int(raw_total) if raw_total is not None else None
                except (TypeError, ValueError):
                    total_available = None
                logger.info("Google reports %s total results available", total_available)

            items = payload.get("items") or []
            if not items:
                break
            results.extend(parse_items(items))

        return SourcePage(
            records=results,
            total_results_available=total_available,
            max_results_returnable=self.max_results_returnable,
        )
