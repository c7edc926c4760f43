from __future__ import annotations

import re
from urllib.parse import urljoin, urlsplit, urlunsplit

from jobsearch.crawlers.base import RawJob, SourceFetcher
from jobsearch.crawlers.http_helpers import clean_text, fetch_html, make_soup

SEARCH_URL = "https://www.linkedin.com/jobs/search/"


class LinkedInFetcher(SourceFetcher):
    source_name = "linkedin"
    weight = 3

    async def _fetch(self, keywords: str, location: str, limit: int) -> list[RawJob]:
        params = {"keywords": keywords}
        if location:
            params["location"] = location
        html = await fetch_html(SEARCH_URL, timeout=self.timeout, params=params)
        soup = make_soup(html)
        jobs: list[RawJob] = []
        seen: set[str] = set()

        cards = soup.select("div.base-card, div.base-search-card")
        for card in cards:
            if len(jobs) >= limit:
                break
            title_el = card.select_one("h3.base-search-card__title") or card.select_one("h3")
            company_el = card.select_one("h4.base-search-card__subtitle a") or card.select_one(
                "h4.base-search-card__subtitle"
            )
            location_el = card.select_one(".job-search-card__location")
            job_link_el = card.select_one("a.base-card__full-link[href*='/jobs/view/']")
            time_el = card.select_one("time")

            if not title_el or not job_link_el:
                continue

            job_url = urljoin("https://www.linkedin.com", job_link_el.get("href", ""))
            if not job_url or job_url in seen:
                continue

            # Keep canonical job link stable across searches.
            parsed = urlsplit(job_url)
            canonical_url = urlunsplit((parsed.scheme, parsed.netloc, parsed.path, "", ""))

            job_id = None
            match = re.search(r"/jobs/view/.*-(\d+)", parsed.path)
            if match:
                job_id = match.group(1)

            jobs.append(
                RawJob(
                    source_job_id=job_id,
                    url=canonical_url,
                    title=clean_text(title_el),
                    company=clean_text(company_el),
                    location=clean_text(location_el),
                    posted_text=clean_text(time_el),
                    raw_payload={"site": "linkedin", "posted_at": time_el.get("datetime", "") if time_el else ""},
                )
            )
            seen.add(job_url)

        return jobs
