from __future__ import annotations
from jobsearch.crawlers.adapters.common import CardSelectors, HtmlListingFetcher


class JobNetFetcher(HtmlListingFetcher):
    source_name = "jobnet"
    base_url = "https://www.jobnet.co.il"
    search_path = "/jobs?q={keywords}"
    selectors = CardSelectors(
        card=(".job", ".job-item", ".position-card"),
        title=(".title", ".job-title", "h3"),
        company=(".company", ".employer"),
        location=(".location", ".city"),
    )
