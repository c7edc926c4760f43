from __future__ import annotations
from jobsearch.crawlers.adapters.common import CardSelectors, HtmlListingFetcher


class JobMasterFetcher(HtmlListingFetcher):
    source_name = "jobmaster"
    base_url = "https://www.jobmaster.co.il"
    search_path = "/jobs/?q={keywords}"
    selectors = CardSelectors(
        card=(".job-item", ".job-card", ".position-item"),
        title=(".job-title", ".position-title", "h2", "h3"),
        company=(".company-name", ".employer", ".company"),
        location=(".location", ".area", ".city"),
    )
