from __future__ import annotations
from jobsearch.crawlers.adapters.common import CardSelectors, HtmlListingFetcher


class TechItFetcher(HtmlListingFetcher):
    source_name = "techit"
    base_url = "https://www.techit.co.il"
    search_path = "/jobs?q={keywords}"
    fallback_location = "Tel Aviv, Israel"
    selectors = CardSelectors(
        card=(".job-card", ".job-item", ".position-item"),
        title=(".job-title", ".position-title", "h2", "h3"),
        company=(".company", ".employer", ".company-name"),
        location=(".location", ".area", ".city"),
        description=(".description", ".job-desc"),
    )
