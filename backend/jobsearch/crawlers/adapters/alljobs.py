from __future__ import annotations
from jobsearch.crawlers.adapters.common import CardSelectors, HtmlListingFetcher


class AllJobsFetcher(HtmlListingFetcher):
    source_name = "alljobs"
    weight = 2
    base_url = "https://www.alljobs.co.il"
    search_path = "/?q={keywords}"
    selectors = CardSelectors(
        card=(".JobListRow", ".JobListItem", ".job-row", ".job-item"),
        title=(".JobTitle a", ".job-title a", "h2 a", "h3 a", ".JobTitle", ".job-title", "h2", "h3"),
        company=(".CompanyName", ".company-name", ".company"),
        location=(".JobLocation", ".job-location", ".location"),
        description=(".JobDescription", ".job-description", ".description"),
        salary=(".salary", ".Salary", ".wage"),
        link=(".JobTitle a[href]", ".job-title a[href]", "h2 a[href]", "h3 a[href]", "a[href]"),
    )
