from __future__ import annotations
import argparse
import asyncio
import json

from jobsearch.core.logging_config import setup_logging
from jobsearch.crawlers.registry import SourceRegistry
from jobsearch.db.database import SessionLocal
from jobsearch.db.init_db import init_db
from jobsearch.schemas.search import SearchQuery
from jobsearch.services.search_service import build_response, record_search_run, search_jobs
from jobsearch.services.settings_service import enabled_sources


async def main(query: SearchQuery) -> dict:
    registry = SourceRegistry()
    db = SessionLocal()
    try:
        fetchers = registry.fetchers_for(enabled_sources(db, query.sources))
        outcome = await search_jobs(query, fetchers)
        record_search_run(db, outcome)
        return build_response(outcome).model_dump(by_alias=True, mode="json")
    finally:
        db.close()
        await registry.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run one aggregated job search and print the response.")
    parser.add_argument("keywords")
    parser.add_argument("--location", default="")
    parser.add_argument("--limit", type=int, default=20)
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--page-size", type=int, default=10)
    parser.add_argument("--sources", default="", help="comma separated source names")
    args = parser.parse_args()

    setup_logging()
    init_db()
    query = SearchQuery(
        keywords=args.keywords,
        location=args.location,
        limit=args.limit,
        page=args.page,
        page_size=args.page_size,
        sources=[s for s in args.sources.split(",") if s.strip()] or None,
    )
    result = asyncio.run(main(query))
    print(json.dumps(result, ensure_ascii=False, indent=2))
