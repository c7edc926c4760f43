from __future__ import annotations

from jobsearch.core.config import settings
from jobsearch.crawlers.registry import FETCHERS
from jobsearch.db.database import SessionLocal
from jobsearch.models.source import Source


def default_sources() -> list[tuple[str, str, bool]]:
    return [
        ("google", "https://www.googleapis.com/customsearch/v1", bool(settings.google_api_key)),
        ("linkedin", "https://www.linkedin.com/jobs", True),
        ("alljobs", "https://www.alljobs.co.il", True),
        ("drushim", "https://www.drushim.co.il", True),
        ("techit", "https://www.techit.co.il", True),
        ("jobnet", "https://www.jobnet.co.il", True),
        ("jobmaster", "https://www.jobmaster.co.il", True),
        ("synthetic", "https://example.com", not settings.is_production),
    ]


def seed_sources_if_empty() -> None:
    db = SessionLocal()
    try:
        existing = {s.name: s for s in db.query(Source).all()}
        for name, base_url, enabled in default_sources():
            kind = FETCHERS[name].kind.value
            row = existing.get(name)
            if row is None:
                db.add(
                    Source(
                        name=name,
                        base_url=base_url,
                        kind=kind,
                        enabled=enabled,
                        rate_limit_per_minute=settings.default_rate_limit_per_minute,
                    )
                )
            else:
                # Operator toggles survive restarts; only the descriptive columns are refreshed.
                row.base_url = base_url
                row.kind = kind
                db.add(row)
        db.commit()
    finally:
        db.close()
