from __future__ import annotations
from sqlalchemy.orm import Session

from jobsearch.models.source import Source


def enabled_sources(db: Session, names: list[str] | None = None) -> list[Source]:
    """Enabled sources in declaration order, optionally narrowed to `names`."""
    query = db.query(Source).filter(Source.enabled.is_(True))
    if names:
        wanted = [n.strip().lower() for n in names if n.strip()]
        query = query.filter(Source.name.in_(wanted))
    return query.order_by(Source.id.asc()).all()


def update_source(db: Session, row: Source, enabled: bool | None = None, rate_limit_per_minute: int | None = None) -> Source:
    if enabled is not None:
        row.enabled = enabled
    if rate_limit_per_minute is not None:
        row.rate_limit_per_minute = rate_limit_per_minute
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
