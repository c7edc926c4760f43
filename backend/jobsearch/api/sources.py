from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobsearch.api.deps import get_registry
from jobsearch.crawlers.registry import SourceRegistry
from jobsearch.db.database import get_db
from jobsearch.models.source import Source
from jobsearch.schemas.source import SourceOut, SourcePatch
from jobsearch.services.settings_service import update_source

router = APIRouter(prefix="/sources", tags=["sources"])


@router.get("", response_model=list[SourceOut])
def list_sources(db: Session = Depends(get_db)):
    return db.query(Source).order_by(Source.id.asc()).all()


@router.patch("/{source_id}", response_model=SourceOut)
def patch_source(
    source_id: int,
    body: SourcePatch,
    db: Session = Depends(get_db),
    registry: SourceRegistry = Depends(get_registry),
):
    row = db.query(Source).filter(Source.id == source_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="source not found")
    row = update_source(db, row, enabled=body.enabled, rate_limit_per_minute=body.rate_limit_per_minute)
    if body.rate_limit_per_minute is not None:
        registry.get(row.name, row.rate_limit_per_minute)
    return row
