from __future__ import annotations
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobsearch.db.database import get_db
from jobsearch.schemas.run import SearchRunOut
from jobsearch.services.search_service import list_runs

router = APIRouter(prefix="/runs", tags=["runs"])


@router.get("", response_model=list[SearchRunOut])
def get_runs(
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return list_runs(db, limit)
