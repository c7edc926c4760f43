from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel


class SearchRunOut(BaseModel):
    id: int
    keywords: str
    location: str
    sources: list[str]
    started_at: datetime
    finished_at: datetime | None
    status: str
    fetched_count: int
    returned_count: int
    source_stats: list[dict]
    error_summary: str

    class Config:
        from_attributes = True
