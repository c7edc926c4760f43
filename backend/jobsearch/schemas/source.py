from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, Field


class SourceOut(BaseModel):
    id: int
    name: str
    base_url: str
    kind: str
    enabled: bool
    rate_limit_per_minute: int
    created_at: datetime

    class Config:
        from_attributes = True


class SourcePatch(BaseModel):
    enabled: bool | None = None
    rate_limit_per_minute: int | None = Field(default=None, ge=1, le=600)
