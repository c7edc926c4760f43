from __future__ import annotations
from jobsearch.schemas.run import SearchRunOut
from jobsearch.schemas.search import JobOut, SearchQuery, SearchResponse, SourceStatusOut
from jobsearch.schemas.source import SourceOut, SourcePatch

__all__ = [
    "JobOut",
    "SearchQuery",
    "SearchResponse",
    "SearchRunOut",
    "SourceOut",
    "SourcePatch",
    "SourceStatusOut",
]
