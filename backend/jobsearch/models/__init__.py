from __future__ import annotations
from jobsearch.models.search_run import SearchRun
from jobsearch.models.source import Source

__all__ = ["SearchRun", "Source"]
