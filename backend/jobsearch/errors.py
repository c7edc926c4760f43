from __future__ import annotations


class JobSearchError(Exception):
    """Base exception for the search pipeline."""

    kind = "JobSearchError"


class InvalidQuery(JobSearchError):
    """The caller's query cannot be served (e.g. missing keywords)."""

    kind = "InvalidQuery"


class SourceError(JobSearchError):
    """A single source failed. Absorbed by the aggregator, never fatal for a request."""

    kind = "SourceError"

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class SourceUnavailable(SourceError):
    kind = "SourceUnavailable"


class RateLimited(SourceError):
    kind = "RateLimited"


class UpstreamQuotaExceeded(SourceError):
    kind = "UpstreamQuotaExceeded"
