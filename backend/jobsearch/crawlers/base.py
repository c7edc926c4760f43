from __future__ import annotations
import asyncio
import enum
import logging
import time
from dataclasses import dataclass, field
from datetime import date

from jobsearch.core.config import settings
from jobsearch.crawlers.rate_limit import SlidingWindowRateLimiter
from jobsearch.errors import RateLimited, SourceError, UpstreamQuotaExceeded

logger = logging.getLogger(__name__)


class FetcherKind(str, enum.Enum):
    BROWSER = "browser"
    HTTP = "http"
    API = "api"
    SYNTHETIC = "synthetic"


@dataclass
class RawJob:
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    url: str = ""
    salary: str = ""
    posted_text: str = ""
    employment_type: str = ""
    experience_level: str = ""
    display_link: str = ""
    source_job_id: str | None = None
    requirements: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    raw_payload: dict = field(default_factory=dict)


@dataclass(frozen=True)
class JobPosting:
    id: str
    title: str
    company: str
    location: str
    description: str
    source: str
    original_url: str
    posted_date: date
    site: str = ""
    employment_type: str = "full-time"
    experience_level: str = "mid"
    salary: str | None = None
    requirements: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    is_active: bool = True
    is_remote: bool = False
    match_score: float | None = None
    annotations: dict = field(default_factory=dict)


class FetchStatus(str, enum.Enum):
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"


@dataclass
class FetchResult:
    source: str
    records: list[RawJob] = field(default_factory=list)
    status: FetchStatus = FetchStatus.SUCCESS
    error: str = ""
    total_results_available: int | None = None
    max_results_returnable: int | None = None
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.SUCCESS


@dataclass
class SourcePage:
    """What `_fetch` hands back when a source knows more than its records."""

    records: list[RawJob]
    total_results_available: int | None = None
    max_results_returnable: int | None = None


class SourceFetcher:
    source_name: str
    kind: FetcherKind = FetcherKind.HTTP
    weight: int = 1
    timeout: float = 15

    def __init__(self, rate_limit_per_minute: int | None = None, timeout: float | None = None):
        if timeout is not None:
            self.timeout = timeout
        self.rate_limiter = SlidingWindowRateLimiter(
            self.source_name,
            rate_limit_per_minute or settings.default_rate_limit_per_minute,
        )

    async def _fetch(self, keywords: str, location: str, limit: int) -> list[RawJob] | SourcePage:
        raise NotImplementedError

    async def fetch(self, keywords: str, location: str, limit: int) -> FetchResult:
        started = time.monotonic()
        result = FetchResult(source=self.source_name)
        try:
            self.rate_limiter.acquire()
            payload = await asyncio.wait_for(self._fetch(keywords, location, limit), timeout=self.timeout)
        except RateLimited as exc:
            result.status = FetchStatus.RATE_LIMITED
            result.error = exc.message
            logger.warning("Source %s skipped: %s", self.source_name, exc.message)
        except asyncio.TimeoutError:
            result.status = FetchStatus.TIMEOUT
            result.error = f"timed out after {self.timeout}s"
            logger.warning("Source %s timed out after %ss", self.source_name, self.timeout)
        except UpstreamQuotaExceeded as exc:
            result.status = FetchStatus.QUOTA_EXCEEDED
            result.error = exc.message
            logger.error("Source %s quota exceeded: %s", self.source_name, exc.message)
        except SourceError as exc:
            result.status = FetchStatus.FAILED
            result.error = exc.message
            logger.error("Source %s unavailable: %s", self.source_name, exc.message)
        except Exception as exc:  # noqa: BLE001
            result.status = FetchStatus.FAILED
            result.error = str(exc)[:500] or exc.__class__.__name__
            logger.exception("Source %s failed", self.source_name)
        else:
            if isinstance(payload, SourcePage):
                result.records = list(payload.records)[:limit]
                result.total_results_available = payload.total_results_available
                result.max_results_returnable = payload.max_results_returnable
            else:
                result.records = list(payload)[:limit]
            logger.info("Source %s returned %d records", self.source_name, len(result.records))
        result.elapsed_ms = int((time.monotonic() - started) * 1000)
        return result
