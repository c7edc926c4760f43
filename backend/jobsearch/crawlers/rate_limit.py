from __future__ import annotations
import time
from collections import deque
from typing import Callable

from jobsearch.core.constants import RATE_LIMIT_WINDOW_SECONDS
from jobsearch.errors import RateLimited


class SlidingWindowRateLimiter:
    """At most `max_requests` acquisitions per `window_seconds`, per instance.

    Each fetcher owns one. Acquisition never awaits, so under a single event
    loop the prune-check-append sequence cannot interleave with another task.
    """

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._timestamps: deque[float] = deque()

    def _prune(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self.window_seconds:
            self._timestamps.popleft()

    def remaining(self) -> int:
        self._prune(self._clock())
        return max(0, self.max_requests - len(self._timestamps))

    def try_acquire(self) -> bool:
        now = self._clock()
        self._prune(now)
        if len(self._timestamps) >= self.max_requests:
            return False
        self._timestamps.append(now)
        return True

    def acquire(self) -> None:
        if not self.try_acquire():
            raise RateLimited(
                self.name,
                f"rate limit of {self.max_requests} requests per {int(self.window_seconds)}s exceeded",
            )

    def reconfigure(self, max_requests: int) -> None:
        self.max_requests = max_requests
