from __future__ import annotations

DEFAULT_PAGE = 1
DEFAULT_RESULTS_PER_PAGE = 10
MAX_PAGE_SIZE = 100
DEFAULT_RESULTS_LIMIT = 100
MAX_RESULTS_LIMIT = 200

# Custom Search hard limits: 10 items per call, nothing past start=100.
GOOGLE_MAX_RESULTS_PER_REQUEST = 10
GOOGLE_MAX_API_RESULTS = 100
GOOGLE_REQUEST_TIMEOUT = 15

RATE_LIMIT_WINDOW_SECONDS = 60.0

DATE_POSTED_WINDOWS = {
    "today": 1,
    "week": 7,
    "month": 30,
}

EMPLOYMENT_TYPES = ("full-time", "part-time", "contract", "freelance", "internship")
EXPERIENCE_LEVELS = ("entry", "mid", "senior", "executive")
