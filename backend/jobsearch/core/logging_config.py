from __future__ import annotations
import logging
import sys

from jobsearch.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class SensitiveDataFilter(logging.Filter):
    """Mask configured secrets if they ever end up in a log line."""

    def __init__(self, secrets: list[str] | None = None):
        super().__init__()
        self.secrets = [s for s in (secrets or []) if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if self.secrets and isinstance(record.msg, str):
            for secret in self.secrets:
                record.msg = record.msg.replace(secret, "****REDACTED****")
        return True


def setup_logging(level: str | None = None) -> logging.Logger:
    log_level = (level or settings.log_level or "INFO").upper()

    root = logging.getLogger("jobsearch")
    root.setLevel(log_level)
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SensitiveDataFilter([settings.google_api_key]))
    root.addHandler(handler)
    root.propagate = False

    if log_level == "DEBUG":
        root.debug("Debug logging enabled")
    return root
