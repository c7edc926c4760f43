from __future__ import annotations
from jobsearch.db.database import Base, engine
from jobsearch.models import search_run, source  # noqa: F401
from jobsearch.services.seed import seed_sources_if_empty


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
    seed_sources_if_empty()
