from __future__ import annotations
import os

# Must be set before jobsearch.core.config is imported anywhere.
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ENV"] = "dev"
os.environ["GOOGLE_API_KEY"] = ""
os.environ["GOOGLE_SEARCH_ENGINE_ID"] = ""
