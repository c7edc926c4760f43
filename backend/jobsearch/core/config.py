from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Job Search Aggregator"
    env: str = "dev"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    database_url: str = "sqlite+pysqlite:///./jobsearch.db"

    google_api_key: str = ""
    google_search_engine_id: str = ""

    default_rate_limit_per_minute: int = 10

    browser_headless: bool = True
    synthetic_seed: int | None = None

    @property
    def is_production(self) -> bool:
        return self.env.lower() in {"prod", "production"}


settings = Settings()
