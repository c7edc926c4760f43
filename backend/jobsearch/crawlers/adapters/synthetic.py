from __future__ import annotations

import random
from uuid import uuid4

from jobsearch.core.config import settings
from jobsearch.crawlers.base import FetcherKind, RawJob, SourceFetcher

TITLE_PREFIXES = ("", "Junior", "Senior", "Team Lead")
COMPANIES = (
    "Wix",
    "Monday.com",
    "Check Point",
    "CyberArk",
    "Fiverr",
    "Playtika",
    "Elbit Systems",
    "NICE",
)
LOCATIONS = ("Tel Aviv", "Jerusalem", "Haifa", "Herzliya", "Ramat Gan", "Petah Tikva", "Remote")
EXPERIENCE = ("entry", "mid", "senior")
TECH_STACKS = (
    ("AWS", "Docker"),
    ("Azure", "Kubernetes"),
    ("MongoDB", "Redis"),
    ("React", "TypeScript"),
    ("Python", "Django"),
    ("Java", "Spring"),
)
BENEFITS = ("Pension fund", "Stock options", "Hybrid work", "Training budget", "Health insurance")
MAX_AGE_DAYS = 14


class SyntheticFetcher(SourceFetcher):
    """Template-generated placeholder postings, labelled as such in `source`.

    Useful in development and as the one source that never depends on the
    network. Pass `seed` for reproducible output.
    """

    source_name = "synthetic"
    kind = FetcherKind.SYNTHETIC
    timeout = 10

    def __init__(self, seed: int | None = None, **kwargs):
        super().__init__(**kwargs)
        self._rng = random.Random(settings.synthetic_seed if seed is None else seed)

    def _title(self, keywords: str) -> str:
        prefix = self._rng.choice(TITLE_PREFIXES)
        return f"{prefix} {keywords} Developer".strip()

    def _salary(self) -> str:
        base = self._rng.randint(8_000, 23_000)
        high = base + self._rng.randint(1_000, 8_000)
        return f"₪{base:,}-{high:,}"

    def _description(self, keywords: str, company: str) -> str:
        return (
            f"{company} is looking for a talented {keywords} developer to join our growing team. "
            f"Requirements: {keywords} development experience, strong problem-solving skills, "
            "Hebrew and English proficiency."
        )

    async def _fetch(self, keywords: str, location: str, limit: int) -> list[RawJob]:
        batch = uuid4().hex[:8]
        jobs: list[RawJob] = []
        for i in range(limit):
            company = self._rng.choice(COMPANIES)
            days_ago = self._rng.randint(0, MAX_AGE_DAYS)
            jobs.append(
                RawJob(
                    source_job_id=f"{batch}-{i}",
                    title=self._title(keywords),
                    company=company,
                    location=location or self._rng.choice(LOCATIONS),
                    description=self._description(keywords, company),
                    salary=self._salary(),
                    employment_type="full-time",
                    experience_level=self._rng.choice(EXPERIENCE),
                    posted_text="today" if days_ago == 0 else f"{days_ago} days ago",
                    url=f"https://example.com/jobs/{batch}-{i}",
                    requirements=[keywords, "Git", "Agile", *self._rng.choice(TECH_STACKS)],
                    benefits=self._rng.sample(BENEFITS, 2),
                    raw_payload={"site": "synthetic", "generated": True},
                )
            )
        return jobs
