"""Best-effort field extraction from free text.

Every function here is pure and tolerant: a miss returns ``None`` (or the
documented default) and never raises. The heuristics are deliberately simple
string/regex matching; mis-extraction is expected and the pipeline copes.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from urllib.parse import unquote

from jobsearch.core.constants import EXPERIENCE_LEVELS

ROLE_WORDS = re.compile(
    r"\b(engineer|developer|manager|designer|analyst|scientist|architect|lead|director|"
    r"specialist|consultant|administrator|devops|qa|tester|intern|programmer|officer|head)\b",
    re.IGNORECASE,
)

KNOWN_JOB_SITES = {"linkedin", "indeed", "glassdoor", "stackoverflow", "alljobs", "drushim", "jobmaster", "techit"}

SITE_LABELS = (
    ("linkedin.com", "LinkedIn"),
    ("indeed.com", "Indeed"),
    ("glassdoor.com", "Glassdoor"),
    ("alljobs.co.il", "AllJobs.co.il"),
    ("drushim.co.il", "Drushim.co.il"),
    ("jobmaster.co.il", "JobMaster.co.il"),
    ("techit.co.il", "TechIT.co.il"),
)

_SEP = r"[-|•·–]"
COMPANY_PATTERNS = (
    re.compile(rf"\bat\s+([^\n|•·–-]+?)(?:\s*{_SEP}|\s*$)", re.IGNORECASE),
    re.compile(rf"^([^\n|•·–-]+?)\s+(?:is\s+)?hiring\b", re.IGNORECASE),
    re.compile(rf"\bjoin\s+([^\n|•·–-]+?)(?:\s*{_SEP}|\s*$)", re.IGNORECASE),
)
TITLE_SPLIT = re.compile(r"\s+[-|–]\s+")

KNOWN_CITIES = re.compile(
    r"\b(Tel Aviv|Jerusalem|Haifa|Beer Sheva|Herzliya|Ramat Gan|Petah Tikva|Raanana|Netanya|Rehovot|"
    r"New York|London|San Francisco|Los Angeles|Chicago|Seattle|Boston|Austin|Berlin)\b",
    re.IGNORECASE,
)
CITY_STATE = re.compile(r"\b([A-Z][a-zA-Z]+(?:\s[A-Z][a-zA-Z]+)*,\s*[A-Z]{2})\b")
LOCATED_IN = re.compile(r"\blocated in\s+([A-Z][A-Za-z\s]+?)(?:[,.]|$)")
REMOTE = re.compile(r"\b(remote|work from home|wfh|anywhere)\b|מהבית", re.IGNORECASE)

_CUR = r"[\$₪€£]"
SALARY_PATTERNS = (
    re.compile(rf"{_CUR}\s*\d[\d,.]*k?(?:\s*[-–]\s*{_CUR}?\s*\d[\d,.]*k?)?", re.IGNORECASE),
    re.compile(
        r"\b\d{1,3}(?:,\d{3})*k?(?:\s*[-–]\s*\d{1,3}(?:,\d{3})*k?)?\s*(?:USD|EUR|ILS|NIS|GBP|per\s+year|annually)\b",
        re.IGNORECASE,
    ),
    re.compile(rf"salary[:\s]*{_CUR}?\s*\d[\d,]*", re.IGNORECASE),
)

EMPLOYMENT_PATTERNS = (
    ("internship", re.compile(r"\b(intern|internship|student position)\b", re.IGNORECASE)),
    ("freelance", re.compile(r"\b(freelance|freelancer|independent)\b", re.IGNORECASE)),
    ("contract", re.compile(r"\b(contract|contractor|consultant|temporary)\b", re.IGNORECASE)),
    ("part-time", re.compile(r"\bpart[\s-]?time\b|משרה חלקית", re.IGNORECASE)),
    ("full-time", re.compile(r"\b(full[\s-]?time|permanent)\b|משרה מלאה", re.IGNORECASE)),
)

EXPERIENCE_PATTERNS = (
    ("executive", re.compile(r"\b(director|vp|vice president|head of|chief|cto|ceo|cfo)\b", re.IGNORECASE)),
    ("senior", re.compile(r"\b(senior|sr\.?|lead|principal|staff)\b|בכיר", re.IGNORECASE)),
    ("entry", re.compile(r"\b(junior|jr\.?|entry|graduate|intern|trainee)\b|זוטר|מתמחה", re.IGNORECASE)),
)

EMPLOYMENT_ALIASES = {
    "full time": "full-time",
    "fulltime": "full-time",
    "full_time": "full-time",
    "part time": "part-time",
    "part_time": "part-time",
    "contractor": "contract",
    "temporary": "contract",
    "intern": "internship",
}
EXPERIENCE_ALIASES = {"junior": "entry", "mid-level": "mid", "middle": "mid", "lead": "senior"}

DAYS_AGO = re.compile(r"(\d+)\s*(hour|hr|day|week|wk|month|mo)s?\s+ago", re.IGNORECASE)
ISO_DATE = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")

TECH_TERMS = re.compile(
    r"\b(JavaScript|TypeScript|React|Vue|Angular|Node\.js|Node|Python|Java|C#|PHP|Ruby|Go|Rust|SQL|NoSQL|"
    r"MongoDB|PostgreSQL|Redis|AWS|Azure|GCP|Docker|Kubernetes|Git|GraphQL|REST|Microservices|DevOps|CI/CD)"
    r"(?![\w#])",
    re.IGNORECASE,
)
REQUIREMENT_PATTERNS = (
    TECH_TERMS,
    re.compile(r"\b\d+\+?\s*years?\s+(?:of\s+)?experience\b", re.IGNORECASE),
    re.compile(r"\b(bachelor|degree|university|college)\b", re.IGNORECASE),
    re.compile(r"\b(english|hebrew|arabic)\b", re.IGNORECASE),
)
BENEFIT_PATTERNS = (
    re.compile(r"\b(health\s+insurance|medical|dental|vision)\b", re.IGNORECASE),
    re.compile(r"\b(vacation|PTO|paid\s+time\s+off)\b", re.IGNORECASE),
    re.compile(r"\b(401k|pension|retirement)\b", re.IGNORECASE),
    re.compile(r"\b(stock\s+options|equity|RSU)\b", re.IGNORECASE),
    re.compile(r"\b(remote|work\s+from\s+home|flexible\s+hours|hybrid)\b", re.IGNORECASE),
    re.compile(r"\b(professional\s+development|training|education)\b", re.IGNORECASE),
)


def collapse(text: str | None) -> str:
    return " ".join((text or "").split())


def clean_title(title: str | None) -> str:
    text = collapse(title)
    text = re.sub(r"\s*[-–]\s*(LinkedIn|Indeed|Glassdoor|AllJobs|Drushim|JobMaster)\b.*$", "", text, flags=re.IGNORECASE)
    text = re.sub(r"\s*\|.*$", "", text)
    return text.strip()


def clean_description(text: str | None, max_len: int = 4000) -> str:
    cleaned = re.sub(r"\.{3,}", "...", collapse(text))
    return cleaned[:max_len]


def clean_url(url: str | None, fallback: str = "") -> str:
    raw = (url or "").strip()
    if not raw:
        return fallback
    if re.match(r"^https?://www\.google\.com/url\?q=", raw):
        raw = unquote(raw.split("q=", 1)[1].split("&", 1)[0])
    if not raw.startswith(("http://", "https://")):
        raw = f"https://{raw.lstrip('/')}"
    return raw


def _company_ok(candidate: str) -> bool:
    return 2 < len(candidate) < 50


def extract_company(title: str | None, display_link: str | None = None) -> str | None:
    """Company from "Title at Company", "Company is hiring", "Company - Title" or the result domain."""
    text = collapse(title)
    for pattern in COMPANY_PATTERNS:
        match = pattern.search(text)
        if match:
            candidate = match.group(1).strip()
            if _company_ok(candidate) and not ROLE_WORDS.search(candidate):
                return candidate

    parts = [p.strip() for p in TITLE_SPLIT.split(text) if p.strip()]
    if len(parts) > 1:
        for part in parts:
            if _company_ok(part) and not ROLE_WORDS.search(part) and part.lower().split(".")[0] not in KNOWN_JOB_SITES:
                return part

    if display_link:
        domain = re.sub(r"^www\.", "", display_link.strip().lower()).split(".")[0]
        if domain and domain not in KNOWN_JOB_SITES:
            return domain.capitalize()
    return None


def extract_location(text: str | None) -> str | None:
    text = collapse(text)
    if not text:
        return None
    match = KNOWN_CITIES.search(text)
    if match:
        return match.group(1)
    match = CITY_STATE.search(text)
    if match:
        return match.group(1)
    match = LOCATED_IN.search(text)
    if match:
        return match.group(1).strip()
    if REMOTE.search(text):
        return "Remote"
    return None


def extract_salary(text: str | None) -> str | None:
    text = collapse(text)
    for pattern in SALARY_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()
    return None


def normalize_employment_type(value: str | None) -> str | None:
    raw = collapse(value).lower()
    if not raw or raw == "unknown":
        return None
    raw = EMPLOYMENT_ALIASES.get(raw, raw)
    for name, pattern in EMPLOYMENT_PATTERNS:
        if name == raw or pattern.search(raw):
            return name
    return None


def extract_employment_type(text: str | None, default: str = "full-time") -> str:
    text = collapse(text)
    for name, pattern in EMPLOYMENT_PATTERNS:
        if pattern.search(text):
            return name
    return default


def normalize_experience_level(value: str | None) -> str | None:
    raw = collapse(value).lower()
    if not raw:
        return None
    raw = EXPERIENCE_ALIASES.get(raw, raw)
    if raw in EXPERIENCE_LEVELS:
        return raw
    return None


def extract_experience_level(text: str | None, default: str = "mid") -> str:
    text = collapse(text)
    for name, pattern in EXPERIENCE_PATTERNS:
        if pattern.search(text):
            return name
    return default


def is_remote(text: str | None) -> bool:
    return bool(REMOTE.search(text or ""))


def extract_posted_date(text: str | None, today: date | None = None) -> date | None:
    today = today or date.today()
    text = collapse(text).lower()
    if not text:
        return None
    if "yesterday" in text:
        return today - timedelta(days=1)
    if "today" in text or "just posted" in text or "just now" in text:
        return today
    match = DAYS_AGO.search(text)
    if match:
        value = int(match.group(1))
        unit = match.group(2)
        if unit in {"hour", "hr"}:
            return today
        if unit in {"week", "wk"}:
            return today - timedelta(weeks=value)
        if unit in {"month", "mo"}:
            return today - timedelta(days=value * 30)
        return today - timedelta(days=value)
    match = ISO_DATE.search(text)
    if match:
        try:
            return datetime.strptime(match.group(1), "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def _unique_matches(pattern: re.Pattern, text: str, cap: int) -> list[str]:
    found: list[str] = []
    for match in pattern.finditer(text):
        value = match.group(0)
        if value.lower() not in {f.lower() for f in found}:
            found.append(value)
        if len(found) >= cap:
            break
    return found


def extract_requirements(text: str | None, keywords: str) -> list[str]:
    text = collapse(text)
    requirements = [keywords]
    for pattern in REQUIREMENT_PATTERNS:
        requirements.extend(_unique_matches(pattern, text, 3))
    return requirements[:8]


def extract_keywords(text: str | None, keywords: str) -> list[str]:
    terms = [m.lower() for m in _unique_matches(TECH_TERMS, collapse(text), 5)]
    return [keywords.lower(), *terms]


def extract_benefits(text: str | None) -> list[str]:
    text = collapse(text)
    benefits: list[str] = []
    for pattern in BENEFIT_PATTERNS:
        benefits.extend(_unique_matches(pattern, text, 2))
    return benefits[:5]


def site_label(link: str | None) -> str:
    lower = (link or "").lower()
    for needle, label in SITE_LABELS:
        if needle in lower:
            return label
    return "Job Board"
