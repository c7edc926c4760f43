from __future__ import annotations
from bs4 import BeautifulSoup
import httpx

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

BROWSER_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "he-IL,he;q=0.9,en-US;q=0.8,en;q=0.7",
}


async def fetch_html(url: str, timeout: float = 15, params: dict | None = None) -> str:
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, headers=BROWSER_HEADERS) as client:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
        return resp.text


async def fetch_json(url: str, params: dict | None = None, timeout: float = 15) -> httpx.Response:
    """Return the raw response; API callers inspect error bodies before raising."""
    async with httpx.AsyncClient(timeout=timeout, headers={"Accept": "application/json"}) as client:
        return await client.get(url, params=params)


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def clean_text(el) -> str:
    if el is None:
        return ""
    return " ".join(el.get_text(" ", strip=True).split())
