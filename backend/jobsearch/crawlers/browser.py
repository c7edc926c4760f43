from __future__ import annotations
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

from jobsearch.core.config import settings
from jobsearch.crawlers.http_helpers import USER_AGENT

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage", "--disable-gpu"]


async def _launch_chromium(headless: bool) -> tuple[Any, Any]:
    from playwright.async_api import async_playwright

    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(headless=headless, args=LAUNCH_ARGS)
    except Exception:
        await playwright.stop()
        raise
    return playwright, browser


class BrowserPool:
    """One shared headless browser, one page per concurrent fetch.

    The browser starts on first use; pages are always closed when the
    `page()` block exits, whether or not the extraction raised.
    """

    def __init__(
        self,
        headless: bool | None = None,
        launcher: Callable[[bool], Awaitable[tuple[Any, Any]]] = _launch_chromium,
    ):
        self.headless = settings.browser_headless if headless is None else headless
        self._launcher = launcher
        self._playwright: Any = None
        self._browser: Any = None
        self._lock = asyncio.Lock()

    @property
    def started(self) -> bool:
        return self._browser is not None

    async def _ensure_browser(self):
        async with self._lock:
            if self._browser is None:
                logger.info("Launching shared headless browser")
                self._playwright, self._browser = await self._launcher(self.headless)
            return self._browser

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Any]:
        browser = await self._ensure_browser()
        page = await browser.new_page(user_agent=USER_AGENT, viewport={"width": 1366, "height": 768})
        try:
            yield page
        finally:
            try:
                await page.close()
            except Exception:  # noqa: BLE001
                logger.debug("Closing browser page failed", exc_info=True)

    async def close(self) -> None:
        async with self._lock:
            if self._browser is not None:
                await self._browser.close()
            if self._playwright is not None:
                await self._playwright.stop()
            self._browser = None
            self._playwright = None
