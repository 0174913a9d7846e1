"""
Browser lifecycle: one Chromium process, one isolated context per mode.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Set

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from .config import RADIX_CUSTOM_URL
from .errors import BrowserLaunchError, SessionUnavailable
from .models import Mode

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1920, "height": 1080}

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
    "--disable-features=TranslateUI",
    "--disable-ipc-flooding-protection",
]


@dataclass
class Session:
    mode: Mode
    context: BrowserContext
    page: Page


class SessionManager:
    def __init__(
        self,
        url: str = RADIX_CUSTOM_URL,
        debug: bool = False,
        keep_warm: bool = False,
        navigation_timeout_ms: int = 30000,
    ):
        self.url = url
        self.debug = debug
        self.keep_warm = keep_warm
        self.navigation_timeout_ms = navigation_timeout_ms

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: Set[BrowserContext] = set()
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def start(self) -> None:
        async with self._lock:
            if self._browser is not None:
                if self._browser.is_connected():
                    return
                logger.warning("Browser disconnected, relaunching")
                self._browser = None
                self._contexts.clear()
                await self._stop_driver()
            try:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(
                    headless=not self.debug,
                    slow_mo=100 if self.debug else 0,
                    args=CHROMIUM_ARGS,
                )
            except PlaywrightError as exc:
                await self._stop_driver()
                raise BrowserLaunchError(f"Chromium could not be launched: {exc}") from exc
            logger.info("Browser started (headless=%s)", not self.debug)

    async def acquire_session(self, mode: Mode) -> Session:
        """Open a fresh context for ``mode`` and load the generator page."""
        await self.start()
        try:
            context = await self._browser.new_context(viewport=VIEWPORT)
        except PlaywrightError as exc:
            raise SessionUnavailable(mode.value, str(exc)) from exc
        self._contexts.add(context)

        try:
            page = await context.new_page()
            await page.goto(self.url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
        except PlaywrightError as exc:
            await self.release_context(context)
            raise SessionUnavailable(mode.value, str(exc)) from exc
        except asyncio.CancelledError:
            await self.release_context(context)
            raise
        return Session(mode=mode, context=context, page=page)

    async def release(self, session: Session) -> None:
        await self.release_context(session.context)

    async def release_context(self, context: BrowserContext) -> None:
        self._contexts.discard(context)
        try:
            await context.close()
        except PlaywrightError as exc:
            logger.debug("Context close failed: %s", exc)

    async def finish(self) -> None:
        """End of a request: keep the process alive only under the keep-warm policy."""
        if not self.keep_warm:
            await self.shutdown()

    async def shutdown(self) -> None:
        async with self._lock:
            for context in list(self._contexts):
                await self.release_context(context)
            if self._browser is not None:
                try:
                    await self._browser.close()
                except PlaywrightError as exc:
                    logger.debug("Browser close failed: %s", exc)
                self._browser = None
                logger.info("Browser closed")
            await self._stop_driver()

    async def _stop_driver(self) -> None:
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except PlaywrightError as exc:
                logger.debug("Playwright driver stop failed: %s", exc)
            self._playwright = None
