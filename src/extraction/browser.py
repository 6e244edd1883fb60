"""Per-fetch browser page acquisition."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncContextManager, AsyncIterator, Protocol

from playwright.async_api import Browser, Page, async_playwright

if TYPE_CHECKING:
    from src.config import Settings

logger = logging.getLogger(__name__)


class PageProvider(Protocol):
    """Protocol for page providers.

    ``page()`` yields a fresh page that is closed when the context exits,
    whether the body finished, raised or was cancelled.
    """

    def page(self) -> AsyncContextManager[Page]: ...


class PlaywrightPageProvider:
    """Hands out isolated Chromium pages.

    With a ``browser`` every fetch gets its own context on that browser;
    without one, each fetch launches and tears down a private browser.
    """

    def __init__(
        self,
        *,
        browser: Browser | None = None,
        headless: bool = True,
        user_agent: str | None = None,
        viewport_width: int = 1280,
        viewport_height: int = 800,
    ) -> None:
        self._browser = browser
        self._headless = headless
        self._user_agent = user_agent
        self._viewport = {"width": viewport_width, "height": viewport_height}

    @classmethod
    def from_settings(cls, settings: Settings, browser: Browser | None = None) -> PlaywrightPageProvider:
        return cls(
            browser=browser,
            headless=settings.browser_headless,
            user_agent=settings.user_agent,
            viewport_width=settings.viewport_width,
            viewport_height=settings.viewport_height,
        )

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        if self._browser is not None:
            async with self._context_page(self._browser) as page:
                yield page
            return

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self._headless)
            try:
                async with self._context_page(browser) as page:
                    yield page
            finally:
                await browser.close()

    @asynccontextmanager
    async def _context_page(self, browser: Browser) -> AsyncIterator[Page]:
        context = await browser.new_context(
            user_agent=self._user_agent,
            viewport=self._viewport,
        )
        try:
            page = await context.new_page()
            yield page
        finally:
            await context.close()
            logger.debug("browser context closed")


@asynccontextmanager
async def launch_browser(settings: Settings) -> AsyncIterator[Browser]:
    """Launch a Chromium browser for the lifetime of the application."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=settings.browser_headless)
        logger.info("browser launched", extra={"headless": settings.browser_headless})
        try:
            yield browser
        finally:
            await browser.close()
            logger.info("browser closed")
